"""fieldguard - 统一异常定义.

集中维护异常类型、错误种类(ErrorKind)与字段路径的表示.

说明:
- 本模块只负责定义异常类型与语义字段,不感知 HTTP/Flask.
- 异常到 HTTP status 的映射在 API 边界完成(见 `fieldguard/api/error_mapping.py`).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from fieldguard.constants.system_constants import ErrorCategory, ErrorMessages, ErrorSeverity

if TYPE_CHECKING:
    from fieldguard.types.structures import FieldPath, JsonDict, LoggerExtra


@dataclass(frozen=True, slots=True)
class ExceptionMetadata:
    """异常的元信息(不包含传输层信息)."""

    category: ErrorCategory
    severity: ErrorSeverity
    default_message_key: str


class AppError(Exception):
    """统一的基础异常.

    Args:
        message: 自定义错误文案,若为空则根据 ``message_key`` 推导.
        message_key: 自定义消息键.
        extra: 结构化日志附加字段.
        severity: 错误严重度.
        category: 错误分类.
    """

    metadata = ExceptionMetadata(
        category=ErrorCategory.SYSTEM,
        severity=ErrorSeverity.HIGH,
        default_message_key="INTERNAL_ERROR",
    )

    def __init__(
        self,
        message: str | None = None,
        *,
        message_key: str | None = None,
        extra: LoggerExtra | None = None,
        severity: ErrorSeverity | None = None,
        category: ErrorCategory | None = None,
    ) -> None:
        """初始化基础异常.

        Args:
            message: 直接使用的错误提示,缺省时会根据 message_key 推导.
            message_key: 覆盖默认 message_key 的可选值.
            extra: 结构化日志附加字段.
            severity: 错误严重度.
            category: 错误分类.
        """
        self.message_key = message_key or self.metadata.default_message_key
        self.message = message or getattr(ErrorMessages, self.message_key, ErrorMessages.INTERNAL_ERROR)
        self.extra = dict(extra or {})
        self.severity = severity or self.metadata.severity
        self.category = category or self.metadata.category
        super().__init__(self.message)

    @property
    def recoverable(self) -> bool:
        """表示该异常是否可恢复."""

        return self.severity in (ErrorSeverity.LOW, ErrorSeverity.MEDIUM)


class ValidationError(AppError):
    """表示输入参数或请求体验证失败."""

    metadata = ExceptionMetadata(
        category=ErrorCategory.VALIDATION,
        severity=ErrorSeverity.LOW,
        default_message_key="VALIDATION_ERROR",
    )


class SchemaDefinitionError(AppError, ValueError):
    """表示字段声明本身不合法(例如默认值类型与字段类型不符).

    属于编程错误,在路由注册阶段即抛出,不会出现在请求校验路径上.
    """

    metadata = ExceptionMetadata(
        category=ErrorCategory.SCHEMA,
        severity=ErrorSeverity.HIGH,
        default_message_key="SCHEMA_DEFINITION_ERROR",
    )


class ErrorKind(Enum):
    """字段校验失败的种类.

    调用方应按种类分支,而不是匹配错误文案.
    """

    REQUIRED = "required"
    WRONG_TYPE = "wrong_type"
    MINIMUM = "minimum"
    MAXIMUM = "maximum"
    ENUM_NOT_FOUND = "enum_not_found"
    UNKNOWN = "unknown"

    @property
    def message_key(self) -> str:
        return f"FIELD_{self.name}"


def format_field_path(path: FieldPath) -> str:
    """将字段路径渲染为 ``a.b[0].c`` 形式.

    Args:
        path: 由对象键(str)与数组下标(int)组成的路径元组.

    Returns:
        渲染后的路径,根节点为空字符串.

    """
    rendered = ""
    for segment in path:
        if isinstance(segment, int):
            rendered += f"[{segment}]"
        elif rendered:
            rendered += f".{segment}"
        else:
            rendered = segment
    return rendered


class FieldValidationError(ValidationError):
    """单个字段的校验失败.

    Attributes:
        kind: 失败种类.
        path: 出错字段的路径(数据形式,非拼接字符串).
        section: 出错所在的请求部分(path/query/body),由编排层补充.
    """

    def __init__(
        self,
        kind: ErrorKind,
        path: FieldPath = (),
        *,
        section: str | None = None,
        detail: str | None = None,
    ) -> None:
        self.kind = kind
        self.path = tuple(path)
        self.section = section
        self.detail = detail
        super().__init__(
            self._render_message(),
            message_key=kind.message_key,
            extra={"kind": kind.value, "field": self.field, "section": section},
        )

    @property
    def field(self) -> str:
        """渲染后的字段路径,例如 ``complex1.array[0].id``."""
        return format_field_path(self.path)

    def in_section(self, section: str) -> FieldValidationError:
        """返回绑定到指定请求部分的同种错误."""
        return FieldValidationError(self.kind, self.path, section=section, detail=self.detail)

    def to_dict(self) -> JsonDict:
        """转换为可序列化的错误载荷."""
        return {
            "kind": self.kind.value,
            "section": self.section,
            "field": self.field,
            "message": self.message,
        }

    def _render_message(self) -> str:
        base = getattr(ErrorMessages, self.kind.message_key, ErrorMessages.VALIDATION_ERROR)
        location = ".".join(part for part in (self.section, self.field) if part)
        message = f"{location}: {base}" if location else base
        if self.detail:
            message = f"{message} ({self.detail})"
        return message


__all__ = [
    "AppError",
    "ErrorKind",
    "FieldValidationError",
    "SchemaDefinitionError",
    "ValidationError",
    "format_field_path",
]
