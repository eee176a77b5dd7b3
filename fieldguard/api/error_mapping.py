"""fieldguard - 异常与 HTTP 响应映射(API 边界).

说明:
- 异常定义位于 `fieldguard/errors.py`, 不感知 HTTP.
- 本模块负责将异常映射为对外 HTTP 状态码与错误载荷, 仅应在 HTTP 边界调用.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from werkzeug.exceptions import HTTPException

from fieldguard.constants import HttpStatus
from fieldguard.errors import AppError, FieldValidationError, SchemaDefinitionError, ValidationError

if TYPE_CHECKING:
    from fieldguard.types.structures import JsonDict

_EXCEPTION_STATUS_MAP: tuple[tuple[type[Exception], int], ...] = (
    (ValidationError, HttpStatus.BAD_REQUEST),
    (SchemaDefinitionError, HttpStatus.INTERNAL_SERVER_ERROR),
)


def map_exception_to_status(error: Exception, default: int = HttpStatus.INTERNAL_SERVER_ERROR) -> int:
    """根据异常类型推导 HTTP 状态码."""

    for exc_type, status in _EXCEPTION_STATUS_MAP:
        if isinstance(error, exc_type):
            return status

    if isinstance(error, AppError):
        return default

    if isinstance(error, HTTPException):
        code = getattr(error, "code", None)
        if code is not None:
            return int(code)

    return default


def build_error_payload(error: AppError) -> JsonDict:
    """生成统一的错误响应载荷.

    Args:
        error: 项目内异常.

    Returns:
        包含 message/message_key 的字典; 字段校验错误额外包含 kind/section/field.

    """
    payload: JsonDict = {
        "success": False,
        "error": True,
        "message": error.message,
        "message_key": error.message_key,
        "category": error.category.value,
        "recoverable": error.recoverable,
    }
    if isinstance(error, FieldValidationError):
        payload.update(error.to_dict())
    return payload


__all__ = ["build_error_payload", "map_exception_to_status"]
