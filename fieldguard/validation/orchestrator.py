"""请求校验入口.

`RequestValidator` 针对一个端点声明的三段 schema(path/query/body)依次校验
调用方已经提取好的输入:

1. path  - 单值字符串映射, STRING 模式;
2. query - 多值字符串映射, STRING 模式;
3. body  - JSON 解码后的值, TYPED 模式.

顺序固定为 path -> query -> body, 第一个失败的部分直接抛出, 不做多错误聚合.
校验成功时输入容器可能已被原地修改(补默认值、剥离未知键), 调用方据
`ValidationOutcome` 上的标记决定是否重新编码.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from fieldguard.errors import ErrorKind, FieldValidationError
from fieldguard.utils.structlog_config import get_validation_logger
from fieldguard.validation.containers import PathContainer, QueryContainer
from fieldguard.validation.evaluator import FieldEvaluator, SourceMode
from fieldguard.validation.policy import UnknownKeyPolicy

if TYPE_CHECKING:
    from fieldguard.schema.fields import Field
    from fieldguard.settings import Settings
    from fieldguard.types.structures import BodyValue, PathValues, QueryValues

SECTION_PATH = "path"
SECTION_QUERY = "query"
SECTION_BODY = "body"


@dataclass(frozen=True, slots=True)
class RequestSchemas:
    """一个端点的三段 schema, 未声明的部分保持 None(或未初始化的 Field)."""

    path: Field | None = None
    query: Field | None = None
    body: Field | None = None


@dataclass(slots=True)
class ValidationOutcome:
    """一次成功校验的结果.

    Attributes:
        path: 规范化后的 path 参数(未声明 path schema 时为 None).
        query: 规范化后的 query 参数(未声明 query schema 时为 None).
        body: 校验后的请求体(与传入对象为同一个, 可能已被原地修改).
        query_values: 校验后的 query 容器, 调用方据此重新编码查询串.
        query_modified: query 容器是否被补默认值或剥离键.
        body_modified: 请求体是否被补默认值或剥离键.
        path_modified: path 容器是否被补默认值或剥离键.
    """

    path: dict[str, object] | None = None
    query: dict[str, object] | None = None
    body: BodyValue = None
    query_values: QueryValues | None = None
    query_modified: bool = False
    body_modified: bool = False
    path_modified: bool = False


def _declared(schema: Field | None) -> bool:
    return schema is not None and schema.initialized


class RequestValidator:
    """端点输入校验器.

    路由级未知键策略在构造时确定, 之后不随请求变化; 同一个实例可被并发请求共享.

    Example:
        >>> validator = RequestValidator(strip_unknown=True)
        >>> schemas = RequestSchemas(query=Field.object({"page": Field.integer().default(1)}))
        >>> outcome = validator.validate(schemas, query={})
        >>> outcome.query
        {'page': 1}

    """

    def __init__(self, *, allow_unknown: bool = True, strip_unknown: bool = False) -> None:
        self.policy = UnknownKeyPolicy(allow_unknown=allow_unknown, strip_unknown=strip_unknown)
        self.logger = get_validation_logger()

    @classmethod
    def from_settings(cls, settings: Settings) -> RequestValidator:
        """按配置中的路由级默认策略构造校验器."""
        return cls(allow_unknown=settings.allow_unknown, strip_unknown=settings.strip_unknown)

    @property
    def allow_unknown(self) -> bool:
        return self.policy.allow_unknown

    @property
    def strip_unknown(self) -> bool:
        return self.policy.strip_unknown

    def validate(
        self,
        schemas: RequestSchemas,
        query: QueryValues | None = None,
        body: BodyValue = None,
        path: PathValues | None = None,
    ) -> ValidationOutcome:
        """校验一次请求的三段输入.

        Args:
            schemas: 端点声明的三段 schema.
            query: 多值 query 映射, 会被原地修改.
            body: JSON 解码后的请求体, None 表示没有请求体.
            path: path 参数映射, 会被原地修改.

        Returns:
            ValidationOutcome: 规范化结果与修改标记.

        Raises:
            FieldValidationError: 任一部分校验失败(已标注 section).

        """
        outcome = ValidationOutcome(body=body)
        try:
            if _declared(schemas.path):
                outcome.path, outcome.path_modified = self._validate_path(schemas.path, path)
            if _declared(schemas.query):
                query_values = query if query is not None else {}
                outcome.query, outcome.query_modified = self._validate_query(schemas.query, query_values)
                outcome.query_values = query_values
            if _declared(schemas.body):
                outcome.body, outcome.body_modified = self._validate_body(schemas.body, body)
        except FieldValidationError as exc:
            self.logger.info(
                "请求参数校验失败",
                module="validation",
                section=exc.section,
                kind=exc.kind.value,
                field=exc.field,
            )
            raise

        self.logger.debug(
            "请求参数校验通过",
            module="validation",
            query_modified=outcome.query_modified,
            body_modified=outcome.body_modified,
        )
        return outcome

    def _validate_path(self, schema: Field, values: PathValues | None) -> tuple[dict[str, object], bool]:
        container = PathContainer(values if values is not None else {})
        normalized = self._run(schema, container, SourceMode.STRING, SECTION_PATH)
        return normalized, container.modified  # type: ignore[return-value]

    def _validate_query(self, schema: Field, values: QueryValues) -> tuple[dict[str, object], bool]:
        container = QueryContainer(values)
        normalized = self._run(schema, container, SourceMode.STRING, SECTION_QUERY)
        return normalized, container.modified  # type: ignore[return-value]

    def _validate_body(self, schema: Field, body: BodyValue) -> tuple[BodyValue, bool]:
        # 声明了 body schema 却完全没有请求体时, 无论根字段是否 required 都报 Required.
        if body is None:
            raise FieldValidationError(ErrorKind.REQUIRED, section=SECTION_BODY)
        evaluator = FieldEvaluator(self.policy, SourceMode.TYPED)
        normalized = self._evaluate(evaluator, schema, body, SECTION_BODY)
        return normalized, evaluator.modified  # type: ignore[return-value]

    def _run(self, schema: Field, value: object, mode: SourceMode, section: str) -> object:
        return self._evaluate(FieldEvaluator(self.policy, mode), schema, value, section)

    @staticmethod
    def _evaluate(evaluator: FieldEvaluator, schema: Field, value: object, section: str) -> object:
        try:
            return evaluator.evaluate(schema, value)
        except FieldValidationError as exc:
            raise exc.in_section(section) from None


__all__ = [
    "SECTION_BODY",
    "SECTION_PATH",
    "SECTION_QUERY",
    "RequestSchemas",
    "RequestValidator",
    "ValidationOutcome",
]
