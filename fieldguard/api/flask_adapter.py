"""Flask 集成.

`FlaskAdapter` 把 `RouteSpec` 挂载到 Flask 应用或蓝图上, 每个视图按以下顺序执行:

1. 从请求中提取 path 参数、query(可写副本)与请求体;
2. 按路由级策略校验, 失败时直接返回 400 JSON;
3. 校验通过后把结果与重新编码的 query/请求体放入 ``flask.g``;
4. 依次执行前置处理器, 最后调用处理函数.

路由匹配本身由 Flask 完成.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
from typing import TYPE_CHECKING, Any

from flask import Blueprint, Flask, g, request

from fieldguard.api.response_utils import jsonify_unified_error
from fieldguard.api.routes import PATH_PARAM_PATTERN
from fieldguard.constants import ErrorMessages
from fieldguard.errors import FieldValidationError, ValidationError
from fieldguard.schema.fields import Kind
from fieldguard.utils.request_codec import decode_json_body, encode_json_body, encode_query
from fieldguard.utils.structlog_config import get_api_logger, structlog_config

if TYPE_CHECKING:
    from fieldguard.api.router import Router
    from fieldguard.api.routes import Handler, RouteSpec
    from fieldguard.validation.orchestrator import ValidationOutcome

_G_ATTRIBUTE = "fieldguard_validation"


@dataclass(frozen=True, slots=True)
class ValidatedRequest:
    """一次通过校验的请求.

    Attributes:
        outcome: 校验结果.
        query_string: 校验后的查询串; 未被修改时与原始查询串一致.
        body: 校验后的请求体字节; 未被修改时与原始请求体一致.
    """

    outcome: ValidationOutcome
    query_string: str
    body: bytes


def current_validation() -> ValidatedRequest | None:
    """返回当前请求的校验结果, 不在已挂载路由的请求中时返回 None."""
    return g.get(_G_ATTRIBUTE)


def to_flask_rule(path: str) -> str:
    """把 ``/widgets/{id}`` 形式的路径模板转换为 Flask 规则 ``/widgets/<id>``."""
    return PATH_PARAM_PATTERN.sub(r"<\1>", path)


class FlaskAdapter:
    """把路由挂载到 Flask 应用或蓝图.

    Example:
        >>> app = Flask(__name__)
        >>> router = Router(FlaskAdapter(app))
        >>> router.add(RouteSpec("/widgets/{id}", "GET", show_widget, validate=schemas))

    """

    def __init__(self, target: Flask | Blueprint) -> None:
        self.target = target
        if isinstance(target, Flask):
            structlog_config.configure(target)
        self.logger = get_api_logger()

    def install(self, router: Router, route: RouteSpec) -> None:
        view = route.handler
        for pre_handler in reversed(route.pre_handlers):
            view = pre_handler(view)
        self.target.add_url_rule(
            to_flask_rule(route.path),
            endpoint=route.endpoint_name,
            view_func=self._validation_view(router, route, view),
            methods=[route.normalized_method],
        )

    def _validation_view(self, router: Router, route: RouteSpec, view: Handler) -> Handler:
        schemas = route.validate
        body_declared = schemas.body is not None and schemas.body.initialized

        @wraps(route.handler)
        def validated_view(**path_kwargs: Any) -> Any:  # noqa: ANN401
            # 先解析表单, 上传内容才能从 request.files 读取.
            raw_body = request.get_data(cache=True, parse_form_data=True)
            query_values = request.args.copy()
            path_values = {key: str(value) for key, value in path_kwargs.items()}

            body: object = None
            if body_declared:
                if schemas.body.kind is Kind.FILE:
                    body = request.files or raw_body or None
                else:
                    try:
                        body = decode_json_body(raw_body)
                    except ValueError as exc:
                        error = ValidationError(
                            ErrorMessages.BODY_DECODE_ERROR.format(reason=exc),
                            message_key="BODY_DECODE_ERROR",
                        )
                        self.logger.warning("请求体解码失败", module="api", endpoint=route.endpoint_name, error=str(exc))
                        return jsonify_unified_error(error)

            try:
                outcome = router.validate(schemas, query=query_values, body=body, path=path_values)
            except FieldValidationError as exc:
                self.logger.warning(
                    "请求参数校验未通过",
                    module="api",
                    endpoint=route.endpoint_name,
                    section=exc.section,
                    kind=exc.kind.value,
                    field=exc.field,
                )
                return jsonify_unified_error(exc)

            query_string = request.query_string.decode("utf-8")
            if outcome.query_modified and outcome.query_values is not None:
                query_string = encode_query(outcome.query_values)
            body_bytes = raw_body
            if outcome.body_modified:
                body_bytes = encode_json_body(outcome.body)

            setattr(g, _G_ATTRIBUTE, ValidatedRequest(outcome=outcome, query_string=query_string, body=body_bytes))
            return view(**path_kwargs)

        return validated_view


__all__ = ["FlaskAdapter", "ValidatedRequest", "current_validation", "to_flask_rule"]
