"""路由器: 持有路由级校验策略, 并把路由表交给适配器挂载."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from fieldguard.errors import SchemaDefinitionError
from fieldguard.settings import Settings
from fieldguard.utils.structlog_config import get_api_logger
from fieldguard.validation.orchestrator import RequestValidator

if TYPE_CHECKING:
    from fieldguard.api.routes import RouteSpec
    from fieldguard.types.structures import BodyValue, PathValues, QueryValues
    from fieldguard.validation.orchestrator import RequestSchemas, ValidationOutcome


class RouteAdapter(Protocol):
    """把路由挂载到具体 Web 框架上的适配器."""

    def install(self, router: Router, route: RouteSpec) -> None: ...


class Router:
    """路由表与校验器的组合.

    Args:
        adapter: Web 框架适配器.
        settings: 运行时配置, 缺省时从环境变量加载.
        allow_unknown: 覆盖配置中的路由级 allow_unknown.
        strip_unknown: 覆盖配置中的路由级 strip_unknown.
    """

    def __init__(
        self,
        adapter: RouteAdapter,
        *,
        settings: Settings | None = None,
        allow_unknown: bool | None = None,
        strip_unknown: bool | None = None,
    ) -> None:
        resolved = settings or Settings.load()
        self.adapter = adapter
        self.validator = RequestValidator(
            allow_unknown=resolved.allow_unknown if allow_unknown is None else allow_unknown,
            strip_unknown=resolved.strip_unknown if strip_unknown is None else strip_unknown,
        )
        self._routes: list[RouteSpec] = []
        self.logger = get_api_logger()

    @property
    def routes(self) -> tuple[RouteSpec, ...]:
        return tuple(self._routes)

    def add(self, *routes: RouteSpec) -> None:
        """登记并挂载路由.

        Raises:
            SchemaDefinitionError: 路由声明不合法或与已登记路由重复.

        """
        for route in routes:
            route.validate_definition()
            key = (route.normalized_method, route.path)
            if any((existing.normalized_method, existing.path) == key for existing in self._routes):
                raise SchemaDefinitionError(f"路由重复: {route.normalized_method} {route.path}")
            self.adapter.install(self, route)
            self._routes.append(route)
            self.logger.info(
                "路由已挂载",
                module="api",
                method=route.normalized_method,
                path=route.path,
                endpoint=route.endpoint_name,
                summary=route.summary,
                tags=list(route.tags),
            )

    def validate(
        self,
        schemas: RequestSchemas,
        query: QueryValues | None = None,
        body: BodyValue = None,
        path: PathValues | None = None,
    ) -> ValidationOutcome:
        """按路由级策略校验一次请求, 见 `RequestValidator.validate`."""
        return self.validator.validate(schemas, query=query, body=body, path=path)


__all__ = ["RouteAdapter", "Router"]
