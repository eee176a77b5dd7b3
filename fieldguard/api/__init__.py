"""HTTP 集成层: 路由表、路由器、Flask 适配器与错误响应映射."""

from fieldguard.api.error_mapping import build_error_payload, map_exception_to_status
from fieldguard.api.flask_adapter import FlaskAdapter, ValidatedRequest, current_validation, to_flask_rule
from fieldguard.api.router import RouteAdapter, Router
from fieldguard.api.routes import RouteSpec

__all__ = [
    "FlaskAdapter",
    "RouteAdapter",
    "RouteSpec",
    "Router",
    "ValidatedRequest",
    "build_error_payload",
    "current_validation",
    "map_exception_to_status",
    "to_flask_rule",
]
