"""fieldguard - 声明式 HTTP 请求参数校验.

为端点声明 path/query/body 三段 schema, 在处理函数执行前完成类型转换、
默认值填充、未知键处理与约束检查.
"""

from fieldguard.api import FlaskAdapter, RouteSpec, Router, current_validation
from fieldguard.errors import ErrorKind, FieldValidationError, SchemaDefinitionError
from fieldguard.schema import MISSING, Field, Kind
from fieldguard.settings import Settings
from fieldguard.validation import RequestSchemas, RequestValidator, ValidationOutcome

__all__ = [
    "MISSING",
    "ErrorKind",
    "Field",
    "FieldValidationError",
    "FlaskAdapter",
    "Kind",
    "RequestSchemas",
    "RequestValidator",
    "RouteSpec",
    "Router",
    "SchemaDefinitionError",
    "Settings",
    "ValidationOutcome",
    "current_validation",
]
