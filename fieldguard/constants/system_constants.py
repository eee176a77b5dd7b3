"""fieldguard - 常量定义模块

统一管理错误分类、严重度与错误消息文案.
"""

from enum import Enum


class LogLevel(Enum):
    """日志级别枚举."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ErrorCategory(Enum):
    """错误分类枚举."""

    VALIDATION = "validation"
    SCHEMA = "schema"
    SYSTEM = "system"


class ErrorSeverity(Enum):
    """错误严重程度枚举."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


# 错误消息常量
class ErrorMessages:
    """错误消息常量."""

    # 通用错误
    INTERNAL_ERROR = "服务器内部错误"
    VALIDATION_ERROR = "数据验证失败"
    INVALID_REQUEST = "无效的请求"
    SCHEMA_DEFINITION_ERROR = "字段声明无效"
    BODY_DECODE_ERROR = "请求体不是合法的 JSON: {reason}"

    # 字段校验错误(按 ErrorKind 对应)
    FIELD_REQUIRED = "缺少必填字段"
    FIELD_WRONG_TYPE = "字段类型错误"
    FIELD_MINIMUM = "低于最小值"
    FIELD_MAXIMUM = "超过最大值"
    FIELD_ENUM_NOT_FOUND = "取值不在允许范围内"
    FIELD_UNKNOWN = "存在未声明的字段"


__all__ = [
    "ErrorCategory",
    "ErrorMessages",
    "ErrorSeverity",
    "LogLevel",
]
