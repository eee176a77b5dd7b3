"""常量模块。

集中管理校验引擎使用的常量，包括错误分类、错误消息、HTTP 方法与状态码。

主要常量：
- ErrorCategory / ErrorSeverity: 错误分类与严重度
- ErrorMessages: 错误消息常量
- HttpMethod: 路由表允许的 HTTP 方法
- HttpStatus: HTTP 状态码常量
"""

# 导入HTTP状态码常量（使用Python标准库）
from http import HTTPStatus as HttpStatus

from .http_methods import HttpMethod
from .system_constants import (
    ErrorCategory,
    ErrorMessages,
    ErrorSeverity,
    LogLevel,
)

__all__ = [
    "ErrorCategory",
    "ErrorMessages",
    "ErrorSeverity",
    "HttpMethod",
    "HttpStatus",
    "LogLevel",
]
