"""fieldguard 的结构化日志配置与辅助函数."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, cast

import structlog
from flask import Flask, current_app, has_request_context, request

from fieldguard.settings import APP_NAME, APP_VERSION

if TYPE_CHECKING:
    from structlog.typing import BindableLogger, Processor

    from fieldguard.settings import Settings
    from fieldguard.types import StructlogEventDict


class StructlogConfig:
    """structlog 配置核心类.

    负责配置处理器链与日志工厂. 可以多次调用 ``configure``, 只会配置一次.

    Attributes:
        configured: 是否已配置标志.

    Example:
        >>> config = StructlogConfig()
        >>> config.configure()
        >>> logger = get_logger('my_module')

    """

    def __init__(self) -> None:
        self.configured = False

    def configure(self, app: Flask | None = None) -> None:
        """初始化 structlog 处理器(幂等).

        Args:
            app: Flask 应用实例,可选.如果提供,会在 app.extensions 中登记.

        """
        if not self.configured:
            processors = [
                structlog.stdlib.filter_by_level,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.stdlib.add_log_level,
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                self._add_request_context,
                self._add_global_context,
                self._get_console_renderer(),
            ]
            structlog.configure(
                processors=cast("list[Processor]", processors),
                context_class=dict,
                logger_factory=structlog.stdlib.LoggerFactory(),
                wrapper_class=structlog.stdlib.BoundLogger,
                cache_logger_on_first_use=True,
            )
            self.configured = True

        if app is not None:
            app.extensions["fieldguard.structlog"] = self

    @staticmethod
    def _add_request_context(
        _logger: BindableLogger,
        _method_name: str,
        event_dict: StructlogEventDict,
    ) -> StructlogEventDict:
        """向事件字典写入请求方法与路径(仅在 Flask 请求上下文中)."""
        if has_request_context():
            event_dict["http_method"] = request.method
            event_dict["http_path"] = request.path
        return event_dict

    @staticmethod
    def _add_global_context(
        _logger: BindableLogger,
        _method_name: str,
        event_dict: StructlogEventDict,
    ) -> StructlogEventDict:
        """附加应用名称、版本等全局上下文."""
        try:
            event_dict["app_name"] = current_app.config.get("APP_NAME", APP_NAME)
        except RuntimeError:
            event_dict["app_name"] = APP_NAME
        event_dict["app_version"] = APP_VERSION

        logger_name = getattr(_logger, "name", "unknown")
        event_dict["logger_name"] = logger_name
        return event_dict

    @staticmethod
    def _get_console_renderer() -> Processor:
        """根据终端能力返回渲染器."""
        return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


structlog_config = StructlogConfig()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """获取结构化日志记录器.

    Args:
        name: 日志记录器名称,通常使用模块名.

    Returns:
        绑定的 structlog 日志记录器实例.

    Example:
        >>> logger = get_logger('my_module')
        >>> logger.info('操作成功', field='page')

    """
    structlog_config.configure()
    return structlog.get_logger(name)


def configure_logging(settings: Settings, app: Flask | None = None) -> None:
    """按配置设置 stdlib 日志级别并初始化 structlog.

    Args:
        settings: 运行时配置, 提供日志级别.
        app: 可选的 Flask 应用.

    """
    logging.basicConfig(format="%(message)s", stream=sys.stdout)
    logging.getLogger().setLevel(settings.logging_level)
    structlog_config.configure(app)


def get_validation_logger() -> structlog.stdlib.BoundLogger:
    """获取校验引擎日志记录器."""
    return get_logger("fieldguard.validation")


def get_api_logger() -> structlog.stdlib.BoundLogger:
    """获取 HTTP 集成层日志记录器."""
    return get_logger("fieldguard.api")


__all__ = [
    "StructlogConfig",
    "configure_logging",
    "get_api_logger",
    "get_logger",
    "get_validation_logger",
    "structlog_config",
]
