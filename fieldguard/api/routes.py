"""路由表条目.

每个条目声明路径模板、HTTP 方法、处理函数、可选的前置处理器以及三段 schema.
对校验引擎而言它只是配置, 具体如何挂载由适配器决定.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from fieldguard.constants import HttpMethod
from fieldguard.errors import SchemaDefinitionError
from fieldguard.validation.orchestrator import RequestSchemas

# 路径模板中的参数段, 例如 /widgets/{id}
PATH_PARAM_PATTERN = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")

Handler = Callable[..., Any]
PreHandler = Callable[[Handler], Handler]


@dataclass(frozen=True, slots=True)
class RouteSpec:
    """单个端点的声明.

    Attributes:
        path: 路径模板, 参数段写作 ``{name}``.
        method: HTTP 方法.
        handler: 最终处理函数.
        validate: 三段 schema.
        pre_handlers: 处理函数的装饰器, 按声明顺序由外到内包裹, 在校验通过后执行.
        endpoint: 端点名, 缺省时由方法与路径推导.
        summary: 简要说明, 不参与校验与挂载, 供外部工具(如文档生成)读取.
        tags: 分组标签, 同 summary 为不透明元数据.
    """

    path: str
    method: str
    handler: Handler | None
    validate: RequestSchemas = field(default_factory=RequestSchemas)
    pre_handlers: tuple[PreHandler, ...] = ()
    endpoint: str | None = None
    summary: str = ""
    tags: tuple[str, ...] = ()

    @property
    def normalized_method(self) -> str:
        return HttpMethod.normalize(self.method)

    @property
    def endpoint_name(self) -> str:
        if self.endpoint:
            return self.endpoint
        slug = re.sub(r"[^A-Za-z0-9]+", "_", self.path).strip("_") or "root"
        return f"{self.normalized_method.lower()}_{slug}"

    @property
    def path_params(self) -> tuple[str, ...]:
        """路径模板中出现的参数名(按出现顺序)."""
        return tuple(PATH_PARAM_PATTERN.findall(self.path))

    def validate_definition(self) -> None:
        """检查声明本身是否可挂载.

        Raises:
            SchemaDefinitionError: 处理函数缺失、方法不受支持、路径不以 / 开头或前置处理器不可调用.

        """
        if self.handler is None or not callable(self.handler):
            raise SchemaDefinitionError(f"路由 {self.method} {self.path} 的 handler 必须是可调用对象")
        if not HttpMethod.is_valid(self.method):
            raise SchemaDefinitionError(f"不支持的 HTTP 方法: {self.method}")
        if not self.path.startswith("/"):
            raise SchemaDefinitionError(f"路径模板必须以 / 开头: {self.path}")
        for pre_handler in self.pre_handlers:
            if not callable(pre_handler):
                raise SchemaDefinitionError(f"路由 {self.method} {self.path} 的 pre_handlers 必须是可调用对象")


__all__ = ["PATH_PARAM_PATTERN", "Handler", "PreHandler", "RouteSpec"]
