"""未知键策略.

路由级默认值在构造校验器时确定; 对象字段可以用 ``unknown()`` / ``strip()``
覆盖, 覆盖只作用于声明它的那个节点, 在校验时才解析.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fieldguard.schema.fields import Field


@dataclass(frozen=True, slots=True)
class UnknownKeyPolicy:
    """路由级未知键策略."""

    allow_unknown: bool = True
    strip_unknown: bool = False

    def resolve(self, field: Field) -> ResolvedKeyPolicy:
        """结合节点覆盖得到该对象节点的有效策略."""
        strip = self.strip_unknown if field.strip_override is None else field.strip_override
        allow = self.allow_unknown if field.unknown_override is None else field.unknown_override
        return ResolvedKeyPolicy(strip=strip, allow=allow)


@dataclass(frozen=True, slots=True)
class ResolvedKeyPolicy:
    """单个对象节点的有效策略."""

    strip: bool
    allow: bool

    @property
    def rejects_unknown(self) -> bool:
        # strip 先于检查执行, 被剥离的键不可能再触发 Unknown.
        return not self.strip and not self.allow


__all__ = ["ResolvedKeyPolicy", "UnknownKeyPolicy"]
