"""请求容器的统一键访问.

对象校验需要在三种容器上读取、补默认值、剥离未知键:

- query: 多值映射(``dict[str, list[str]]`` 或 werkzeug ``MultiDict``);
- path: 单值映射(``dict[str, str]``);
- body: JSON 解码得到的 ``dict``.

容器会被原地修改, ``modified`` 标记调用方是否需要重新编码.
"""

from __future__ import annotations

import copy
from collections.abc import MutableMapping
from typing import Any, Protocol, cast

from fieldguard.schema.fields import Field, Kind
from fieldguard.utils.request_codec import format_query_value


class FieldContainer(Protocol):
    """对象校验所需的最小容器接口."""

    modified: bool

    def keys(self) -> list[str]: ...

    def has(self, key: str) -> bool: ...

    def read(self, key: str, field: Field) -> object: ...

    def write_default(self, key: str, field: Field) -> None: ...

    def discard(self, key: str) -> None: ...


class QueryContainer:
    """多值 query 映射.

    数组字段读取该键下的全部值(按出现顺序); 其余字段读取第一个值.
    """

    def __init__(self, values: MutableMapping[str, Any]) -> None:
        self.values = values
        self.modified = False

    def keys(self) -> list[str]:
        return [str(key) for key in self.values]

    def has(self, key: str) -> bool:
        return bool(self._getlist(key))

    def read(self, key: str, field: Field) -> object:
        items = self._getlist(key)
        if field.kind is Kind.ARRAY:
            return items
        return items[0]

    def write_default(self, key: str, field: Field) -> None:
        default = field.default_value
        if isinstance(default, list):
            rendered = [format_query_value(item) for item in default]
        else:
            rendered = [format_query_value(default)]
        self._setlist(key, rendered)
        self.modified = True

    def discard(self, key: str) -> None:
        del self.values[key]
        self.modified = True

    def _getlist(self, key: str) -> list[str]:
        if hasattr(self.values, "getlist"):
            return list(cast(Any, self.values).getlist(key))
        raw = self.values.get(key)
        if raw is None:
            return []
        if isinstance(raw, str):
            return [raw]
        return list(raw)

    def _setlist(self, key: str, items: list[str]) -> None:
        if hasattr(self.values, "setlist"):
            cast(Any, self.values).setlist(key, items)
        else:
            self.values[key] = items


class PathContainer:
    """单值 path 映射. 数组字段把该值视为单元素序列."""

    def __init__(self, values: MutableMapping[str, str]) -> None:
        self.values = values
        self.modified = False

    def keys(self) -> list[str]:
        return list(self.values)

    def has(self, key: str) -> bool:
        return key in self.values

    def read(self, key: str, field: Field) -> object:
        value = self.values[key]
        if field.kind is Kind.ARRAY:
            return [value]
        return value

    def write_default(self, key: str, field: Field) -> None:
        default = field.default_value
        if isinstance(default, list):
            if not default:
                return
            default = default[0]
        self.values[key] = format_query_value(default)
        self.modified = True

    def discard(self, key: str) -> None:
        del self.values[key]
        self.modified = True


class BodyContainer:
    """请求体中的 JSON 对象."""

    def __init__(self, values: MutableMapping[str, object]) -> None:
        self.values = values
        self.modified = False

    def keys(self) -> list[str]:
        return list(self.values)

    def has(self, key: str) -> bool:
        return key in self.values

    def read(self, key: str, field: Field) -> object:
        return self.values[key]

    def write_default(self, key: str, field: Field) -> None:
        # 拷贝后写入, 共享的 schema 不会因请求侧修改而改变.
        self.values[key] = copy.deepcopy(field.default_value)
        self.modified = True

    def discard(self, key: str) -> None:
        del self.values[key]
        self.modified = True


__all__ = ["BodyContainer", "FieldContainer", "PathContainer", "QueryContainer"]
