"""通用结构化数据类型别名.

统一请求各部分(path/query/body)与日志上下文的类型,方便在校验器、适配器之间共享定义.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping, Sequence
from typing import TypeAlias

ScalarValue: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = ScalarValue | Sequence["JsonValue"] | Mapping[str, "JsonValue"]
JsonDict: TypeAlias = dict[str, JsonValue]
StructlogEventDict: TypeAlias = MutableMapping[str, JsonValue]
LoggerExtra: TypeAlias = Mapping[str, JsonValue]

# 请求三段输入. query 兼容 dict[str, list[str]] 与 werkzeug MultiDict.
PathValues: TypeAlias = MutableMapping[str, str]
QueryValues: TypeAlias = MutableMapping[str, list[str]]
BodyValue: TypeAlias = JsonValue

# 字段路径: 对象键为 str, 数组下标为 int.
FieldPath: TypeAlias = tuple[str | int, ...]
