"""已解码动态值的分类.

请求体经 JSON 解码后只会出现有限几种表示. 这里把它们归入显式的标签,
校验器按标签分支,而不是在各处散落 isinstance 判断.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import Enum

_STRING_LIKE_TYPES = (str, bytes, bytearray)


class ValueTag(Enum):
    """已解码值的表示种类."""

    ABSENT = "absent"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    # 不属于 JSON 解码边界的表示,例如原生 int、bytes、任意对象.
    OTHER = "other"


def classify_value(value: object) -> ValueTag:
    """返回值对应的标签.

    bool 必须先于数字判断; 原生 int 不是规范的数字表示,归为 OTHER.
    """
    if value is None:
        return ValueTag.ABSENT
    if isinstance(value, bool):
        return ValueTag.BOOLEAN
    if isinstance(value, str):
        return ValueTag.STRING
    if isinstance(value, float):
        return ValueTag.NUMBER
    if isinstance(value, Mapping):
        return ValueTag.MAPPING
    if isinstance(value, Sequence) and not isinstance(value, _STRING_LIKE_TYPES):
        return ValueTag.SEQUENCE
    return ValueTag.OTHER


__all__ = ["ValueTag", "classify_value"]
