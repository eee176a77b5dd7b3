"""请求体/查询串的编解码.

目标:
- 请求体按 JSON 规则解码, 数字统一为 float(校验器只认这一种数字表示).
- 校验后的容器可能被补默认值或剥离键, 这里负责把它们重新编码回线上格式.

注意:
- 本模块只负责编解码, 不做任何字段校验.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping, Sequence
from typing import Any, cast
from urllib.parse import urlencode

_STRING_LIKE_TYPES = (str, bytes, bytearray)


def decode_json_body(raw: bytes | str | None) -> object:
    """按 JSON 规则解码请求体.

    Args:
        raw: 原始请求体. 为空(None/空白)时视为没有请求体.

    Returns:
        解码后的值; 没有请求体时返回 None.

    Raises:
        ValueError: 请求体不是合法 JSON 或包含 NaN/Infinity 常量(``json.JSONDecodeError`` 是其子类).

    """
    if raw is None:
        return None
    text = raw.decode("utf-8") if isinstance(raw, (bytes, bytearray)) else raw
    if not text.strip():
        return None
    return json.loads(
        text,
        parse_int=_parse_finite_number,
        parse_float=_parse_finite_number,
        parse_constant=_reject_constant,
    )


def _parse_finite_number(literal: str) -> float:
    number = float(literal)
    if not math.isfinite(number):
        raise ValueError(f"数字超出范围: {literal}")
    return number


def _reject_constant(name: str) -> object:
    # NaN/Infinity/-Infinity 不属于标准 JSON.
    raise ValueError(f"不支持的 JSON 常量: {name}")


def encode_json_body(value: object) -> bytes:
    """将请求体重新编码为 JSON, 整数值的 float 输出为整数字面量."""
    encoded = json.dumps(_compact_numbers(value), ensure_ascii=False, allow_nan=False, separators=(",", ":"))
    return encoded.encode("utf-8")


def format_query_value(value: object) -> str:
    """把单个值渲染为 query/path 中的字符串形式.

    与校验器的解析规则互逆: 布尔值为 ``true``/``false``, 整数值的 float 不带小数部分.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return repr(value)
    return str(value)


def encode_query(values: Mapping[str, Any]) -> str:
    """按键名排序重新编码 query, 同一键的多个值保持原有顺序."""
    pairs: list[tuple[str, str]] = []
    for key in sorted(values):
        pairs.extend((key, item) for item in _query_items(values, key))
    return urlencode(pairs)


def _query_items(values: Mapping[str, Any], key: str) -> list[str]:
    if hasattr(values, "getlist"):
        return [str(item) for item in cast(Any, values).getlist(key)]
    raw = values[key]
    if isinstance(raw, Sequence) and not isinstance(raw, _STRING_LIKE_TYPES):
        return [str(item) for item in raw]
    return [str(raw)]


def _compact_numbers(value: object) -> object:
    if isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, Mapping):
        return {key: _compact_numbers(item) for key, item in value.items()}
    if isinstance(value, Sequence) and not isinstance(value, _STRING_LIKE_TYPES):
        return [_compact_numbers(item) for item in value]
    return value


__all__ = ["decode_json_body", "encode_json_body", "encode_query", "format_query_value"]
