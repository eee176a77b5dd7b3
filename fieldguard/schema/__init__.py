"""字段声明模型与已解码值分类."""

from fieldguard.schema.fields import MISSING, Field, Kind
from fieldguard.schema.values import ValueTag, classify_value

__all__ = ["MISSING", "Field", "Kind", "ValueTag", "classify_value"]
