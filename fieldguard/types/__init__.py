"""共享类型别名."""

from fieldguard.types.structures import (
    BodyValue,
    FieldPath,
    JsonDict,
    JsonValue,
    LoggerExtra,
    PathValues,
    QueryValues,
    ScalarValue,
    StructlogEventDict,
)

__all__ = [
    "BodyValue",
    "FieldPath",
    "JsonDict",
    "JsonValue",
    "LoggerExtra",
    "PathValues",
    "QueryValues",
    "ScalarValue",
    "StructlogEventDict",
]
