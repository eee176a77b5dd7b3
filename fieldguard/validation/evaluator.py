"""字段类型转换与约束校验.

`FieldEvaluator` 按 Field 递归遍历一个输入值, 返回规范化后的值, 失败时抛出
携带种类与字段路径的 `FieldValidationError`(遇到第一个错误即终止).

两种来源模式:

- ``SourceMode.STRING``: path/query, 原始值全部是字符串, 需要解析;
- ``SourceMode.TYPED``: body, 原始值已按 JSON 解码, 只做类型核对.

对象节点会原地修改所在容器(补默认值、剥离未知键), ``modified`` 记录是否发生过修改.
"""

from __future__ import annotations

import math
import re
from collections.abc import MutableMapping
from enum import Enum
from typing import TYPE_CHECKING

from fieldguard.errors import ErrorKind, FieldValidationError, SchemaDefinitionError
from fieldguard.schema.fields import Field, Kind
from fieldguard.schema.values import ValueTag, classify_value
from fieldguard.validation.containers import BodyContainer, FieldContainer, PathContainer, QueryContainer

if TYPE_CHECKING:
    from fieldguard.types.structures import FieldPath
    from fieldguard.validation.policy import UnknownKeyPolicy

# 十进制数字字面量: 不接受空白、下划线、nan/inf、十六进制.
_DECIMAL_LITERAL = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_BOOLEAN_LITERALS = {"true": True, "false": False}


class SourceMode(Enum):
    """原始值的来源模式."""

    STRING = "string"
    TYPED = "typed"


class FieldEvaluator:
    """单次校验调用使用的求值器.

    求值器持有本次调用的 ``modified`` 状态, 不应跨请求复用.

    Attributes:
        policy: 路由级未知键策略.
        mode: 原始值来源模式.
        modified: 本次遍历是否修改过任何容器.
    """

    def __init__(self, policy: UnknownKeyPolicy, mode: SourceMode) -> None:
        self.policy = policy
        self.mode = mode
        self.modified = False

    def evaluate(self, field: Field, value: object, path: FieldPath = ()) -> object:
        """校验并规范化一个值.

        Args:
            field: 期望的字段声明.
            value: 原始值. STRING 模式下对象节点需传入 `QueryContainer`/`PathContainer`.
            path: 当前值在整棵输入中的路径.

        Returns:
            规范化后的值.

        Raises:
            FieldValidationError: 值不符合声明.
            SchemaDefinitionError: 传入了未初始化的 Field.

        """
        kind = field.kind
        if kind is None:
            raise SchemaDefinitionError("不能使用未初始化的 Field 进行校验")

        if kind is Kind.OBJECT:
            return self._evaluate_object(field, value, path)
        if kind is Kind.ARRAY:
            return self._evaluate_array(field, value, path)
        if kind is Kind.FILE:
            if classify_value(value) is ValueTag.ABSENT:
                raise FieldValidationError(ErrorKind.REQUIRED, path)
            return value

        if kind is Kind.STRING:
            normalized = self._coerce_string(value, path)
        elif kind is Kind.BOOLEAN:
            normalized = self._coerce_boolean(value, path)
        else:
            normalized = self._coerce_numeric(field, value, path)
        self._check_enumeration(field, normalized, path)
        return normalized

    # ------------------------------------------------------------------
    # 标量
    # ------------------------------------------------------------------
    def _coerce_string(self, value: object, path: FieldPath) -> str:
        if classify_value(value) is not ValueTag.STRING:
            raise _wrong_type(Kind.STRING, path)
        return value  # type: ignore[return-value]

    def _coerce_boolean(self, value: object, path: FieldPath) -> bool:
        tag = classify_value(value)
        if self.mode is SourceMode.STRING:
            if tag is ValueTag.STRING and value in _BOOLEAN_LITERALS:
                return _BOOLEAN_LITERALS[value]  # type: ignore[index]
        elif tag is ValueTag.BOOLEAN:
            return value  # type: ignore[return-value]
        raise _wrong_type(Kind.BOOLEAN, path)

    def _coerce_numeric(self, field: Field, value: object, path: FieldPath) -> int | float:
        kind = field.kind
        number = self._parse_number(value, kind, path)
        if kind is Kind.INTEGER and not number.is_integer():
            raise _wrong_type(Kind.INTEGER, path)

        if field.minimum is not None and number < field.minimum:
            raise FieldValidationError(ErrorKind.MINIMUM, path, detail=f"最小值 {_format_bound(field.minimum)}")
        if field.maximum is not None and number > field.maximum:
            raise FieldValidationError(ErrorKind.MAXIMUM, path, detail=f"最大值 {_format_bound(field.maximum)}")

        if kind is Kind.INTEGER and self.mode is SourceMode.STRING:
            return int(number)
        return number

    def _parse_number(self, value: object, kind: Kind | None, path: FieldPath) -> float:
        tag = classify_value(value)
        if self.mode is SourceMode.STRING:
            if tag is ValueTag.STRING and _DECIMAL_LITERAL.fullmatch(value):  # type: ignore[arg-type]
                number = float(value)  # type: ignore[arg-type]
                if math.isfinite(number):
                    return number
        elif tag is ValueTag.NUMBER and math.isfinite(value):  # type: ignore[arg-type]
            # 只接受解码边界产生的有限 float; 原生 int 属于其他表示.
            return value  # type: ignore[return-value]
        raise _wrong_type(kind, path)

    # ------------------------------------------------------------------
    # 复合
    # ------------------------------------------------------------------
    def _evaluate_array(self, field: Field, value: object, path: FieldPath) -> list[object]:
        if classify_value(value) is not ValueTag.SEQUENCE:
            raise _wrong_type(Kind.ARRAY, path)
        elements = list(value)  # type: ignore[call-overload]

        # 未声明 items 时元素按不透明值接受.
        if field.item_field is not None:
            normalized = [
                self.evaluate(field.item_field, element, (*path, index)) for index, element in enumerate(elements)
            ]
        else:
            normalized = elements

        count = len(elements)
        if field.minimum is not None and count < field.minimum:
            raise FieldValidationError(ErrorKind.MINIMUM, path, detail=f"至少 {_format_bound(field.minimum)} 项")
        if field.maximum is not None and count > field.maximum:
            raise FieldValidationError(ErrorKind.MAXIMUM, path, detail=f"至多 {_format_bound(field.maximum)} 项")

        result = value if self.mode is SourceMode.TYPED else normalized
        self._check_enumeration(field, result, path)
        return result  # type: ignore[return-value]

    def _evaluate_object(self, field: Field, value: object, path: FieldPath) -> dict[str, object]:
        container = self._open_container(value, path)
        resolved = self.policy.resolve(field)
        properties = field.properties

        undeclared = sorted(key for key in container.keys() if key not in properties)
        if resolved.strip:
            for key in undeclared:
                container.discard(key)
        elif resolved.rejects_unknown and undeclared:
            raise FieldValidationError(ErrorKind.UNKNOWN, (*path, undeclared[0]))

        normalized: dict[str, object] = {}
        for name in sorted(properties):
            child = properties[name]
            child_path = (*path, name)
            if not container.has(name):
                if child.has_default:
                    container.write_default(name, child)
                elif child.is_required:
                    raise FieldValidationError(ErrorKind.REQUIRED, child_path)
                if not container.has(name):
                    continue

            raw = container.read(name, child)
            if self._is_blank_required(child, raw):
                raise FieldValidationError(ErrorKind.REQUIRED, child_path)
            normalized[name] = self.evaluate(child, raw, child_path)

        if container.modified:
            self.modified = True
        if isinstance(container, BodyContainer):
            return container.values  # type: ignore[return-value]
        return normalized

    def _open_container(self, value: object, path: FieldPath) -> FieldContainer:
        if self.mode is SourceMode.STRING:
            # path/query 是扁平结构, 只有根节点是对象.
            if isinstance(value, (QueryContainer, PathContainer)):
                return value
            raise _wrong_type(Kind.OBJECT, path)
        if isinstance(value, MutableMapping) and all(isinstance(key, str) for key in value):
            return BodyContainer(value)
        raise _wrong_type(Kind.OBJECT, path)

    def _is_blank_required(self, field: Field, raw: object) -> bool:
        # path/query 中显式给出的空串与缺失同等对待(仅针对 Required 检查).
        return (
            self.mode is SourceMode.STRING
            and field.kind is not Kind.ARRAY
            and raw == ""
            and field.is_required
            and not field.has_default
        )

    # ------------------------------------------------------------------
    # 枚举
    # ------------------------------------------------------------------
    def _check_enumeration(self, field: Field, normalized: object, path: FieldPath) -> None:
        if field.enumeration is None:
            return
        if not any(_enum_member_matches(member, normalized) for member in field.enumeration):
            raise FieldValidationError(ErrorKind.ENUM_NOT_FOUND, path)


def _enum_member_matches(member: object, value: object) -> bool:
    # bool 是 int 的子类, 不能让 True 与 1 相等; 数组与对象逐项按同一规则比较.
    if isinstance(member, bool) or isinstance(value, bool):
        return isinstance(member, bool) and isinstance(value, bool) and member is value
    member_tag = classify_value(member)
    value_tag = classify_value(value)
    if ValueTag.SEQUENCE in (member_tag, value_tag):
        if member_tag is not value_tag or len(member) != len(value):  # type: ignore[arg-type]
            return False
        return all(_enum_member_matches(m, v) for m, v in zip(member, value))  # type: ignore[call-overload]
    if ValueTag.MAPPING in (member_tag, value_tag):
        if member_tag is not value_tag or member.keys() != value.keys():  # type: ignore[attr-defined]
            return False
        return all(_enum_member_matches(member[key], value[key]) for key in member)  # type: ignore[index]
    return member == value


def _wrong_type(kind: Kind | None, path: FieldPath) -> FieldValidationError:
    expected = kind.value if kind is not None else "unknown"
    return FieldValidationError(ErrorKind.WRONG_TYPE, path, detail=f"期望 {expected}")


def _format_bound(bound: float) -> str:
    return str(int(bound)) if bound.is_integer() else str(bound)


__all__ = ["FieldEvaluator", "SourceMode"]
