"""字段声明模型.

一个 `Field` 描述一个值的期望形状: 种类(kind)以及可选的修饰(必填、默认值、
上下界、枚举、数组元素、对象属性、未知键策略覆盖).

Field 在路由注册阶段构造,之后只读,被所有请求共享. 每个修饰方法都返回新的
Field,不会修改原对象:

    >>> user_id = Field.integer().required().min(1)
    >>> body = Field.object({"name": Field.string().required(), "tags": Field.array().items(Field.string())})
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType

from fieldguard.errors import SchemaDefinitionError


class Kind(Enum):
    """字段种类."""

    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    # 不透明的上传内容,不做 JSON 解码与类型检查.
    FILE = "file"


class _Missing(Enum):
    MISSING = "MISSING"


MISSING = _Missing.MISSING

_NUMERIC_KINDS = frozenset({Kind.NUMBER, Kind.INTEGER})
_BOUNDED_KINDS = frozenset({Kind.NUMBER, Kind.INTEGER, Kind.ARRAY})


def _empty_properties() -> Mapping[str, Field]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class Field:
    """单个值的 schema 节点.

    Attributes:
        kind: 字段种类; 占位对象 ``Field()`` 的 kind 为 None.
        is_required: 缺失(或 path/query 中为空串)时是否报 Required.
        default_value: 缺失时写入的默认值, 未设置时为 ``MISSING``.
        minimum: 数字下界或数组元素个数下界.
        maximum: 数字上界或数组元素个数上界.
        enumeration: 允许的取值集合.
        item_field: 数组元素的 schema.
        properties: 对象属性名到子 schema 的只读映射.
        unknown_override: 覆盖路由级 allow_unknown, None 表示不覆盖.
        strip_override: 覆盖路由级 strip_unknown, None 表示不覆盖.
    """

    kind: Kind | None = None
    is_required: bool = False
    default_value: object = MISSING
    minimum: float | None = None
    maximum: float | None = None
    enumeration: tuple[object, ...] | None = None
    item_field: Field | None = None
    properties: Mapping[str, Field] = field(default_factory=_empty_properties)
    unknown_override: bool | None = None
    strip_override: bool | None = None

    # ------------------------------------------------------------------
    # 构造
    # ------------------------------------------------------------------
    @classmethod
    def string(cls) -> Field:
        return cls(kind=Kind.STRING)

    @classmethod
    def number(cls) -> Field:
        return cls(kind=Kind.NUMBER)

    @classmethod
    def integer(cls) -> Field:
        return cls(kind=Kind.INTEGER)

    @classmethod
    def boolean(cls) -> Field:
        return cls(kind=Kind.BOOLEAN)

    @classmethod
    def array(cls) -> Field:
        return cls(kind=Kind.ARRAY)

    @classmethod
    def file(cls) -> Field:
        return cls(kind=Kind.FILE)

    @classmethod
    def object(cls, properties: Mapping[str, Field] | None = None) -> Field:
        """构造对象字段.

        Args:
            properties: 属性名到子字段的映射, 子字段必须已初始化.

        Returns:
            新的对象字段, properties 以只读映射保存.

        Raises:
            SchemaDefinitionError: 属性名不是字符串或子字段未初始化.

        """
        children: dict[str, Field] = {}
        for name, child in (properties or {}).items():
            if not isinstance(name, str):
                raise SchemaDefinitionError(f"对象属性名必须是字符串: {name!r}")
            if not isinstance(child, Field) or not child.initialized:
                raise SchemaDefinitionError(f"对象属性 '{name}' 必须是已初始化的 Field")
            children[name] = child
        return cls(kind=Kind.OBJECT, properties=MappingProxyType(children))

    # ------------------------------------------------------------------
    # 查询
    # ------------------------------------------------------------------
    @property
    def initialized(self) -> bool:
        """是否由种类构造函数创建(占位对象返回 False)."""
        return self.kind is not None

    @property
    def has_default(self) -> bool:
        return self.default_value is not MISSING

    # ------------------------------------------------------------------
    # 修饰
    # ------------------------------------------------------------------
    def required(self) -> Field:
        self._ensure_initialized("required")
        return replace(self, is_required=True)

    def default(self, value: object) -> Field:
        """设置缺失时写入的默认值.

        数字默认值统一保存为 float, 与请求体解码后的表示一致.

        Raises:
            SchemaDefinitionError: 默认值与字段种类不符.

        """
        self._ensure_initialized("default")
        return replace(self, default_value=self._coerce_declared_value(value, "default"))

    def min(self, bound: float) -> Field:
        return replace(self, minimum=self._coerce_bound(bound, "min"))

    def max(self, bound: float) -> Field:
        return replace(self, maximum=self._coerce_bound(bound, "max"))

    def enum(self, *values: object) -> Field:
        """限制取值范围. 比较发生在类型转换之后."""
        self._ensure_initialized("enum")
        if not values:
            raise SchemaDefinitionError("enum 至少需要一个取值")
        if self.kind is Kind.FILE:
            raise SchemaDefinitionError("file 字段不支持 enum")
        members = tuple(self._coerce_declared_value(value, "enum") for value in values)
        return replace(self, enumeration=members)

    def items(self, child: Field) -> Field:
        if self.kind is not Kind.ARRAY:
            raise SchemaDefinitionError(f"items 仅适用于 array 字段, 当前为 {self._kind_name}")
        if not isinstance(child, Field) or not child.initialized:
            raise SchemaDefinitionError("items 必须是已初始化的 Field")
        return replace(self, item_field=child)

    def unknown(self, allow: bool) -> Field:
        self._ensure_object("unknown")
        return replace(self, unknown_override=bool(allow))

    def strip(self, enabled: bool) -> Field:
        self._ensure_object("strip")
        return replace(self, strip_override=bool(enabled))

    # ------------------------------------------------------------------
    # 内部校验
    # ------------------------------------------------------------------
    @property
    def _kind_name(self) -> str:
        return self.kind.value if self.kind is not None else "uninitialized"

    def _ensure_initialized(self, modifier: str) -> None:
        if not self.initialized:
            raise SchemaDefinitionError(f"{modifier} 不能用于未初始化的 Field")

    def _ensure_object(self, modifier: str) -> None:
        if self.kind is not Kind.OBJECT:
            raise SchemaDefinitionError(f"{modifier} 仅适用于 object 字段, 当前为 {self._kind_name}")

    def _coerce_bound(self, bound: object, modifier: str) -> float:
        if self.kind not in _BOUNDED_KINDS:
            raise SchemaDefinitionError(f"{modifier} 仅适用于 number/integer/array 字段, 当前为 {self._kind_name}")
        if isinstance(bound, bool) or not isinstance(bound, (int, float)):
            raise SchemaDefinitionError(f"{modifier} 必须是数字: {bound!r}")
        if self.kind is Kind.ARRAY and (bound < 0 or not float(bound).is_integer()):
            raise SchemaDefinitionError(f"array 的 {modifier} 必须是非负整数: {bound!r}")
        return float(bound)

    def _coerce_declared_value(self, value: object, modifier: str) -> object:
        kind = self.kind
        if kind is Kind.STRING:
            if isinstance(value, str):
                return value
        elif kind in _NUMERIC_KINDS:
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                number = float(value)
                if kind is Kind.NUMBER or number.is_integer():
                    return number
        elif kind is Kind.BOOLEAN:
            if isinstance(value, bool):
                return value
        elif kind is Kind.ARRAY:
            if isinstance(value, (list, tuple)):
                return _canonical_copy(value)
        elif kind is Kind.OBJECT:
            if isinstance(value, Mapping):
                return _canonical_copy(value)
        raise SchemaDefinitionError(f"{modifier} 取值 {value!r} 与字段种类 {self._kind_name} 不符")


def _canonical_copy(value: object) -> object:
    """深拷贝复合默认值, 其中的数字统一为 float(与请求体解码结果一致)."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, Mapping):
        return {key: _canonical_copy(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_canonical_copy(item) for item in value]
    return value


__all__ = ["MISSING", "Field", "Kind"]
