"""Typed constant values.

Each additional constant is tagged with its Java type when the constants map is
built, so the renderer never inspects raw Python types.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


@dataclass(frozen=True)
class IntValue:
    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"IntValue requires an int, got {type(self.value).__name__}")
        if not INT32_MIN <= self.value <= INT32_MAX:
            raise ValueError(f"IntValue out of 32-bit range: {self.value}")

    def java_type(self) -> str:
        return "int"

    def literal(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class LongValue:
    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"LongValue requires an int, got {type(self.value).__name__}")
        if not INT64_MIN <= self.value <= INT64_MAX:
            raise ValueError(f"LongValue out of 64-bit range: {self.value}")

    def java_type(self) -> str:
        return "long"

    def literal(self) -> str:
        return f"{self.value}L"


@dataclass(frozen=True)
class BoolValue:
    value: bool

    def __post_init__(self) -> None:
        if not isinstance(self.value, bool):
            raise ValueError(f"BoolValue requires a bool, got {type(self.value).__name__}")

    def java_type(self) -> str:
        return "boolean"

    def literal(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class StringValue:
    # No escaping: values are assumed free of quotes and control characters.
    value: str

    def java_type(self) -> str:
        return "String"

    def literal(self) -> str:
        return f'"{self.value}"'


ConstantValue = Union[IntValue, LongValue, BoolValue, StringValue]

_CONSTANT_VALUE_TYPES = (IntValue, LongValue, BoolValue, StringValue)

_TAGGED_CONSTRUCTORS = {
    "int": IntValue,
    "long": LongValue,
    "bool": BoolValue,
    "boolean": BoolValue,
    "string": StringValue,
}


def stringify(value: Any) -> str:
    """Canonical text form of a stringifiable value (project version, group, string constants)."""

    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def constant_value(raw: Any, *, path: str = "value") -> ConstantValue | None:
    """
    Tag a raw value with the Java type it is written as.

    - None -> None (the constant is omitted)
    - an already tagged value -> unchanged
    - bool -> BoolValue
    - int -> IntValue within 32-bit range, LongValue within 64-bit range,
      otherwise StringValue of the decimal text
    - single-key mapping {int|long|bool|string: value} -> forced tag
    - anything else -> StringValue of its text form
    """

    if raw is None:
        return None
    if isinstance(raw, _CONSTANT_VALUE_TYPES):
        return raw
    if isinstance(raw, bool):
        return BoolValue(raw)
    if isinstance(raw, int):
        if INT32_MIN <= raw <= INT32_MAX:
            return IntValue(raw)
        if INT64_MIN <= raw <= INT64_MAX:
            return LongValue(raw)
        return StringValue(str(raw))
    if isinstance(raw, Mapping):
        return _tagged_value(raw, path=path)
    return StringValue(stringify(raw))


def _tagged_value(raw: Mapping[Any, Any], *, path: str) -> ConstantValue | None:
    if len(raw) != 1:
        raise ValueError(
            f"Invalid constant value for {path}: a tagged value must have exactly one of "
            f"{', '.join(sorted(_TAGGED_CONSTRUCTORS))} (got {sorted(map(str, raw))})"
        )
    tag, inner = next(iter(raw.items()))
    constructor = _TAGGED_CONSTRUCTORS.get(str(tag).strip().lower())
    if constructor is None:
        raise ValueError(f"Unknown constant type for {path}: {tag!r}")
    if inner is None:
        return None

    if constructor is StringValue:
        return StringValue(stringify(inner))
    if constructor is BoolValue:
        if not isinstance(inner, bool):
            raise ValueError(f"Invalid constant value for {path}: expected bool, got {inner!r}")
        return BoolValue(inner)

    if isinstance(inner, bool):
        raise ValueError(f"Invalid constant value for {path}: expected {tag}, got bool")
    if isinstance(inner, str):
        try:
            inner = int(inner.strip())
        except ValueError as exc:
            raise ValueError(f"Invalid constant value for {path}: must be an int") from exc
    if not isinstance(inner, int):
        raise ValueError(f"Invalid constant value for {path}: expected {tag}, got {type(inner).__name__}")
    try:
        return constructor(inner)
    except ValueError as exc:
        raise ValueError(f"Invalid constant value for {path}: {exc}") from exc
