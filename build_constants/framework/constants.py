from __future__ import annotations

import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Literal

from build_constants.framework.errors import ConfigurationError, MissingPackageError, ReservedNameError
from build_constants.framework.values import INT64_MAX, INT64_MIN, ConstantValue, constant_value

SourceAccess = Literal["public", "package"]

PUBLIC: SourceAccess = "public"
PACKAGE: SourceAccess = "package"

RESERVED_NAMES: frozenset[str] = frozenset(
    {"PROJECT_NAME", "PROJECT_VERSION", "PROJECT_GROUP", "BUILD_TIME", "BUILD_DATE"}
)


def current_time_millis() -> int:
    return time.time_ns() // 1_000_000


def split_classname(fully_qualified_name: str) -> tuple[str, str]:
    """Split `org.example.app.Constants` into ("org.example.app", "Constants")."""

    name = str(fully_qualified_name or "").strip()
    package_name, sep, class_name = name.rpartition(".")
    if not sep or not package_name or not class_name:
        raise MissingPackageError(name)
    return package_name, class_name


def parse_access(value: Any, path: str = "access") -> SourceAccess:
    if value is None:
        return PUBLIC
    if not isinstance(value, str):
        raise ConfigurationError(f"Invalid config type for {path}: expected string")
    normalized = value.strip().lower()
    if normalized == PUBLIC:
        return PUBLIC
    if normalized == PACKAGE:
        return PACKAGE
    raise ConfigurationError(f"Unknown {path}: {value!r} (expected 'public' or 'package')")


@dataclass(frozen=True)
class ConstantSet:
    fully_qualified_name: str
    project_name: str
    project_version: Any
    project_group: Any
    build_time_millis: int = field(default_factory=current_time_millis)
    access: SourceAccess = PUBLIC
    additional_constants: Mapping[str, ConstantValue | None] = field(default_factory=dict)

    def __post_init__(self) -> None:
        split_classname(self.fully_qualified_name)
        object.__setattr__(self, "access", parse_access(self.access))
        if isinstance(self.build_time_millis, bool) or not isinstance(self.build_time_millis, int):
            raise ConfigurationError(
                f"Invalid build time: expected milliseconds since the epoch, got {self.build_time_millis!r}"
            )
        if not INT64_MIN <= self.build_time_millis <= INT64_MAX:
            raise ConfigurationError(
                f"Invalid build time: {self.build_time_millis} is outside the 64-bit millisecond range"
            )

        reserved = [name for name in self.additional_constants if name in RESERVED_NAMES]
        if reserved:
            raise ReservedNameError(reserved)

        frozen: dict[str, ConstantValue | None] = {}
        for name, value in self.additional_constants.items():
            if not isinstance(name, str) or not name.strip():
                raise ConfigurationError(f"Invalid additional constant name: {name!r}")
            frozen[name] = constant_value(value, path=f"additional_constants.{name}")
        object.__setattr__(self, "additional_constants", MappingProxyType(frozen))

    @property
    def package_name(self) -> str:
        return split_classname(self.fully_qualified_name)[0]

    @property
    def class_name(self) -> str:
        return split_classname(self.fully_qualified_name)[1]

    def sorted_constants(self) -> list[tuple[str, ConstantValue]]:
        """Additional constants to write: ordinal key order, omitted (None) values dropped."""

        return [
            (name, value)
            for name, value in sorted(self.additional_constants.items(), key=lambda item: item[0])
            if value is not None
        ]


def build_constant_set(
    fully_qualified_name: str,
    *,
    project_name: str,
    project_version: Any,
    project_group: Any,
    build_time_millis: int | None = None,
    access: Any = PUBLIC,
    additional_constants: Mapping[str, Any] | None = None,
) -> ConstantSet:
    """
    Validate generation inputs and return an immutable ConstantSet.

    Raises:
        MissingPackageError: the class name has no package segment.
        ReservedNameError: an additional constant uses a reserved name.
        ConfigurationError: any other invalid input (access, build time, value tags).
    """

    try:
        return ConstantSet(
            fully_qualified_name=str(fully_qualified_name or "").strip(),
            project_name=project_name,
            project_version=project_version,
            project_group=project_group,
            build_time_millis=current_time_millis() if build_time_millis is None else build_time_millis,
            access=parse_access(access),
            additional_constants=dict(additional_constants or {}),
        )
    except ConfigurationError:
        raise
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc
