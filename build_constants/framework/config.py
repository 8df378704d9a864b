from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from build_constants.framework.constants import PUBLIC, SourceAccess, parse_access, split_classname

DEFAULT_OUTPUT_DIR = os.path.join("build", "generated-src", "build-constants", "main")
DEFAULT_PROJECT_VERSION = "unspecified"
DEFAULT_PROJECT_GROUP = ""

TOP_LEVEL_KEYS: frozenset[str] = frozenset(
    {"strict", "classname", "access", "output_dir", "project", "build_time", "additional_constants", "inputs"}
)
PROJECT_KEYS: frozenset[str] = frozenset({"name", "version", "group"})

_BOOL_WORDS = {"true": True, "yes": True, "1": True, "false": False, "no": False, "0": False}


def parse_bool(value: Any, path: str) -> bool:
    """Booleans, or true/false/yes/no/1/0 spelled as text or 0/1 ints."""

    if isinstance(value, bool):
        return value
    if isinstance(value, (str, int)):
        parsed = _BOOL_WORDS.get(str(value).strip().lower())
        if parsed is not None:
            return parsed
    raise ValueError(f"Invalid boolean for {path}: {value!r}")


def parse_int(value: Any, path: str) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ValueError(f"Invalid config value for {path}: expected an integer, got {value!r}")


def unknown_keys(cfg: Mapping[str, Any]) -> list[str]:
    """Dotted paths of keys the generator does not read. `additional_constants` is free-form."""

    found = [str(key) for key in cfg if key not in TOP_LEVEL_KEYS]
    project = cfg.get("project")
    if isinstance(project, Mapping):
        found.extend(f"project.{key}" for key in project if key not in PROJECT_KEYS)
    return sorted(found)


def _project_text(value: Any, path: str) -> Any:
    # YAML reads `version: 1.10` as the float 1.1, which would silently drop the zero.
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, float):
        raise ValueError(
            f"Invalid config type for {path}: {value!r} was read as a number; "
            f"quote it in YAML (e.g. {path.rsplit('.', 1)[-1]}: \"{value}\")"
        )
    raise ValueError(f"Invalid config type for {path}: expected string, got {type(value).__name__}")


def _section(cfg: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = cfg.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError(f"Invalid config type for {key}: expected mapping")
    return value


@dataclass(frozen=True)
class ProjectConfig:
    name: str | None = None
    version: Any = None
    group: Any = None

    @staticmethod
    def from_dict(raw: Mapping[str, Any]) -> "ProjectConfig":
        name = raw.get("name")
        if name is not None:
            if not isinstance(name, str):
                raise ValueError("Invalid config type for project.name: expected string")
            name = name.strip() or None
        return ProjectConfig(
            name=name,
            version=_project_text(raw.get("version"), "project.version"),
            group=_project_text(raw.get("group"), "project.group"),
        )


@dataclass(frozen=True)
class GeneratorConfig:
    classname: str
    output_dir: str
    access: SourceAccess = PUBLIC
    project: ProjectConfig = field(default_factory=ProjectConfig)
    build_time_millis: int | None = None
    additional_constants: Mapping[str, Any] = field(default_factory=dict)
    inputs: tuple[str, ...] = ()

    @staticmethod
    def from_dict(cfg: Mapping[str, Any], *, base_dir: str | None = None) -> tuple["GeneratorConfig", list[str]]:
        """
        Parse and validate the generator configuration, returning (GeneratorConfig, warnings).

        Relative paths resolve against `base_dir` (the repo root), or the
        current directory when it is None. Unknown keys are warnings unless
        `strict` is set.

        Raises:
            ValueError: if required keys are missing or invalid.
        """

        if not isinstance(cfg, Mapping):
            raise ValueError("Config must be a mapping")

        warnings: list[str] = []
        unknown = unknown_keys(cfg)
        if unknown:
            if "strict" in cfg and parse_bool(cfg["strict"], "strict"):
                raise ValueError("Unknown config keys: " + ", ".join(unknown))
            warnings.extend(f"Unknown config key: {key}" for key in unknown)

        def resolve(value: str) -> str:
            expanded = os.path.expandvars(os.path.expanduser(value.strip()))
            return os.path.abspath(os.path.join(base_dir or os.getcwd(), expanded))

        classname = cfg.get("classname")
        if classname is not None and not isinstance(classname, str):
            raise ValueError("Invalid config type for classname: expected string")
        if not classname or not classname.strip():
            raise ValueError("Missing required config: classname")
        classname = classname.strip()
        split_classname(classname)

        output_dir = cfg.get("output_dir", DEFAULT_OUTPUT_DIR)
        if output_dir is None:
            output_dir = DEFAULT_OUTPUT_DIR
        if not isinstance(output_dir, str) or not output_dir.strip():
            raise ValueError("Invalid config value for output_dir: expected a non-empty string")

        build_time_millis = None
        if cfg.get("build_time") is not None:
            build_time_millis = parse_int(cfg["build_time"], "build_time")

        additional_constants = dict(_section(cfg, "additional_constants"))
        for key in additional_constants:
            if not isinstance(key, str) or not key.strip():
                raise ValueError(f"Invalid additional constant name: {key!r}")

        raw_inputs = cfg.get("inputs") or []
        if not isinstance(raw_inputs, (list, tuple)):
            raise ValueError("Invalid config type for inputs: expected list of paths")
        inputs: list[str] = []
        for idx, item in enumerate(raw_inputs):
            if not isinstance(item, str):
                raise ValueError(f"Invalid config type for inputs[{idx}]: expected string")
            if item.strip():
                inputs.append(resolve(item))

        config = GeneratorConfig(
            classname=classname,
            output_dir=resolve(output_dir),
            access=parse_access(cfg.get("access"), "access"),
            project=ProjectConfig.from_dict(_section(cfg, "project")),
            build_time_millis=build_time_millis,
            additional_constants=additional_constants,
            inputs=tuple(inputs),
        )
        return config, warnings
