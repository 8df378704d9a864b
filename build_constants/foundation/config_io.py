from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml


DEFAULT_ENV_VAR = "BUILD_CONSTANTS_CONFIG"
CONFIG_DIR = "config"
BASE_CONFIG_FILE = "build_constants.yaml"
LOCAL_CONFIG_FILE = "build_constants.local.yaml"
ROOT_MARKERS = ("pyproject.toml", ".git")

# Mapping sections the local overlay updates key by key; every other key is replaced whole.
MERGED_SECTIONS = frozenset({"project", "additional_constants"})


def find_repo_root(start: str | os.PathLike[str] | None = None) -> str:
    """Nearest directory at or above `start` (default: cwd) holding a pyproject.toml or .git."""

    here = Path(start or os.getcwd()).resolve()
    if not here.is_dir():
        here = here.parent
    for candidate in (here, *here.parents):
        if any((candidate / marker).exists() for marker in ROOT_MARKERS):
            return str(candidate)
    raise FileNotFoundError(f"Cannot locate repo root: no {' or '.join(ROOT_MARKERS)} at or above {here}")


def read_config_file(path: Path) -> dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    try:
        payload = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise ValueError(f"Config file must contain a YAML mapping: {path}")
    return dict(payload)


def apply_local_overlay(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in overlay.items():
        current = merged.get(key)
        if key in MERGED_SECTIONS and isinstance(current, Mapping) and value is not None:
            if not isinstance(value, Mapping):
                raise ValueError(
                    f"Invalid config overlay for {key}: base is a mapping but overlay is {type(value).__name__}"
                )
            merged[key] = {**current, **value}
        else:
            merged[key] = value
    return merged


def load_config(
    *,
    config_path: str | os.PathLike[str] | None = None,
    env_var: str | None = DEFAULT_ENV_VAR,
    start_dir: str | os.PathLike[str] | None = None,
) -> tuple[dict[str, Any], dict[str, Any]]:
    """
    Load the generator configuration from YAML.

    An explicit `config_path`, or else the file named by `env_var`, is loaded
    alone. Otherwise `config/build_constants.yaml` under the repo root is
    loaded and `config/build_constants.local.yaml` is laid over it when present.

    Returns (config, meta) where meta records how the config was located:
    ``mode`` (explicit/env/base/base+local), the loaded ``paths`` in merge order,
    the ``env_var`` consulted and the ``repo_root`` (None for single files).
    """

    explicit = str(config_path).strip() if config_path is not None else ""
    mode = "explicit"
    if not explicit and config_path is None and env_var:
        explicit = os.environ.get(env_var, "").strip()
        mode = "env"

    if explicit:
        path = Path(os.path.expandvars(os.path.expanduser(explicit))).absolute()
        return read_config_file(path), {"mode": mode, "paths": [str(path)], "env_var": env_var, "repo_root": None}

    repo_root = find_repo_root(start_dir)
    config_dir = Path(repo_root) / CONFIG_DIR
    base_path = config_dir / BASE_CONFIG_FILE
    if not base_path.is_file():
        raise FileNotFoundError(f"Missing base config file: {base_path}")

    cfg = read_config_file(base_path)
    paths = [str(base_path)]
    local_path = config_dir / LOCAL_CONFIG_FILE
    if local_path.is_file():
        cfg = apply_local_overlay(cfg, read_config_file(local_path))
        paths.append(str(local_path))

    meta = {
        "mode": "base+local" if len(paths) > 1 else "base",
        "paths": paths,
        "env_var": env_var,
        "repo_root": repo_root,
    }
    return cfg, meta
