"""Declared inputs and output of a generation step.

The host build system compares these declarations between runs to decide whether
the constants file must be regenerated. Watched files are opaque triggers: they
are hashed, never parsed.
"""

from __future__ import annotations

import hashlib
import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CONVENTIONAL_INPUT_FILES: tuple[str, ...] = (
    "pyproject.toml",
    "setup.cfg",
    "build_constants.properties",
)


@dataclass(frozen=True)
class StalenessContract:
    inputs: tuple[Path, ...]
    output_dir: Path

    def fingerprints(self) -> dict[str, str]:
        """SHA-256 of every declared input, keyed by path."""

        digests: dict[str, str] = {}
        for path in self.inputs:
            hasher = hashlib.sha256()
            with open(path, "rb") as handle:
                for chunk in iter(lambda: handle.read(65536), b""):
                    hasher.update(chunk)
            digests[str(path)] = hasher.hexdigest()
        return digests

    def to_dict(self) -> dict[str, Any]:
        return {
            "inputs": [str(path) for path in self.inputs],
            "output_dir": str(self.output_dir),
            "fingerprints": self.fingerprints(),
        }


def declare_staleness(
    input_files: Iterable[str | os.PathLike[str] | None],
    output_dir: str | os.PathLike[str],
) -> StalenessContract:
    """Keep the declared inputs that exist as regular files, de-duplicated and sorted."""

    seen: set[Path] = set()
    for raw in input_files:
        if raw is None:
            continue
        text = str(raw).strip()
        if not text:
            continue
        candidate = Path(os.path.expandvars(os.path.expanduser(text)))
        if not candidate.is_file():
            logger.debug("Dropping missing input file: %s", candidate)
            continue
        seen.add(candidate.resolve())

    return StalenessContract(inputs=tuple(sorted(seen)), output_dir=Path(output_dir).resolve())


def default_input_files(project_root: str | os.PathLike[str], config_paths: Iterable[str] = ()) -> list[str]:
    """The loaded config files plus the conventional project files that may change build metadata."""

    root = Path(project_root)
    candidates = [str(path) for path in config_paths]
    candidates.extend(str(root / name) for name in CONVENTIONAL_INPUT_FILES)
    return candidates
