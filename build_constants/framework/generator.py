from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path

from build_constants.framework.constants import PUBLIC, ConstantSet, split_classname
from build_constants.framework.errors import DirectoryCreationError, WriteError
from build_constants.framework.values import LongValue, StringValue, stringify

logger = logging.getLogger(__name__)

SOURCE_EXTENSION = ".java"
GENERATOR_NAME = "build-constants"

_MILLIS_PER_SECOND = 1000
_SECONDS_PER_DAY = 86400
_DAYS_PER_400_YEARS = 146097
# Days from 0000-03-01 to 1970-01-01 in the proleptic Gregorian calendar.
_EPOCH_SHIFT_DAYS = 719468


def _civil_from_days(days: int) -> tuple[int, int, int]:
    """(year, month, day) for a day count relative to 1970-01-01, for any int64 range."""

    shifted = days + _EPOCH_SHIFT_DAYS
    era, day_of_era = divmod(shifted, _DAYS_PER_400_YEARS)
    year_of_era = (day_of_era - day_of_era // 1460 + day_of_era // 36524 - day_of_era // 146096) // 365
    day_of_year = day_of_era - (365 * year_of_era + year_of_era // 4 - year_of_era // 100)
    march_month = (5 * day_of_year + 2) // 153
    day = day_of_year - (153 * march_month + 2) // 5 + 1
    month = march_month + 3 if march_month < 10 else march_month - 9
    year = year_of_era + era * 400 + (1 if month <= 2 else 0)
    return year, month, day


def format_build_date(build_time_millis: int) -> str:
    """
    ISO-8601 UTC timestamp with second precision, e.g. 2024-06-21T05:12:05Z.

    Uses the proleptic Gregorian calendar. Years past 9999 get more digits and
    years before 1 a leading minus sign, so every 64-bit millisecond value formats.
    """

    seconds = build_time_millis // _MILLIS_PER_SECOND
    days, second_of_day = divmod(seconds, _SECONDS_PER_DAY)
    year, month, day = _civil_from_days(days)
    hour, remainder = divmod(second_of_day, 3600)
    minute, second = divmod(remainder, 60)
    year_text = f"-{-year:04d}" if year < 0 else f"{year:04d}"
    return f"{year_text}-{month:02d}-{day:02d}T{hour:02d}:{minute:02d}:{second:02d}Z"


def output_path(output_root: str | os.PathLike[str], fully_qualified_name: str) -> Path:
    package_name, class_name = split_classname(fully_qualified_name)
    return Path(output_root).joinpath(*package_name.split("."), class_name + SOURCE_EXTENSION)


def prepare_output_path(output_root: str | os.PathLike[str], fully_qualified_name: str) -> Path:
    """Compute the destination file and create its missing parent directories."""

    path = output_path(output_root, fully_qualified_name)
    parent = path.parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryCreationError(parent, exc.strerror or str(exc)) from exc
    if not parent.is_dir():
        raise DirectoryCreationError(parent, "not a directory")
    return path


def render_source(constant_set: ConstantSet) -> str:
    package_name, class_name = split_classname(constant_set.fully_qualified_name)
    modifier = "public " if constant_set.access == PUBLIC else ""

    def constant_line(java_type: str, name: str, literal: str) -> str:
        return f"    {modifier}static final {java_type} {name} = {literal};"

    standard = [
        ("PROJECT_NAME", StringValue(stringify(constant_set.project_name))),
        ("PROJECT_VERSION", StringValue(stringify(constant_set.project_version))),
        ("PROJECT_GROUP", StringValue(stringify(constant_set.project_group))),
        ("BUILD_TIME", LongValue(constant_set.build_time_millis)),
        ("BUILD_DATE", StringValue(format_build_date(constant_set.build_time_millis))),
    ]

    lines: list[str] = []
    lines.append("//")
    lines.append(f"// DO NOT EDIT - File generated by the {GENERATOR_NAME} generator.")
    lines.append("//")
    lines.append("")
    lines.append(f"package {package_name};")
    lines.append("")
    lines.append('@SuppressWarnings("all")')
    lines.append(f"{modifier}final class {class_name} {{")
    lines.append("")

    for name, value in [*standard, *constant_set.sorted_constants()]:
        lines.append(constant_line(value.java_type(), name, value.literal()))

    lines.append("")
    lines.append(f"    private {class_name}() {{ }}")
    lines.append("}")

    return "\n".join(lines) + "\n"


def _new_file_mode(path: Path) -> int:
    """Mode for the written file: keep the existing destination's, else what open() would give."""

    if path.is_file():
        return stat.S_IMODE(path.stat().st_mode)
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _atomic_write_text(path: Path, content: str) -> None:
    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            newline="",
            delete=False,
            dir=str(path.parent),
            prefix=path.name + ".",
            suffix=".tmp",
        ) as handle:
            temp_path = Path(handle.name)
            handle.write(content)
        os.chmod(temp_path, _new_file_mode(path))
        os.replace(temp_path, path)
    except OSError as exc:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
        raise WriteError(path, exc.strerror or str(exc)) from exc


def write_constants(constant_set: ConstantSet, output_root: str | os.PathLike[str]) -> Path:
    """
    Render the constants class and write it below `output_root`.

    The file is written to a temporary sibling and moved into place, so the
    destination either holds the previous file or the complete new one.

    Raises:
        DirectoryCreationError: parent directories could not be created.
        WriteError: the file could not be written.
    """

    content = render_source(constant_set)
    path = prepare_output_path(output_root, constant_set.fully_qualified_name)
    logger.info("Writing constants class %s.%s", constant_set.package_name, constant_set.class_name)
    _atomic_write_text(path, content)
    logger.debug("Wrote %s (%d bytes)", path, len(content.encode("utf-8")))
    return path
