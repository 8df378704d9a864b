"""Constant-file generation engine.

- `build_constants.framework.constants`: validated ConstantSet + reserved names
- `build_constants.framework.values`: typed constant values (int/long/boolean/String)
- `build_constants.framework.generator`: path computation, rendering, atomic write
- `build_constants.framework.staleness`: declared inputs/output for up-to-date checks

Host concerns (config files, defaults, CLI) live in `build_constants.app`.
"""

from .constants import (
    PACKAGE,
    PUBLIC,
    RESERVED_NAMES,
    ConstantSet,
    SourceAccess,
    build_constant_set,
    split_classname,
)
from .errors import (
    BuildConstantsError,
    ConfigurationError,
    DirectoryCreationError,
    MissingPackageError,
    ReservedNameError,
    WriteError,
)
from .generator import format_build_date, output_path, render_source, write_constants
from .staleness import StalenessContract, declare_staleness
from .values import BoolValue, ConstantValue, IntValue, LongValue, StringValue, constant_value

__all__ = [
    "PACKAGE",
    "PUBLIC",
    "RESERVED_NAMES",
    "BoolValue",
    "BuildConstantsError",
    "ConfigurationError",
    "ConstantSet",
    "ConstantValue",
    "DirectoryCreationError",
    "IntValue",
    "LongValue",
    "MissingPackageError",
    "ReservedNameError",
    "SourceAccess",
    "StalenessContract",
    "StringValue",
    "WriteError",
    "build_constant_set",
    "constant_value",
    "declare_staleness",
    "format_build_date",
    "output_path",
    "render_source",
    "split_classname",
    "write_constants",
]
