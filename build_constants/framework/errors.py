from __future__ import annotations

import os
from collections.abc import Iterable


class BuildConstantsError(Exception):
    """Base class for every failure of a constants generation step."""


class ConfigurationError(BuildConstantsError, ValueError):
    pass


class MissingPackageError(ConfigurationError):
    def __init__(self, classname: str):
        super().__init__(
            f"Class name must be fully qualified with a package (e.g. org.example.app.BuildConstants): {classname!r}"
        )
        self.classname = classname


class ReservedNameError(ConfigurationError):
    def __init__(self, names: Iterable[str]):
        self.names = tuple(sorted(names))
        super().__init__(
            "Additional constants must not use the reserved names: " + ", ".join(self.names)
        )


class DirectoryCreationError(BuildConstantsError, OSError):
    def __init__(self, path: str | os.PathLike[str], reason: str | None = None):
        self.path = str(path)
        message = f"Could not create directories {self.path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class WriteError(BuildConstantsError, OSError):
    def __init__(self, path: str | os.PathLike[str], reason: str | None = None):
        self.path = str(path)
        message = f"Could not write constants file {self.path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
