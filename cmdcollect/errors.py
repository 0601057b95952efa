"""Exception types raised by the scan and generation phases."""

from __future__ import annotations

from pathlib import Path


class CollectError(RuntimeError):
    """Base class for fatal cmdcollect failures."""


class ConfigError(CollectError):
    """Raised when the build environment itself is unusable."""


class WorkspaceNotFoundError(ConfigError):
    """No ancestor directory holds a workspace ``Cargo.toml``."""

    def __init__(self, start_dir: Path) -> None:
        super().__init__(f"Workspace root not found from {start_dir}")
        self.start_dir = start_dir


class ManifestError(ConfigError):
    """The workspace manifest could not be read or is missing required keys."""


class MissingEnvironmentError(ConfigError):
    """A required environment variable is not set."""

    def __init__(self, variable: str) -> None:
        super().__init__(f"{variable} not set")
        self.variable = variable


class OutputDirectoryError(ConfigError):
    """The command list directory could not be created or written."""


class InvalidCommandError(CollectError):
    """A command list entry contains characters outside ``[A-Za-z0-9_:]``."""

    def __init__(self, identifier: str, source: Path | None = None) -> None:
        location = f" ({source.name})" if source is not None else ""
        super().__init__(f"Invalid function name `{identifier}` in command file{location}")
        self.identifier = identifier
        self.source = source


__all__ = [
    "CollectError",
    "ConfigError",
    "InvalidCommandError",
    "ManifestError",
    "MissingEnvironmentError",
    "OutputDirectoryError",
    "WorkspaceNotFoundError",
]
