"""Per-member command list files under the build output directory."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from .errors import OutputDirectoryError
from .logging import get_logger
from .models import Member, Workspace

COMMAND_FILE_SUFFIX = ".txt"

logger = get_logger("manifest")


def ensure_commands_dir(commands_dir: Path) -> Path:
    try:
        commands_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputDirectoryError(
            f"Failed to create command list directory {commands_dir}: {exc}"
        ) from exc
    return commands_dir


def command_file_path(commands_dir: Path, member: Member) -> Path:
    return commands_dir / f"{member.crate_name}{COMMAND_FILE_SUFFIX}"


def qualify(workspace: Workspace, member: Member, functions: Iterable[str]) -> List[str]:
    """Prefix each function with the crate path it will be reachable under."""
    prefix = workspace.qualifier_for(member)
    return [f"{prefix}::{name}" for name in functions]


class ManifestWriter:
    """Writes one command list file per member, replacing any previous one."""

    def __init__(self, commands_dir: Path) -> None:
        self.commands_dir = commands_dir

    def prepare(self) -> Path:
        return ensure_commands_dir(self.commands_dir)

    def write(self, member: Member, qualified: Iterable[str]) -> Path:
        path = command_file_path(self.commands_dir, member)
        content = "".join(f"{name}\n" for name in qualified)
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise OutputDirectoryError(f"Failed to write command file {path}: {exc}") from exc
        logger.info("Wrote %s", path)
        return path


__all__ = [
    "COMMAND_FILE_SUFFIX",
    "ManifestWriter",
    "command_file_path",
    "ensure_commands_dir",
    "qualify",
]
