"""Reading command list files back and normalizing them into a registry."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List, Set, Tuple

from .errors import InvalidCommandError
from .logging import get_logger
from .manifest import COMMAND_FILE_SUFFIX
from .models import normalize_crate_name

_VALID_COMMAND = re.compile(r"[A-Za-z0-9_:]+")

logger = get_logger("registry")

RawCommand = Tuple[str, Path | None]


def discover_commands(commands_dir: Path) -> List[RawCommand]:
    """Return every non-blank entry from the command list files.

    A missing directory means generation ran before any scan; that is
    reported and treated as an empty list.
    """
    if not commands_dir.is_dir():
        logger.warning("No commands directory found at %s", commands_dir)
        return []

    commands: List[RawCommand] = []
    for path in sorted(commands_dir.iterdir()):
        if not path.is_file() or path.suffix != COMMAND_FILE_SUFFIX:
            continue
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Skipping unreadable command file %s: %s", path, exc)
            continue
        for line in content.splitlines():
            stripped = line.strip()
            if stripped:
                commands.append((stripped, path))
    return commands


def strip_own_prefix(identifier: str, calling_crate: str) -> str:
    """Drop leading ``crate::`` segments while they name the calling crate."""
    own = normalize_crate_name(calling_crate)
    while True:
        owner, sep, rest = identifier.partition("::")
        if not (sep and rest and normalize_crate_name(owner) == own):
            return identifier
        identifier = rest


def normalize_commands(raw_commands: Iterable[str | RawCommand], calling_crate: str) -> List[str]:
    """Return the sorted, duplicate-free registry as seen from ``calling_crate``.

    Raises ``InvalidCommandError`` on the first malformed entry; no partial
    registry is returned.
    """
    commands: Set[str] = set()
    for entry in raw_commands:
        identifier, source = entry if isinstance(entry, tuple) else (entry, None)
        identifier = identifier.strip()
        name = strip_own_prefix(identifier, calling_crate)
        if not _VALID_COMMAND.fullmatch(name):
            raise InvalidCommandError(identifier, source)
        commands.add(name)
    return sorted(commands)


def collect_commands(commands_dir: Path, calling_crate: str) -> List[str]:
    return normalize_commands(discover_commands(commands_dir), calling_crate)


__all__ = [
    "collect_commands",
    "discover_commands",
    "normalize_commands",
    "strip_own_prefix",
]
