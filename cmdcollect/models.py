"""Core data models shared across cmdcollect components."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

# Member directory name used by `cargo tauri init` for the application crate.
APP_CRATE_SENTINEL = "src_tauri"


def normalize_crate_name(name: str) -> str:
    """Fold hyphens to underscores the way rustc names crates."""
    return name.replace("-", "_")


@dataclass
class Member:
    """One workspace member as listed in ``[workspace].members``."""

    path: str
    root: Path

    @property
    def crate_name(self) -> str:
        """Directory base name, as written on disk.

        Taken from the joined path so a member listed as ``"."`` is named
        after the workspace directory.
        """
        return Path(os.path.normpath(self.root)).name

    @property
    def src_dir(self) -> Path:
        return self.root / "src"


@dataclass
class Workspace:
    """Resolved workspace root plus the contents of its manifest."""

    root: Path
    package_name: str
    members: List[Member] = field(default_factory=list)

    @property
    def crate_name(self) -> str:
        return normalize_crate_name(self.package_name)

    def qualifier_for(self, member: Member) -> str:
        """Return the crate path prefix used for ``member``'s commands.

        The application crate lives in ``src-tauri`` but its commands are
        reachable through the workspace package name, so it gets the
        package name instead of its directory name.
        """
        crate = normalize_crate_name(member.crate_name)
        if crate == APP_CRATE_SENTINEL:
            return self.crate_name
        return crate


@dataclass
class MemberCommands:
    """Commands collected from a single member and where they were written."""

    member: Member
    functions: List[str]
    qualified: List[str]
    manifest_path: Path


@dataclass
class ScanReport:
    """Outcome of a full workspace scan."""

    workspace: Workspace
    commands_dir: Path
    members: List[MemberCommands] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(len(entry.qualified) for entry in self.members)
