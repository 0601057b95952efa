"""Workspace discovery and Cargo.toml parsing."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Mapping

from .errors import ManifestError, MissingEnvironmentError, WorkspaceNotFoundError
from .logging import get_logger
from .models import Member, Workspace

MANIFEST_FILENAME = "Cargo.toml"
MANIFEST_DIR_ENV = "CARGO_MANIFEST_DIR"
PKG_NAME_ENV = "CARGO_PKG_NAME"

_WORKSPACE_TABLE = "[workspace]"

logger = get_logger("workspace")


def manifest_dir_from_env(environ: Mapping[str, str] | None = None) -> Path:
    """Return the compiling crate's directory from ``CARGO_MANIFEST_DIR``."""
    env = os.environ if environ is None else environ
    value = env.get(MANIFEST_DIR_ENV)
    if not value:
        raise MissingEnvironmentError(MANIFEST_DIR_ENV)
    return Path(value)


def find_workspace_dir(start_dir: Path) -> Path:
    """Walk up from ``start_dir`` to the nearest Cargo.toml declaring a workspace."""
    start = start_dir.expanduser().resolve()
    for candidate in (start, *start.parents):
        manifest = candidate / MANIFEST_FILENAME
        if not manifest.is_file():
            continue
        try:
            contents = manifest.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            continue
        if _WORKSPACE_TABLE in contents:
            logger.debug("Workspace root resolved to %s", candidate)
            return candidate
    raise WorkspaceNotFoundError(start_dir)


def read_manifest(workspace_root: Path) -> Dict[str, Any]:
    cargo_toml = workspace_root / MANIFEST_FILENAME
    try:
        contents = cargo_toml.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestError(f"Failed to read workspace Cargo.toml at {cargo_toml}: {exc}") from exc
    try:
        return tomllib.loads(contents)
    except tomllib.TOMLDecodeError as exc:
        raise ManifestError(f"Failed to parse workspace Cargo.toml at {cargo_toml}: {exc}") from exc


def get_workspace_members(workspace_root: Path) -> List[str]:
    data = read_manifest(workspace_root)
    return _members_from(data, workspace_root)


def get_workspace_pkg_name(workspace_root: Path) -> str:
    data = read_manifest(workspace_root)
    return _package_name_from(data, workspace_root)


def load_workspace(start_dir: Path) -> Workspace:
    """Resolve the workspace containing ``start_dir`` and read its manifest."""
    root = find_workspace_dir(start_dir)
    data = read_manifest(root)
    package_name = _package_name_from(data, root)
    members = [Member(path=path, root=root / path) for path in _members_from(data, root)]
    return Workspace(root=root, package_name=package_name, members=members)


def _package_name_from(data: Dict[str, Any], root: Path) -> str:
    package = data.get("package")
    name = package.get("name") if isinstance(package, dict) else None
    if not isinstance(name, str) or not name:
        raise ManifestError(f"{root / MANIFEST_FILENAME} has no [package].name")
    return name


def _members_from(data: Dict[str, Any], root: Path) -> List[str]:
    workspace = data.get("workspace")
    members = workspace.get("members") if isinstance(workspace, dict) else None
    if not isinstance(members, list) or not all(isinstance(item, str) for item in members):
        raise ManifestError(f"{root / MANIFEST_FILENAME} has no [workspace].members list")
    return list(members)


__all__ = [
    "MANIFEST_DIR_ENV",
    "PKG_NAME_ENV",
    "find_workspace_dir",
    "get_workspace_members",
    "get_workspace_pkg_name",
    "load_workspace",
    "manifest_dir_from_env",
]
