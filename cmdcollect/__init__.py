"""Collect annotated command functions across a Cargo workspace.

Scanning writes one command list file per workspace member; generation
reads those files back and renders the handler registration expression.
"""

from .emitter import CodeEmitter
from .errors import CollectError, ConfigError, InvalidCommandError
from .pipeline import Pipeline
from .registry import collect_commands, normalize_commands
from .scanner import CommandScanner
from .workspace import find_workspace_dir, load_workspace

__version__ = "0.1.0"

__all__ = [
    "CodeEmitter",
    "CollectError",
    "CommandScanner",
    "ConfigError",
    "InvalidCommandError",
    "Pipeline",
    "collect_commands",
    "find_workspace_dir",
    "load_workspace",
    "normalize_commands",
]
