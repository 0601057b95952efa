"""Scan and generation phases.

The two phases never share memory: ``run_scan`` leaves one command list
file per member under the build output directory and ``run_generate``
reads whatever is there when it runs, possibly in another process and
possibly before any scan happened.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Callable, Optional

from .config import CollectConfig, load_config
from .emitter import DEFAULT_STYLE, CodeEmitter
from .logging import get_logger
from .manifest import ManifestWriter, qualify
from .models import MemberCommands, ScanReport, Workspace
from .registry import collect_commands
from .scanner import CommandScanner
from .workspace import load_workspace

logger = get_logger("pipeline")


class Pipeline:
    """Coordinates the scan and generation phases for one workspace."""

    def __init__(
        self,
        config: CollectConfig | None = None,
        *,
        collect_all: bool | None = None,
        scanner: CommandScanner | None = None,
        emitter: CodeEmitter | None = None,
    ) -> None:
        self._config = config
        self._collect_all = collect_all
        self._scanner = scanner
        self.emitter = emitter or CodeEmitter()

    def resolve(self, manifest_dir: Path) -> tuple[Workspace, CollectConfig]:
        workspace = load_workspace(manifest_dir)
        config = self._config if self._config is not None else load_config(workspace.root)
        if self._collect_all is not None:
            config = replace(config, collect_all=self._collect_all)
        return workspace, config

    def run_scan(
        self,
        manifest_dir: Path,
        *,
        on_member: Optional[Callable[[str], None]] = None,
    ) -> ScanReport:
        """Scan every workspace member and rewrite its command list file."""
        workspace, config = self.resolve(manifest_dir)
        scanner = self._scanner or CommandScanner(
            marker_attribute=config.marker_attribute,
            command_attribute=config.command_attribute,
            collect_all=config.collect_all,
        )
        writer = ManifestWriter(config.commands_dir(workspace.root))
        commands_dir = writer.prepare()

        if on_member is not None:
            for member in workspace.members:
                on_member(member.path)

        report = ScanReport(workspace=workspace, commands_dir=commands_dir)
        for member in workspace.members:
            functions = scanner.scan_member(member)
            qualified = qualify(workspace, member, functions)
            for name in qualified:
                logger.debug("found: %s", name)
            path = writer.write(member, qualified)
            report.members.append(
                MemberCommands(
                    member=member,
                    functions=functions,
                    qualified=qualified,
                    manifest_path=path,
                )
            )
        logger.info(
            "Collected %d command(s) from %d member(s)", report.total, len(report.members)
        )
        return report

    def run_generate(
        self,
        manifest_dir: Path,
        style: str = DEFAULT_STYLE,
        *,
        calling_crate: str | None = None,
        print_array: bool = False,
    ) -> str:
        """Read the command lists and render the registration expression."""
        workspace, config = self.resolve(manifest_dir)
        crate = calling_crate or workspace.package_name
        commands = collect_commands(config.commands_dir(workspace.root), crate)
        return self.emitter.render(commands, style, print_array=print_array)


__all__ = ["Pipeline"]
