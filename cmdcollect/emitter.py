"""Render the registry into the Rust expression handed to the compiler."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateNotFound

from .logging import get_logger

STYLES = ("tauri", "specta", "array")
DEFAULT_STYLE = "tauri"

logger = get_logger("emitter")


class CodeEmitter:
    """Turns a normalized command list into a registration expression."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        directories = []
        if templates_dir is not None:
            directories.append(str(templates_dir))
        directories.append(str(Path(__file__).with_name("templates")))
        self._env = Environment(
            loader=FileSystemLoader(directories),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )

    def render(
        self,
        commands: Sequence[str],
        style: str = DEFAULT_STYLE,
        *,
        print_array: bool = False,
    ) -> str:
        if style not in STYLES:
            raise ValueError(f"Unknown output style '{style}' (expected one of {', '.join(STYLES)})")
        if not commands:
            logger.warning(
                "No commands were collected. Ensure functions are annotated with "
                "`#[auto_collect_command]`."
            )
        try:
            template = self._env.get_template(f"{style}.rs.j2")
        except TemplateNotFound as exc:
            raise ValueError(f"No template for output style '{style}'") from exc
        return template.render(commands=list(commands), print_array=print_array).strip()


__all__ = ["CodeEmitter", "DEFAULT_STYLE", "STYLES"]
