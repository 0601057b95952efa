"""Tests for reading and normalizing command list files."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from cmdcollect.errors import InvalidCommandError
from cmdcollect.registry import (
    collect_commands,
    discover_commands,
    normalize_commands,
    strip_own_prefix,
)


def test_strips_prefix_for_calling_crate_only() -> None:
    raw = ["tauri_helper::local_cmd", "other_crate::foreign_cmd"]

    result = normalize_commands(raw, "tauri_helper")

    assert result == ["local_cmd", "other_crate::foreign_cmd"]


def test_preserves_prefix_when_calling_crate_differs() -> None:
    result = normalize_commands(["tauri_helper::cmd"], "another_crate")

    assert result == ["tauri_helper::cmd"]


def test_calling_crate_hyphens_fold_to_underscores() -> None:
    result = normalize_commands(["my_app::open", "my_app::close"], "my-app")

    assert result == ["close", "open"]


def test_sorts_and_deduplicates_commands() -> None:
    result = normalize_commands(["b_cmd", "a_cmd", "a_cmd", "c_cmd"], "tauri_helper")

    assert result == ["a_cmd", "b_cmd", "c_cmd"]


def test_stripped_and_unqualified_duplicates_collapse() -> None:
    result = normalize_commands(["pkg::greet", "greet"], "pkg")

    assert result == ["greet"]


def test_accepts_valid_identifiers_and_paths() -> None:
    result = normalize_commands(
        ["valid_cmd", "crate_name::valid_cmd", "a1_b2::c3"], "tauri_helper"
    )

    assert len(result) == 3


def test_invalid_command_name_is_fatal() -> None:
    with pytest.raises(InvalidCommandError) as excinfo:
        normalize_commands(["valid_cmd", "invalid-cmd"], "tauri_helper")

    assert excinfo.value.identifier == "invalid-cmd"
    assert "invalid-cmd" in str(excinfo.value)


def test_normalization_is_idempotent() -> None:
    once = normalize_commands(["pkg::local_cmd", "other::foreign_cmd", "x"], "pkg")

    assert normalize_commands(once, "pkg") == once


def test_strip_own_prefix_only_touches_leading_segment() -> None:
    assert strip_own_prefix("pkg::cmd", "pkg") == "cmd"
    assert strip_own_prefix("other::pkg::cmd", "pkg") == "other::pkg::cmd"
    assert strip_own_prefix("cmd", "pkg") == "cmd"


def test_missing_directory_warns_and_yields_nothing(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    missing = tmp_path / "target" / "tauri_commands_list"

    with caplog.at_level(logging.WARNING, logger="cmdcollect"):
        commands = collect_commands(missing, "pkg")

    assert commands == []
    assert "No commands directory found" in caplog.text


def test_discover_reads_only_txt_files_and_skips_blank_lines(tmp_path: Path) -> None:
    commands_dir = tmp_path / "list"
    commands_dir.mkdir()
    (commands_dir / "core.txt").write_text("core::a\n\n   core::b  \n", encoding="utf-8")
    (commands_dir / "notes.md").write_text("not-a-command\n", encoding="utf-8")
    (commands_dir / "nested").mkdir()

    entries = [identifier for identifier, _ in discover_commands(commands_dir)]

    assert sorted(entries) == ["core::a", "core::b"]


def test_invalid_entry_reports_source_file(tmp_path: Path) -> None:
    commands_dir = tmp_path / "list"
    commands_dir.mkdir()
    (commands_dir / "ui.txt").write_text("ui::show\nui::bad name\n", encoding="utf-8")

    with pytest.raises(InvalidCommandError) as excinfo:
        collect_commands(commands_dir, "pkg")

    assert excinfo.value.identifier == "ui::bad name"
    assert excinfo.value.source is not None
    assert excinfo.value.source.name == "ui.txt"


def test_collect_order_is_independent_of_file_order(tmp_path: Path) -> None:
    commands_dir = tmp_path / "list"
    commands_dir.mkdir()
    (commands_dir / "zeta.txt").write_text("zeta::alpha\n", encoding="utf-8")
    (commands_dir / "alpha.txt").write_text("alpha::zeta\n", encoding="utf-8")

    assert collect_commands(commands_dir, "pkg") == ["alpha::zeta", "zeta::alpha"]


def test_repeated_own_prefix_is_stripped_fully() -> None:
    once = normalize_commands(["pkg::pkg::x", "pkg::other::y"], "pkg")

    assert once == ["other::y", "x"]
    assert normalize_commands(once, "pkg") == once
