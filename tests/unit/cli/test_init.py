"""Tests for engram init command."""

from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from engram.cli.init import install_directive
from engram.cli.main import app
from engram.templates import DRAFT_TEMPLATE, ROOT_DIRECTIVE_TEMPLATE

runner = CliRunner()


def _run_init(tmp_path: Path, *flags: str):
    return runner.invoke(app, ["init", "--root", str(tmp_path), *flags])


# ---------------------------------------------------------------------------
# Scaffold
# ---------------------------------------------------------------------------


def test_init_creates_engram_structure(tmp_path: Path) -> None:
    result = _run_init(tmp_path)
    assert result.exit_code == 0, result.output
    assert (tmp_path / ".engram").is_dir()
    assert (tmp_path / ".engram" / "worklog").is_dir()
    assert (tmp_path / ".engram" / "AGENTS.md").exists()
    assert (tmp_path / ".engram" / "worklog" / "SUMMARY.md").exists()


def test_init_creates_empty_draft(tmp_path: Path) -> None:
    _run_init(tmp_path)
    content = (tmp_path / ".engram" / "draft.md").read_text(encoding="utf-8")
    assert content == DRAFT_TEMPLATE
    assert "<summary></summary>" in content
    assert "## Intent" in content
    assert "## Verification" in content


def test_init_summary_has_table_header(tmp_path: Path) -> None:
    _run_init(tmp_path)
    content = (tmp_path / ".engram" / "worklog" / "SUMMARY.md").read_text(encoding="utf-8")
    assert "| Entry | Summary |" in content


def test_init_agents_md_has_protocol(tmp_path: Path) -> None:
    _run_init(tmp_path)
    content = (tmp_path / ".engram" / "AGENTS.md").read_text(encoding="utf-8")
    assert "Engram Protocol: Agent Instructions" in content


def test_init_lists_created_files(tmp_path: Path) -> None:
    result = _run_init(tmp_path)
    assert "Initialized Engram" in result.output
    assert "draft.md" in result.output


def test_init_twice_fails(tmp_path: Path) -> None:
    assert _run_init(tmp_path).exit_code == 0
    result = _run_init(tmp_path)
    assert result.exit_code == 1
    assert "already initialized" in result.output


def test_init_without_flags_creates_no_directive_files(tmp_path: Path) -> None:
    _run_init(tmp_path)
    assert not (tmp_path / "WARP.md").exists()
    assert not (tmp_path / "AGENTS.md").exists()
    assert not (tmp_path / ".junie").exists()


def test_init_honours_project_config(tmp_path: Path) -> None:
    (tmp_path / "engram.yaml").write_text("store:\n  worklog: history\n", encoding="utf-8")
    result = _run_init(tmp_path)
    assert result.exit_code == 0
    assert (tmp_path / ".engram" / "history" / "SUMMARY.md").exists()


def test_init_invalid_config(tmp_path: Path) -> None:
    (tmp_path / "engram.yaml").write_text("store:\n  dir: ../elsewhere\n", encoding="utf-8")
    result = _run_init(tmp_path)
    assert result.exit_code == 1
    assert "configuration" in result.output.lower()
    assert not (tmp_path / ".engram").exists()


# ---------------------------------------------------------------------------
# Directive flags
# ---------------------------------------------------------------------------


def test_init_warp_flag(tmp_path: Path) -> None:
    result = _run_init(tmp_path, "--warp")
    assert result.exit_code == 0
    assert "Engram Protocol" in (tmp_path / "WARP.md").read_text(encoding="utf-8")


def test_init_junie_flag(tmp_path: Path) -> None:
    result = _run_init(tmp_path, "--junie")
    assert result.exit_code == 0
    content = (tmp_path / ".junie" / "guidelines.md").read_text(encoding="utf-8")
    assert "Engram Protocol" in content


def test_init_agents_flag(tmp_path: Path) -> None:
    result = _run_init(tmp_path, "--agents")
    assert result.exit_code == 0
    assert "Engram Protocol" in (tmp_path / "AGENTS.md").read_text(encoding="utf-8")


def test_init_all_flag(tmp_path: Path) -> None:
    result = _run_init(tmp_path, "--all")
    assert result.exit_code == 0
    assert (tmp_path / "WARP.md").exists()
    assert (tmp_path / ".junie" / "guidelines.md").exists()
    assert (tmp_path / "AGENTS.md").exists()


def test_init_detection_mode_appends_to_existing(tmp_path: Path) -> None:
    (tmp_path / "WARP.md").write_text("# Warp\n\nExisting content.\n", encoding="utf-8")

    result = _run_init(tmp_path)
    assert result.exit_code == 0

    content = (tmp_path / "WARP.md").read_text(encoding="utf-8")
    assert content.startswith("# Warp\n\nExisting content.\n")
    assert "Engram Protocol" in content
    assert not (tmp_path / "AGENTS.md").exists()


def test_init_directive_not_duplicated(tmp_path: Path) -> None:
    (tmp_path / "WARP.md").write_text("# Warp\n\n## Engram Protocol\n\nAlready here.\n", encoding="utf-8")

    result = _run_init(tmp_path, "--warp")
    assert result.exit_code == 0
    assert "Skipped" in result.output

    content = (tmp_path / "WARP.md").read_text(encoding="utf-8")
    assert content.count("Engram Protocol") == 1


# ---------------------------------------------------------------------------
# install_directive
# ---------------------------------------------------------------------------


def test_install_directive_outcomes(tmp_path: Path) -> None:
    target = tmp_path / "nested" / "AGENTS.md"
    assert install_directive(target) == "created"
    assert target.read_text(encoding="utf-8") == ROOT_DIRECTIVE_TEMPLATE
    assert install_directive(target) == "skipped"


def test_install_directive_separates_with_blank_line(tmp_path: Path) -> None:
    target = tmp_path / "WARP.md"
    target.write_text("# Warp", encoding="utf-8")
    assert install_directive(target) == "appended"
    assert target.read_text(encoding="utf-8") == "# Warp\n\n" + ROOT_DIRECTIVE_TEMPLATE
