"""Tests for the snipnotes CLI."""

import json
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from snipnotes.cli import app
from snipnotes.core.database.schema import connect
from snipnotes.core.database.store import load_sections, save_section
from snipnotes.core.session.controller import SessionController
from snipnotes.logging_config import configure_logging
from snipnotes.models.note import Detail, Language, Section

runner = CliRunner()


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    """The CLI points loguru at the runner's captured stderr; reset it afterwards."""
    yield
    configure_logging()


def _seed(base_dir: Path) -> None:
    runner.invoke(app, ["--base-dir", str(base_dir), "sections"])
    conn = connect(base_dir / "data.db")
    try:
        section = load_sections(conn)[0]
        section.details = [
            Detail(id=0, title="Welcome", description="Hello world"),
            Detail(id=0, title="Vec", description="growable", language=Language.RUST),
        ]
        save_section(conn, section)
        save_section(conn, Section(id=0, title="📁 Empty"))
    finally:
        conn.close()


def test_sections_creates_store_with_default_section(tmp_path: Path) -> None:
    result = runner.invoke(app, ["--base-dir", str(tmp_path), "sections"])
    assert result.exit_code == 0, result.output
    assert "📁 Notes  (0 details)" in result.output
    assert (tmp_path / "data.db").exists()
    assert (tmp_path / "code").is_dir()


def test_sections_lists_details(tmp_path: Path) -> None:
    _seed(tmp_path)
    result = runner.invoke(app, ["-d", str(tmp_path), "sections"])
    assert result.exit_code == 0, result.output
    assert "📁 Notes  (2 details)" in result.output
    assert "🦀 Vec" in result.output
    assert "📁 Empty  (0 details)" in result.output


def test_search_text_output(tmp_path: Path) -> None:
    _seed(tmp_path)
    result = runner.invoke(app, ["-d", str(tmp_path), "search", "hello"])
    assert result.exit_code == 0, result.output
    assert "Found 1 results:" in result.output
    assert "Welcome" in result.output


def test_search_json_output(tmp_path: Path) -> None:
    _seed(tmp_path)
    result = runner.invoke(app, ["-d", str(tmp_path), "search", "empty", "--json"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["total"] == 1
    hit = data["results"][0]
    assert hit["title"] == "📁 Empty"
    assert hit["source"] == "Local"
    assert hit["detail_id"] is None


def test_export_writes_file(tmp_path: Path) -> None:
    _seed(tmp_path)
    result = runner.invoke(app, ["-d", str(tmp_path), "export", "json"])
    assert result.exit_code == 0, result.output
    path = tmp_path / "exports" / "snipnotes-export.json"
    assert f"Exported 2 sections to {path}" in result.output
    data = json.loads(path.read_text(encoding="utf-8"))
    assert [s["title"] for s in data["sections"]] == ["📁 Notes", "📁 Empty"]


def test_export_rejects_unknown_format(tmp_path: Path) -> None:
    result = runner.invoke(app, ["-d", str(tmp_path), "export", "pdf"])
    assert result.exit_code != 0


def test_unusable_base_dir_exits_with_error(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    result = runner.invoke(app, ["-d", str(blocker), "sections"])
    assert result.exit_code == 1


def test_base_dir_from_environment(tmp_path: Path) -> None:
    result = runner.invoke(app, ["sections"], env={"SNIPNOTES_HOME": str(tmp_path)})
    assert result.exit_code == 0, result.output
    assert (tmp_path / "data.db").exists()


def test_run_hands_loaded_controller_to_tui(tmp_path: Path) -> None:
    _seed(tmp_path)
    with patch("snipnotes.tui.app.run") as mock_run:
        result = runner.invoke(app, ["-d", str(tmp_path), "run"])

    assert result.exit_code == 0, result.output
    mock_run.assert_called_once()
    controller = mock_run.call_args.args[0]
    assert isinstance(controller, SessionController)
    assert [s.title for s in controller.sections] == ["📁 Notes", "📁 Empty"]
    assert controller.code_store.base_dir == (tmp_path / "code").resolve()
    controller.close()
