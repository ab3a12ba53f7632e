"""Tests for snippet file storage."""

import subprocess
from datetime import datetime
from pathlib import Path

import pytest

from snipnotes.core.code_store import CodeStore, format_rust
from snipnotes.errors import CodeStoreError
from snipnotes.models.note import Language


class _FrozenDatetime(datetime):
    @classmethod
    def now(cls, tz=None) -> datetime:
        return cls(2024, 1, 2, 3, 4, 5, 6)


def test_save_writes_file_in_language_directory(code_store: CodeStore) -> None:
    path = code_store.save("print('hi')\n", Language.PYTHON)
    assert path.parent == code_store.base_dir / "python"
    assert path.name.startswith("code_")
    assert path.suffix == ".py"
    assert path.read_text() == "print('hi')\n"


def test_save_makes_names_unique(
    code_store: CodeStore, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr("snipnotes.core.code_store.datetime", _FrozenDatetime)
    first = code_store.save("a", Language.NONE)
    second = code_store.save("b", Language.NONE)
    assert first.name == "code_20240102_030405_000006.txt"
    assert second.name == "code_20240102_030405_000006-1.txt"
    assert first.read_text() == "a"


def test_save_formats_rust_when_enabled(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr("snipnotes.core.code_store.format_rust", lambda code: "formatted\n")
    store = CodeStore(tmp_path / "code")
    assert store.save("fn main(){}", Language.RUST).read_text() == "formatted\n"
    assert store.save("x=1", Language.PYTHON).read_text() == "x=1"


def test_save_raises_when_directory_is_unwritable(tmp_path: Path) -> None:
    blocker = tmp_path / "code"
    blocker.write_text("not a directory")
    with pytest.raises(CodeStoreError):
        CodeStore(blocker).save("x", Language.NONE)


def test_read_missing_file_raises(code_store: CodeStore, tmp_path: Path) -> None:
    with pytest.raises(CodeStoreError):
        code_store.read(tmp_path / "missing.rs")


def test_delete_is_best_effort(code_store: CodeStore) -> None:
    path = code_store.save("x", Language.NONE)
    assert code_store.delete(path) is True
    assert not path.exists()
    assert code_store.delete(path) is False
    assert code_store.delete(None) is False


def test_delete_refuses_paths_outside_base_dir(code_store: CodeStore, tmp_path: Path) -> None:
    outside = tmp_path / "keep.txt"
    outside.write_text("precious")
    assert code_store.delete(outside) is False
    assert outside.exists()


def test_validate_reports_limits() -> None:
    assert CodeStore.validate("small") == []
    warnings = CodeStore.validate("x\n" * 1001)
    assert any("line limit" in w for w in warnings)
    assert any("KB" in w for w in CodeStore.validate("x" * 50_001))


def test_format_rust_without_rustfmt_returns_input(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("snipnotes.core.code_store.shutil.which", lambda name: None)
    assert format_rust("fn main(){}") == "fn main(){}"


def test_format_rust_uses_rustfmt_output(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[list[str]] = []

    def fake_run(cmd: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        calls.append(cmd)
        return subprocess.CompletedProcess(cmd, 0, stdout="fn main() {}\n", stderr="")

    monkeypatch.setattr("snipnotes.core.code_store.shutil.which", lambda name: "/bin/rustfmt")
    monkeypatch.setattr("snipnotes.core.code_store.subprocess.run", fake_run)
    assert format_rust("fn main(){}") == "fn main() {}\n"
    assert calls[0][0] == "/bin/rustfmt"


def test_format_rust_falls_back_on_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(cmd: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        return subprocess.CompletedProcess(cmd, 1, stdout="", stderr="error")

    monkeypatch.setattr("snipnotes.core.code_store.shutil.which", lambda name: "/bin/rustfmt")
    monkeypatch.setattr("snipnotes.core.code_store.subprocess.run", fake_run)
    assert format_rust("fn main(){") == "fn main(){"
