import pytest

from snipnotes.core.session.shortcuts import COMMON_SHORTCUTS, help_lines, shortcuts_for
from snipnotes.models.note import Focus, Mode


@pytest.mark.parametrize("focus", list(Focus))
def test_normal_mode_includes_common_keys(focus: Focus) -> None:
    keys = shortcuts_for(focus)
    assert keys[: len(COMMON_SHORTCUTS)] == list(COMMON_SHORTCUTS)


def test_focus_specific_keys() -> None:
    assert ("a", "Add section") in shortcuts_for(Focus.SECTIONS)
    assert ("a", "Add detail") in shortcuts_for(Focus.DETAILS)


@pytest.mark.parametrize("mode", [m for m in Mode if m is not Mode.NORMAL])
def test_every_popup_mode_offers_escape(mode: Mode) -> None:
    keys = [key for key, _ in shortcuts_for(Focus.SECTIONS, mode)]
    assert "Esc" in keys


def test_editing_and_adding_share_keys() -> None:
    assert shortcuts_for(Focus.DETAILS, Mode.EDITING) == shortcuts_for(Focus.DETAILS, Mode.ADDING)


def test_help_lists_all_groups() -> None:
    lines = help_lines()
    for heading in ("General", "Sections", "Details", "Editing", "Search"):
        assert heading in lines
    assert any("Ctrl+S" in line for line in lines)
    assert any("Ctrl+A" in line and "Select all" in line for line in lines)
