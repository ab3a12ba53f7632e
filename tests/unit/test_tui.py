"""Tests for the prompt_toolkit front end: key translation and fragment rendering."""

import pytest
from prompt_toolkit import Application
from prompt_toolkit.application import create_app_session
from prompt_toolkit.input import create_pipe_input
from prompt_toolkit.key_binding import KeyPress
from prompt_toolkit.keys import Keys
from prompt_toolkit.output import DummyOutput

from snipnotes.core.editor.text_buffer import TextBuffer
from snipnotes.core.session.controller import SessionController
from snipnotes.core.session.keys import Key, KeyEvent
from snipnotes.models.note import Language
from snipnotes.tui import render
from snipnotes.tui.app import create_app, translate_key
from tests.unit.fakes import press, type_text


@pytest.mark.parametrize(
    ("key_press", "expected"),
    [
        (KeyPress(Keys.ControlM, "\r"), KeyEvent(Key.ENTER)),
        (KeyPress(Keys.Escape, "\x1b"), KeyEvent(Key.ESC)),
        (KeyPress(Keys.ControlI, "\t"), KeyEvent(Key.TAB)),
        (KeyPress(Keys.BackTab), KeyEvent(Key.TAB, shift=True)),
        (KeyPress(Keys.ControlH, "\x7f"), KeyEvent(Key.BACKSPACE)),
        (KeyPress(Keys.ShiftLeft), KeyEvent(Key.LEFT, shift=True)),
        (KeyPress(Keys.ControlRight), KeyEvent(Key.RIGHT, ctrl=True)),
        (KeyPress(Keys.ControlS, "\x13"), KeyEvent("s", ctrl=True)),
        (KeyPress("a", "a"), KeyEvent("a")),
        (KeyPress("é", "é"), KeyEvent("é")),
    ],
)
def test_translate_key(key_press: KeyPress, expected: KeyEvent) -> None:
    assert translate_key(key_press) == expected


def test_translate_bracketed_paste_carries_text() -> None:
    event = translate_key(KeyPress(Keys.BracketedPaste, "line1\nline2"))
    assert event == KeyEvent(Key.PASTE, text="line1\nline2")


def test_translate_unhandled_key_returns_none() -> None:
    assert translate_key(KeyPress(Keys.F5)) is None


def test_char_styles_cover_every_character() -> None:
    code = "\nfn main() {\n    let x = 1;\n}\n\n"
    styles = render.char_styles(code, Language.RUST)
    assert len(styles) == len(code)
    assert any("keyword" in s for s in styles)
    assert render.char_styles("plain", Language.NONE) == [""] * 5


def test_buffer_fragments_mark_cursor_and_selection() -> None:
    buf = TextBuffer("abc\nde", cursor=0)
    buf.move_right(select=True)

    fragments = render.buffer_fragments(buf, focused=True)

    assert "".join(text for _, text in fragments) == "abc\nde"
    assert fragments[0] == (" class:selection", "a")
    assert fragments[1] == (" class:cursor", "b")


def test_buffer_fragments_draw_cursor_at_line_end() -> None:
    buf = TextBuffer.with_text("ab")
    fragments = render.buffer_fragments(buf, focused=True)
    assert fragments[-1] == ("class:cursor", " ")
    assert ("class:cursor", " ") not in render.buffer_fragments(buf, focused=False)


def test_buffer_fragments_respect_scroll_and_height() -> None:
    buf = TextBuffer("\n".join(str(i) for i in range(10)))
    buf.scroll_by(4)
    fragments = render.buffer_fragments(buf, focused=False, height=3)
    assert "".join(text for _, text in fragments) == "4\n5\n6"


def test_panels_reflect_controller_state(controller: SessionController) -> None:
    assert render.panel_title(controller, controller.focus).startswith("▶ ")
    sections = render.sections_panel(controller)
    assert sections[0] == ("class:item.selected", " 📁 Notes \n")

    details = render.details_panel(controller)
    assert "Welcome" in details[0][1]
    assert details[0][0] == ""


def test_status_line_prefers_message(controller: SessionController) -> None:
    press(controller, "a", Key.ENTER)
    assert render.status_line(controller) == [("class:status.message", " Title cannot be empty")]
    press(controller, Key.ESC)
    texts = "".join(text for _, text in render.status_line(controller))
    assert "Add section" in texts


def test_popup_titles(controller: SessionController) -> None:
    assert render.popup_title(controller) == ""
    press(controller, "a")
    assert render.popup_title(controller) == "Add section"
    press(controller, Key.ESC, Key.TAB, Key.DOWN, "e")
    assert render.popup_title(controller) == "Edit detail"
    press(controller, Key.ESC, "v")
    assert render.popup_title(controller) == "View detail"
    text = "".join(t for _, t in render.edit_popup(controller))
    assert "Hello world" in text
    assert "Code" in text


def test_search_results_popup_shows_link(controller: SessionController) -> None:
    press(controller, "/")
    type_text(controller, "hell")
    text = "".join(t for _, t in render.search_results_popup(controller))
    assert "[Local] Welcome" in text
    assert "Hello world" in text


def test_export_popup_lists_formats(controller: SessionController) -> None:
    press(controller, "x", "1")
    text = "".join(t for _, t in render.export_popup(controller))
    assert " 1. JSON" in text
    assert " 3. CSV" in text
    assert controller.export_message in text


def test_create_app_builds_full_screen_application(controller: SessionController) -> None:
    with create_pipe_input() as pipe_input, create_app_session(
        input=pipe_input, output=DummyOutput()
    ):
        app = create_app(controller)
        assert isinstance(app, Application)
        assert app.full_screen
