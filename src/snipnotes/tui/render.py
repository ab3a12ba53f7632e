"""Formatted-text fragments for every part of the screen.

Each function reads controller state and returns prompt_toolkit
``(style, text)`` fragments; nothing here mutates the controller.
"""

from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.styles.pygments import pygments_token_to_classname
from pygments import lex
from pygments.lexer import Lexer
from pygments.lexers import PythonLexer, RustLexer

from snipnotes.core.editor.text_buffer import TextBuffer
from snipnotes.core.session.controller import EXPORT_FORMATS, SessionController
from snipnotes.core.session.shortcuts import help_lines, shortcuts_for
from snipnotes.models.note import Focus, Language, Mode, PopupFocus

_LEXERS: dict[Language, type[Lexer]] = {
    Language.RUST: RustLexer,
    Language.PYTHON: PythonLexer,
}

_PANEL_TITLES = {Focus.SECTIONS: "Sections", Focus.DETAILS: "Details", Focus.SEARCH: "Search"}


def char_styles(text: str, language: Language) -> list[str]:
    """Return one style string per character of ``text``."""
    lexer_cls = _LEXERS.get(language)
    if lexer_cls is None or not text:
        return [""] * len(text)
    # Keep leading/trailing newlines so the styles line up with the offsets.
    lexer = lexer_cls(stripnl=False, ensurenl=False)
    styles: list[str] = []
    for token, value in lex(text, lexer):
        styles.extend([f"class:{pygments_token_to_classname(token)}"] * len(value))
    styles = styles[: len(text)]
    styles.extend([""] * (len(text) - len(styles)))
    return styles


def buffer_fragments(
    buffer: TextBuffer,
    *,
    focused: bool,
    height: int | None = None,
    language: Language = Language.NONE,
) -> StyleAndTextTuples:
    """Render a text buffer with its selection, and its cursor when focused.

    Only ``height`` lines starting at the buffer's scroll offset are drawn.
    """
    styles = char_styles(buffer.text, language)
    selection = buffer.selection()
    first = buffer.scroll
    last = first + height if height is not None else buffer.line_count

    fragments: StyleAndTextTuples = []
    offset = 0
    for line_no, line in enumerate(buffer.lines()):
        if first <= line_no < last:
            if fragments:
                fragments.append(("", "\n"))
            for i, ch in enumerate(line):
                pos = offset + i
                style = styles[pos]
                if selection is not None and selection[0] <= pos < selection[1]:
                    style += " class:selection"
                if focused and pos == buffer.cursor:
                    style += " class:cursor"
                fragments.append((style, ch))
            if focused and buffer.cursor == offset + len(line):
                fragments.append(("class:cursor", " "))
        offset += len(line) + 1
    return fragments


def _list_fragments(
    items: list[str], selected: int | None, *, focused: bool, empty: str
) -> StyleAndTextTuples:
    if not items:
        return [("class:hint", empty)]
    fragments: StyleAndTextTuples = []
    for i, item in enumerate(items):
        style = ""
        if i == selected:
            style = "class:item.selected" if focused else "class:item.marked"
        fragments.append((style, f" {item} \n"))
    return fragments


def panel_title(controller: SessionController, focus: Focus) -> str:
    title = _PANEL_TITLES[focus]
    return f"▶ {title}" if controller.focus is focus else title


def sections_panel(controller: SessionController) -> StyleAndTextTuples:
    return _list_fragments(
        [s.title for s in controller.sections],
        controller.selected_section,
        focused=controller.focus is Focus.SECTIONS,
        empty="No sections. Press a to add one.",
    )


def details_panel(controller: SessionController) -> StyleAndTextTuples:
    section = controller.current_section
    if section is None:
        return [("class:hint", "Select a section.")]
    items = []
    for detail in section.details:
        icon = detail.language.icon if detail.code_path else " "
        items.append(f"{icon} {detail.title}  ({detail.created_at})")
    return _list_fragments(
        items,
        controller.selected_detail,
        focused=controller.focus is Focus.DETAILS,
        empty="No details. Press a to add one.",
    )


def search_bar(controller: SessionController) -> StyleAndTextTuples:
    active = controller.mode is Mode.SEARCHING
    fragments: StyleAndTextTuples = [
        ("class:search.target", f" [{controller.search_target.value}] "),
        ("", " 🔍 "),
        ("class:search.query", controller.search_query),
    ]
    if active:
        fragments.append(("class:cursor", " "))
    if controller.searching:
        fragments.append(("class:hint", "  searching…"))
    elif not active:
        fragments.append(("class:hint", "press / to search"))
    return fragments


def status_line(controller: SessionController) -> StyleAndTextTuples:
    if controller.message:
        return [("class:status.message", f" {controller.message}")]
    fragments: StyleAndTextTuples = []
    for key, action in shortcuts_for(controller.focus, controller.mode):
        fragments.append(("class:status.key", f" {key}"))
        fragments.append(("class:status", f" {action} "))
    return fragments


def popup_title(controller: SessionController) -> str:
    edit = controller.edit
    if edit is None:
        return ""
    noun = "detail" if edit.is_detail else "section"
    if controller.mode is Mode.VIEWING:
        return f"View {noun}"
    return f"{'Add' if edit.is_new else 'Edit'} {noun}"


def edit_popup(controller: SessionController) -> StyleAndTextTuples:
    edit = controller.edit
    if edit is None:
        return []
    viewing = controller.mode is Mode.VIEWING

    def label(text: str, field: PopupFocus) -> StyleAndTextTuples:
        style = "class:label.focused" if controller.popup_focus is field else "class:label"
        return [(style, f"{text}\n")]

    fragments: StyleAndTextTuples = []
    fragments += label("Title", PopupFocus.TITLE)
    fragments += buffer_fragments(
        edit.input_buffer, focused=controller.popup_focus is PopupFocus.TITLE
    )
    if not edit.is_detail:
        return fragments

    fragments.append(("", "\n\n"))
    fragments += label("Description", PopupFocus.DESCRIPTION)
    fragments += buffer_fragments(
        edit.description_buffer,
        focused=controller.popup_focus is PopupFocus.DESCRIPTION,
        height=controller.page_size,
    )
    fragments.append(("", "\n\n"))
    fragments += label(f"Code  {edit.language.label}", PopupFocus.CODE)
    fragments += buffer_fragments(
        edit.code_buffer,
        focused=controller.popup_focus is PopupFocus.CODE,
        height=controller.page_size,
        language=edit.language,
    )
    hint = "Tab: field  e: edit  Ctrl+C: copy  Esc: close" if viewing else (
        "Tab: field  Ctrl+L: language  Ctrl+S: save  Esc: cancel"
    )
    fragments.append(("class:hint", f"\n\n{hint}"))
    return fragments


def search_results_popup(controller: SessionController) -> StyleAndTextTuples:
    if not controller.search_results:
        text = "Searching…" if controller.searching else "No results."
        return [("class:hint", text)]
    fragments: StyleAndTextTuples = []
    for i, result in enumerate(controller.search_results):
        style = "class:item.selected" if i == controller.search_selected else ""
        description = result.description.strip()
        first_line = description.splitlines()[0] if description else ""
        fragments.append(("class:search.source", f"[{result.source.value}] "))
        fragments.append((style, f"{result.title}"))
        if first_line:
            fragments.append(("class:hint", f"  {first_line}"))
        fragments.append(("", "\n"))
    if controller.selected_link:
        fragments.append(("class:link", f"\n{controller.selected_link}"))
    return fragments


def help_popup(controller: SessionController) -> StyleAndTextTuples:
    return [("", "\n".join(help_lines())), ("class:hint", "\n\nEsc: close")]


def export_popup(controller: SessionController) -> StyleAndTextTuples:
    fragments: StyleAndTextTuples = []
    for i, fmt in enumerate(EXPORT_FORMATS):
        style = "class:item.selected" if i == controller.export_format_index else ""
        fragments.append((style, f" {i + 1}. {fmt.name} \n"))
    if controller.export_message:
        fragments.append(("class:status.message", f"\n{controller.export_message}"))
    fragments.append(("class:hint", "\n\nEnter: export  Esc: close"))
    return fragments
