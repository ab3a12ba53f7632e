"""Session controller: the mode/focus input state machine.

The controller owns the in-memory section list and every collaborator the
UI needs. The front end feeds it one ``KeyEvent`` at a time through
``handle_input`` and calls ``check_search_results`` once per loop
iteration; everything it draws is read back from controller attributes.
"""

import sqlite3
import webbrowser
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from enum import Enum

from loguru import logger

from snipnotes.config import TAB_WIDTH
from snipnotes.core.code_store import CodeStore
from snipnotes.core.database.store import (
    delete_detail,
    delete_section,
    load_sections,
    save_section,
)
from snipnotes.core.editor.text_buffer import TextBuffer
from snipnotes.core.search.coordinator import SearchCoordinator
from snipnotes.core.session.keys import Key, KeyEvent
from snipnotes.errors import CodeStoreError, StoreError
from snipnotes.models.note import (
    Detail,
    ExportFormat,
    Focus,
    Language,
    Mode,
    PopupFocus,
    SearchResult,
    SearchTarget,
    Section,
    normalize_section_title,
    strip_folder_glyph,
)
from snipnotes.protocols import ClipboardProtocol, ExporterProtocol

LinkOpener = Callable[[str], object]

FOCUS_ORDER = (Focus.SECTIONS, Focus.DETAILS, Focus.SEARCH)
POPUP_FOCUS_ORDER = (PopupFocus.TITLE, PopupFocus.DESCRIPTION, PopupFocus.CODE)
EXPORT_FORMATS = tuple(ExportFormat)
EXPORT_SHORTCUTS = {str(i + 1): fmt for i, fmt in enumerate(EXPORT_FORMATS)}

DEFAULT_LEFT_PANEL_WIDTH = 30
DEFAULT_RIGHT_PANEL_WIDTH = 70
LEFT_PANEL_LIMITS = (20, 50)
RIGHT_PANEL_LIMITS = (40, 80)
PANEL_RESIZE_STEP = 5

DEFAULT_PAGE_SIZE = 10


class EditTarget(Enum):
    SECTION = "section"
    DETAIL = "detail"


@dataclass
class EditSession:
    """Transient buffers for one add, edit or view popup.

    ``section_index`` is None only while adding a section; ``detail_index``
    is None while adding a detail. The ``original_*`` fields describe the
    code attached to the detail when the session started. ``code_unreadable``
    marks a snippet file that exists but could not be loaded; such a file is
    never cleared or deleted by a commit.
    """

    target: EditTarget
    section_index: int | None = None
    detail_index: int | None = None
    input_buffer: TextBuffer = field(default_factory=lambda: TextBuffer(multiline=False))
    description_buffer: TextBuffer = field(default_factory=TextBuffer)
    code_buffer: TextBuffer = field(default_factory=TextBuffer)
    language: Language = Language.NONE
    original_code: str = ""
    original_code_path: str | None = None
    original_language: Language = Language.NONE
    code_unreadable: bool = False

    @property
    def is_detail(self) -> bool:
        return self.target is EditTarget.DETAIL

    @property
    def is_new(self) -> bool:
        if self.is_detail:
            return self.detail_index is None
        return self.section_index is None

    def buffer_for(self, popup_focus: PopupFocus) -> TextBuffer:
        if not self.is_detail or popup_focus is PopupFocus.TITLE:
            return self.input_buffer
        if popup_focus is PopupFocus.DESCRIPTION:
            return self.description_buffer
        return self.code_buffer

    def code_unchanged(self) -> bool:
        """True if the code and language still match the attached file."""
        return (
            self.original_code_path is not None
            and self.code_buffer.text == self.original_code
            and self.language is self.original_language
        )

    @classmethod
    def for_section(cls, section_index: int | None, title: str = "") -> "EditSession":
        return cls(
            target=EditTarget.SECTION,
            section_index=section_index,
            input_buffer=TextBuffer.with_text(title, multiline=False),
        )

    @classmethod
    def for_detail(
        cls,
        section_index: int,
        detail_index: int | None = None,
        detail: Detail | None = None,
        code: str = "",
        *,
        at_end: bool = True,
        code_unreadable: bool = False,
    ) -> "EditSession":
        if detail is None:
            return cls(target=EditTarget.DETAIL, section_index=section_index)
        return cls(
            target=EditTarget.DETAIL,
            section_index=section_index,
            detail_index=detail_index,
            input_buffer=TextBuffer.with_text(detail.title, multiline=False, at_end=at_end),
            description_buffer=TextBuffer.with_text(detail.description, at_end=at_end),
            code_buffer=TextBuffer.with_text(code, at_end=at_end),
            language=detail.language,
            original_code=code,
            original_code_path=detail.code_path,
            original_language=detail.language,
            code_unreadable=code_unreadable,
        )


def _wrap(index: int | None, count: int, step: int) -> int | None:
    if count == 0:
        return None
    if index is None:
        return 0
    return (index + step) % count


def _clamp(index: int | None, count: int) -> int | None:
    if count == 0 or index is None:
        return None
    return min(index, count - 1)


class SessionController:
    """Owns the session state and maps key events to state changes.

    Args:
        conn: Open store connection, used on the UI thread only.
        code_store: Snippet file storage.
        exporter: Export collaborator for the Exporting mode.
        clipboard: Clipboard used by copy, cut and paste.
        coordinator: Search coordinator; built from ``conn`` if omitted.
        link_opener: Called with the URL of a selected remote result.
    """

    def __init__(
        self,
        conn: sqlite3.Connection,
        code_store: CodeStore,
        *,
        exporter: ExporterProtocol,
        clipboard: ClipboardProtocol,
        coordinator: SearchCoordinator | None = None,
        link_opener: LinkOpener = webbrowser.open,
    ) -> None:
        self.conn = conn
        self.code_store = code_store
        self.exporter = exporter
        self.clipboard = clipboard
        self.coordinator = coordinator if coordinator is not None else SearchCoordinator(conn)
        self.link_opener = link_opener

        self.sections: list[Section] = []
        self.selected_section: int | None = None
        self.selected_detail: int | None = None
        self.focus = Focus.SECTIONS
        self.previous_focus = Focus.SECTIONS
        self.mode = Mode.NORMAL
        self.popup_focus = PopupFocus.TITLE
        self.edit: EditSession | None = None

        self.search_query = ""
        self.search_results: list[SearchResult] = []
        self.search_target = SearchTarget.LOCAL
        self.search_selected: int | None = None
        self.selected_link: str | None = None
        self.searching = False

        self.export_format_index = 0
        self.export_message: str | None = None
        self.message: str | None = None

        self.left_panel_width = DEFAULT_LEFT_PANEL_WIDTH
        self.right_panel_width = DEFAULT_RIGHT_PANEL_WIDTH
        self.page_size = DEFAULT_PAGE_SIZE
        self.should_quit = False

        self._handlers: dict[Mode, Callable[[KeyEvent], None]] = {
            Mode.NORMAL: self._handle_normal,
            Mode.ADDING: self._handle_edit,
            Mode.EDITING: self._handle_edit,
            Mode.VIEWING: self._handle_viewing,
            Mode.SEARCHING: self._handle_searching,
            Mode.HELP: self._handle_help,
            Mode.EXPORTING: self._handle_exporting,
        }

    # -- lifecycle ------------------------------------------------------------

    def load(self) -> None:
        """Load all sections from the store.

        Raises:
            StoreError: The store could not be read. Fatal at startup.
        """
        self.sections = load_sections(self.conn)
        self.selected_section = 0 if self.sections else None
        self.selected_detail = None
        logger.debug("Loaded {} sections", len(self.sections))

    def close(self) -> None:
        self.coordinator.close()

    # -- read-only views ------------------------------------------------------

    @property
    def current_section(self) -> Section | None:
        if self.selected_section is None or self.selected_section >= len(self.sections):
            return None
        return self.sections[self.selected_section]

    @property
    def current_detail(self) -> Detail | None:
        section = self.current_section
        if section is None or self.selected_detail is None:
            return None
        if self.selected_detail >= len(section.details):
            return None
        return section.details[self.selected_detail]

    @property
    def export_format(self) -> ExportFormat:
        return EXPORT_FORMATS[self.export_format_index]

    def focused_buffer(self) -> TextBuffer | None:
        if self.edit is None:
            return None
        return self.edit.buffer_for(self.popup_focus)

    # -- dispatch -------------------------------------------------------------

    def handle_input(self, event: KeyEvent) -> None:
        """Apply one key event to the current mode."""
        self.message = None
        self._handlers[self.mode](event)

    def check_search_results(self) -> bool:
        """Apply at most one pending remote search response.

        Returns:
            True if the visible results changed.
        """
        try:
            response = self.coordinator.poll()
        except StoreError as e:
            logger.warning("Merging local results failed: {}", e)
            self.message = f"Search failed: {e}"
            self.searching = False
            return False
        if response is None:
            return False
        if self.mode is not Mode.SEARCHING:
            logger.debug("Discarding results for {!r}, search was closed", response.query)
            return False

        self.search_results = list(response.results)
        self.search_selected = None
        self.selected_link = None
        self.searching = False
        return True

    # -- normal mode ----------------------------------------------------------

    def _handle_normal(self, event: KeyEvent) -> None:
        key = event.key
        if event.ctrl:
            if key == Key.LEFT:
                self._resize_panel(decrease=True)
            elif key == Key.RIGHT:
                self._resize_panel(decrease=False)
            elif event.is_ctrl("q"):
                self.should_quit = True
            return

        if key == Key.UP:
            self._navigate(-1)
        elif key == Key.DOWN:
            self._navigate(1)
        elif key == Key.TAB:
            self._cycle_focus(-1 if event.shift else 1)
        elif key == Key.ENTER:
            if self.focus is Focus.SECTIONS:
                self.focus = Focus.DETAILS
            elif self.focus is Focus.DETAILS:
                self._start_view()
            else:
                self._start_search()
        elif key == "a":
            self._start_add()
        elif key == "e":
            self._start_edit()
        elif key == "d":
            self._delete_selected()
        elif key == "v":
            if self.focus is Focus.DETAILS:
                self._start_view()
        elif key in ("s", "/"):
            self._start_search()
        elif key == "h":
            self.mode = Mode.HELP
        elif key == "x":
            self.export_message = None
            self.mode = Mode.EXPORTING
        elif key == "q":
            self.should_quit = True

    def _navigate(self, step: int) -> None:
        if self.focus is Focus.SECTIONS:
            index = _wrap(self.selected_section, len(self.sections), step)
            if index != self.selected_section:
                self.selected_detail = None
            self.selected_section = index
        elif self.focus is Focus.DETAILS:
            section = self.current_section
            count = len(section.details) if section is not None else 0
            self.selected_detail = _wrap(self.selected_detail, count, step)

    def _cycle_focus(self, step: int) -> None:
        index = FOCUS_ORDER.index(self.focus)
        self.focus = FOCUS_ORDER[(index + step) % len(FOCUS_ORDER)]

    def _resize_panel(self, *, decrease: bool) -> None:
        step = -PANEL_RESIZE_STEP if decrease else PANEL_RESIZE_STEP
        if self.focus is Focus.SECTIONS:
            low, high = LEFT_PANEL_LIMITS
            if (decrease and self.left_panel_width > low) or (
                not decrease and self.left_panel_width < high
            ):
                self.left_panel_width += step
                self.right_panel_width -= step
        elif self.focus is Focus.DETAILS:
            low, high = RIGHT_PANEL_LIMITS
            if (decrease and self.right_panel_width > low) or (
                not decrease and self.right_panel_width < high
            ):
                self.right_panel_width += step
                self.left_panel_width -= step

    def _start_add(self) -> None:
        if self.focus is Focus.SECTIONS:
            self.edit = EditSession.for_section(None)
        elif self.focus is Focus.DETAILS:
            if self.selected_section is None:
                self.message = "Select a section first"
                return
            self.edit = EditSession.for_detail(self.selected_section)
        else:
            return
        self.popup_focus = PopupFocus.TITLE
        self.mode = Mode.ADDING

    def _read_code(self, detail: Detail) -> str | None:
        """Return the detail's snippet, or None if its file cannot be read."""
        if not detail.code_path:
            return ""
        try:
            return self.code_store.read(detail.code_path)
        except CodeStoreError as e:
            logger.warning("{}", e)
            self.message = f"Could not load code: {e}"
            return None

    def _start_edit(self) -> None:
        if self.focus is Focus.SECTIONS:
            section = self.current_section
            if section is None:
                return
            self.edit = EditSession.for_section(
                self.selected_section, strip_folder_glyph(section.title)
            )
        elif self.focus is Focus.DETAILS:
            detail = self.current_detail
            if detail is None or self.selected_section is None:
                return
            code = self._read_code(detail)
            self.edit = EditSession.for_detail(
                self.selected_section,
                self.selected_detail,
                detail,
                code or "",
                code_unreadable=code is None,
            )
        else:
            return
        self.popup_focus = PopupFocus.TITLE
        self.mode = Mode.EDITING

    def _start_view(self) -> None:
        detail = self.current_detail
        if detail is None or self.selected_section is None:
            return
        code = self._read_code(detail)
        self.edit = EditSession.for_detail(
            self.selected_section,
            self.selected_detail,
            detail,
            code or "",
            at_end=False,
            code_unreadable=code is None,
        )
        self.popup_focus = PopupFocus.CODE if code else PopupFocus.DESCRIPTION
        self.mode = Mode.VIEWING

    def _delete_selected(self) -> None:
        if self.focus is Focus.SECTIONS:
            self._delete_section()
        elif self.focus is Focus.DETAILS:
            self._delete_detail()

    def _delete_section(self) -> None:
        section = self.current_section
        if section is None or self.selected_section is None:
            return
        try:
            delete_section(self.conn, section.id)
        except StoreError as e:
            logger.warning("{}", e)
            self.message = f"Could not delete section: {e}"
            return

        for detail in section.details:
            self.code_store.delete(detail.code_path)
        del self.sections[self.selected_section]
        self.selected_section = _clamp(self.selected_section, len(self.sections))
        self.selected_detail = None
        logger.info("Deleted section {!r}", section.title)
        self.message = "Section deleted"

    def _delete_detail(self) -> None:
        section = self.current_section
        detail = self.current_detail
        if section is None or detail is None or self.selected_detail is None:
            return
        try:
            delete_detail(self.conn, section.id, detail.id)
        except StoreError as e:
            logger.warning("{}", e)
            self.message = f"Could not delete detail: {e}"
            return

        self.code_store.delete(detail.code_path)
        del section.details[self.selected_detail]
        self.selected_detail = _clamp(self.selected_detail, len(section.details))
        logger.info("Deleted detail {!r} from {!r}", detail.title, section.title)
        self.message = "Detail deleted"

    # -- popups ---------------------------------------------------------------

    def _close_edit(self) -> None:
        self.edit = None
        self.popup_focus = PopupFocus.TITLE
        self.mode = Mode.NORMAL

    def _abort_edit(self, message: str) -> None:
        logger.warning("{}", message)
        self._close_edit()
        self.message = message

    def _cycle_popup_focus(self, step: int) -> None:
        if self.edit is None or not self.edit.is_detail:
            return
        index = POPUP_FOCUS_ORDER.index(self.popup_focus)
        self.popup_focus = POPUP_FOCUS_ORDER[(index + step) % len(POPUP_FOCUS_ORDER)]

    def _move_cursor(self, buffer: TextBuffer, event: KeyEvent) -> bool:
        moves = {
            Key.LEFT: buffer.move_left,
            Key.RIGHT: buffer.move_right,
            Key.UP: buffer.move_up,
            Key.DOWN: buffer.move_down,
            Key.HOME: buffer.move_home,
            Key.END: buffer.move_end,
        }
        move = moves.get(event.key)
        if move is None:
            return False
        move(select=event.shift)
        buffer.scroll_into_view(self.page_size)
        return True

    def _copy(self, buffer: TextBuffer) -> None:
        text = buffer.selected_text() if buffer.has_selection() else buffer.text
        if self.clipboard.copy(text):
            self.message = "Copied to clipboard"
        else:
            self.message = "Clipboard unavailable"

    def _cut(self, buffer: TextBuffer) -> None:
        if not buffer.has_selection():
            self.message = "Nothing selected"
            return
        if self.clipboard.copy(buffer.selected_text()):
            buffer.delete_selection()
            self.message = "Cut to clipboard"
        else:
            self.message = "Clipboard unavailable"

    def _paste(self, buffer: TextBuffer) -> None:
        text = self.clipboard.paste()
        if text is None:
            self.message = "Clipboard unavailable"
            return
        buffer.insert(text)

    def _handle_edit(self, event: KeyEvent) -> None:
        edit = self.edit
        assert edit is not None
        buffer = edit.buffer_for(self.popup_focus)
        key = event.key

        if key == Key.ESC:
            self._close_edit()
            return
        if event.ctrl:
            if event.is_ctrl("s"):
                self._commit()
            elif event.is_ctrl("l"):
                if edit.is_detail:
                    edit.language = edit.language.next()
            elif event.is_ctrl("a"):
                buffer.select_all()
            elif event.is_ctrl("c"):
                self._copy(buffer)
            elif event.is_ctrl("x"):
                self._cut(buffer)
            elif event.is_ctrl("v"):
                self._paste(buffer)
            return

        if key == Key.TAB:
            if event.shift:
                self._cycle_popup_focus(-1)
            elif self.popup_focus is PopupFocus.CODE and edit.is_detail:
                buffer.insert(" " * TAB_WIDTH)
            else:
                self._cycle_popup_focus(1)
        elif key == Key.ENTER:
            if not edit.is_detail or self.popup_focus is PopupFocus.TITLE:
                self._commit()
            else:
                buffer.newline()
        elif key == Key.PASTE:
            buffer.insert(event.text or "")
        elif self._move_cursor(buffer, event):
            return
        elif key == Key.BACKSPACE:
            buffer.backspace()
        elif key == Key.DELETE:
            buffer.delete()
        elif event.is_char:
            buffer.insert(key)

    def _commit(self) -> None:
        edit = self.edit
        assert edit is not None
        title = edit.input_buffer.text.strip()
        if not title:
            self.message = "Title cannot be empty"
            return
        if edit.is_detail:
            self._commit_detail(edit, title)
        else:
            self._commit_section(edit, title)

    def _commit_section(self, edit: EditSession, title: str) -> None:
        title = normalize_section_title(title)
        if edit.section_index is None:
            section = Section(id=0, title=title)
        else:
            current = self.sections[edit.section_index]
            section = Section(id=current.id, title=title, details=list(current.details))

        try:
            saved = save_section(self.conn, section)
        except StoreError as e:
            self._abort_edit(f"Could not save section: {e}")
            return

        if edit.section_index is None:
            self.sections.append(saved)
            self.selected_section = len(self.sections) - 1
            self.selected_detail = None
        else:
            self.sections[edit.section_index] = saved
            self.selected_section = edit.section_index
        logger.info("Saved section {!r}", saved.title)
        self._close_edit()
        self.message = "Section saved"

    def _commit_detail(self, edit: EditSession, title: str) -> None:
        assert edit.section_index is not None
        section = self.sections[edit.section_index]
        code = edit.code_buffer.text
        warnings: list[str] = []
        written: str | None = None

        if edit.code_unreadable and not code:
            code_path = edit.original_code_path
        elif not code.strip():
            code_path = None
        elif edit.code_unchanged():
            code_path = edit.original_code_path
        else:
            warnings = self.code_store.validate(code)
            try:
                written = str(self.code_store.save(code, edit.language))
            except CodeStoreError as e:
                self._abort_edit(f"Could not save code: {e}")
                return
            code_path = written

        details = list(section.details)
        if edit.detail_index is None:
            details.append(
                Detail(
                    id=0,
                    title=title,
                    description=edit.description_buffer.text,
                    code_path=code_path,
                    language=edit.language,
                )
            )
            index = len(details) - 1
        else:
            index = edit.detail_index
            details[index] = replace(
                details[index],
                title=title,
                description=edit.description_buffer.text,
                code_path=code_path,
                language=edit.language,
            )

        try:
            saved = save_section(self.conn, replace(section, details=details))
        except StoreError as e:
            if written is not None:
                self.code_store.delete(written)
            self._abort_edit(f"Could not save detail: {e}")
            return

        self.sections[edit.section_index] = saved
        self.selected_section = edit.section_index
        self.selected_detail = index
        if (
            edit.original_code_path
            and edit.original_code_path != code_path
            and not edit.code_unreadable
        ):
            self.code_store.delete(edit.original_code_path)
        logger.info("Saved detail {!r} in {!r}", title, saved.title)
        self._close_edit()
        self.message = "; ".join(["Detail saved", *warnings])

    def _handle_viewing(self, event: KeyEvent) -> None:
        assert self.edit is not None
        buffer = self.edit.buffer_for(self.popup_focus)
        key = event.key

        if key == Key.ESC:
            self._close_edit()
        elif event.is_ctrl("c"):
            self._copy(buffer)
        elif event.is_ctrl("a"):
            buffer.select_all()
        elif event.ctrl:
            return
        elif key == Key.TAB:
            self._cycle_popup_focus(-1 if event.shift else 1)
        elif key == Key.PAGEUP:
            buffer.scroll_by(-self.page_size)
        elif key == Key.PAGEDOWN:
            buffer.scroll_by(self.page_size)
        elif self._move_cursor(buffer, event):
            return
        elif key == "e":
            self.mode = Mode.EDITING

    # -- search ---------------------------------------------------------------

    def _start_search(self) -> None:
        if self.mode is Mode.NORMAL:
            self.previous_focus = self.focus
        self.focus = Focus.SEARCH
        self.mode = Mode.SEARCHING
        self._reset_search()

    def _reset_search(self) -> None:
        self.search_query = ""
        self.search_results = []
        self.search_selected = None
        self.selected_link = None
        self.searching = False

    def _exit_search(self, focus: Focus | None = None) -> None:
        self._reset_search()
        self.mode = Mode.NORMAL
        self.focus = focus if focus is not None else self.previous_focus

    def _run_search(self) -> None:
        self.search_selected = None
        self.selected_link = None
        if not self.search_query:
            self.search_results = []
            self.searching = False
            return
        try:
            self.search_results = self.coordinator.search(self.search_query, self.search_target)
        except StoreError as e:
            logger.warning("{}", e)
            self.message = f"Search failed: {e}"
            self.search_results = []
        self.searching = self.search_target.is_remote

    def _select_result(self, step: int) -> None:
        self.search_selected = _wrap(self.search_selected, len(self.search_results), step)
        if self.search_selected is None:
            self.selected_link = None
            return
        self.selected_link = self.search_results[self.search_selected].url

    def _open_result(self) -> None:
        if not self.search_results:
            return
        index = self.search_selected if self.search_selected is not None else 0
        result = self.search_results[index]

        if result.url:
            try:
                self.link_opener(result.url)
            except webbrowser.Error as e:
                logger.warning("Cannot open {}: {}", result.url, e)
                self.message = f"Cannot open link: {e}"
                return
            self.message = f"Opened {result.url}"
            return

        section_index = next(
            (i for i, s in enumerate(self.sections) if s.id == result.section_id), None
        )
        if section_index is None:
            self.message = "Result no longer exists"
            return

        section = self.sections[section_index]
        if result.detail_id is None:
            self.selected_section = section_index
            self.selected_detail = None
            self._exit_search(Focus.SECTIONS)
            return

        detail_index = next(
            (i for i, d in enumerate(section.details) if d.id == result.detail_id), None
        )
        if detail_index is None:
            self.message = "Result no longer exists"
            return
        self.selected_section = section_index
        self.selected_detail = detail_index
        self._exit_search(Focus.DETAILS)
        self._start_view()

    def _handle_searching(self, event: KeyEvent) -> None:
        key = event.key
        if key == Key.ESC:
            self._exit_search()
        elif event.ctrl:
            return
        elif key == Key.TAB:
            self.search_target = self.search_target.next()
            self._run_search()
        elif key == Key.UP:
            self._select_result(-1)
        elif key == Key.DOWN:
            self._select_result(1)
        elif key == Key.ENTER:
            self._open_result()
        elif key == Key.BACKSPACE:
            self.search_query = self.search_query[:-1]
            self._run_search()
        elif key == Key.PASTE:
            self.search_query += (event.text or "").replace("\n", " ")
            self._run_search()
        elif event.is_char:
            self.search_query += key
            self._run_search()

    # -- help and export ------------------------------------------------------

    def _handle_help(self, event: KeyEvent) -> None:
        if event.key == Key.ESC:
            self.mode = Mode.NORMAL

    def _export(self, fmt: ExportFormat) -> None:
        self.export_format_index = EXPORT_FORMATS.index(fmt)
        self.export_message = self.exporter.export(self.sections, fmt)

    def _handle_exporting(self, event: KeyEvent) -> None:
        key = event.key
        count = len(EXPORT_FORMATS)
        if key == Key.ESC:
            self.mode = Mode.NORMAL
        elif key == Key.UP:
            self.export_format_index = (self.export_format_index - 1) % count
        elif key == Key.DOWN:
            self.export_format_index = (self.export_format_index + 1) % count
        elif key == Key.ENTER:
            self._export(self.export_format)
        elif key in EXPORT_SHORTCUTS:
            self._export(EXPORT_SHORTCUTS[key])
