"""Cursor and selection arithmetic over a single editable string.

Offsets are ``str`` indices, so the cursor always sits on a character
boundary. One ``TextBuffer`` backs each of the title, description and code
fields of an edit session.
"""

from dataclasses import dataclass, field


@dataclass
class TextBuffer:
    """Mutable text with a cursor, an optional selection and a scroll offset.

    ``selection_start``/``selection_end`` are kept in the order the user made
    them; ``selection()`` normalizes the pair when it is used.
    """

    text: str = ""
    cursor: int = 0
    multiline: bool = True
    selection_start: int | None = None
    selection_end: int | None = None
    scroll: int = 0
    _desired_column: int | None = field(default=None, init=False, repr=False, compare=False)

    @classmethod
    def with_text(cls, text: str, *, multiline: bool = True, at_end: bool = True) -> "TextBuffer":
        if not multiline:
            text = text.replace("\n", " ")
        return cls(text=text, cursor=len(text) if at_end else 0, multiline=multiline)

    def __post_init__(self) -> None:
        self.cursor = max(0, min(self.cursor, len(self.text)))

    # -- position arithmetic --------------------------------------------------

    def line(self, offset: int | None = None) -> int:
        """Return the zero-based line containing ``offset`` (default: the cursor)."""
        offset = self.cursor if offset is None else offset
        return self.text.count("\n", 0, offset)

    def column(self, offset: int | None = None) -> int:
        """Return the offset's distance from the start of its line."""
        offset = self.cursor if offset is None else offset
        return offset - (self.text.rfind("\n", 0, offset) + 1)

    def position(self, line: int, column: int) -> int:
        """Return the offset of ``(line, column)``.

        The column is clamped to the line length; a line past the end of the
        buffer clamps to the end of the buffer.
        """
        start = 0
        for _ in range(max(0, line)):
            newline = self.text.find("\n", start)
            if newline == -1:
                return len(self.text)
            start = newline + 1
        end = self.text.find("\n", start)
        if end == -1:
            end = len(self.text)
        return start + max(0, min(column, end - start))

    @property
    def line_count(self) -> int:
        return self.text.count("\n") + 1

    def lines(self) -> list[str]:
        return self.text.split("\n")

    # -- selection ------------------------------------------------------------

    def selection(self) -> tuple[int, int] | None:
        """Return the selection as an ordered ``(start, end)`` pair, or None."""
        if self.selection_start is None or self.selection_end is None:
            return None
        return min(self.selection_start, self.selection_end), max(
            self.selection_start, self.selection_end
        )

    def has_selection(self) -> bool:
        selection = self.selection()
        return selection is not None and selection[0] != selection[1]

    def selected_text(self) -> str:
        selection = self.selection()
        if selection is None:
            return ""
        start, end = selection
        return self.text[start:end]

    def clear_selection(self) -> None:
        self.selection_start = None
        self.selection_end = None

    def select_all(self) -> None:
        self.selection_start = 0
        self.selection_end = len(self.text)
        self.cursor = len(self.text)

    def delete_selection(self) -> str:
        """Remove the selected text, leave the cursor at its start and return it."""
        selection = self.selection()
        self.clear_selection()
        if selection is None:
            return ""
        start, end = selection
        removed = self.text[start:end]
        self.text = self.text[:start] + self.text[end:]
        self.cursor = start
        self._desired_column = None
        return removed

    def _begin_move(self, select: bool) -> None:
        if select:
            if self.selection_start is None:
                self.selection_start = self.cursor
        else:
            self.clear_selection()

    def _end_move(self, select: bool) -> None:
        if select:
            self.selection_end = self.cursor

    # -- movement -------------------------------------------------------------

    def move_left(self, *, select: bool = False) -> None:
        self._begin_move(select)
        if self.cursor > 0:
            self.cursor -= 1
        self._desired_column = None
        self._end_move(select)

    def move_right(self, *, select: bool = False) -> None:
        self._begin_move(select)
        if self.cursor < len(self.text):
            self.cursor += 1
        self._desired_column = None
        self._end_move(select)

    def move_up(self, *, select: bool = False) -> None:
        self._move_vertical(-1, select)

    def move_down(self, *, select: bool = False) -> None:
        self._move_vertical(1, select)

    def _move_vertical(self, delta: int, select: bool) -> None:
        self._begin_move(select)
        target = self.line() + delta
        if 0 <= target < self.line_count:
            if self._desired_column is None:
                self._desired_column = self.column()
            self.cursor = self.position(target, self._desired_column)
        self._end_move(select)

    def move_home(self, *, select: bool = False) -> None:
        self._begin_move(select)
        self.cursor = self.position(self.line(), 0)
        self._desired_column = None
        self._end_move(select)

    def move_end(self, *, select: bool = False) -> None:
        self._begin_move(select)
        self.cursor = self.position(self.line(), len(self.text))
        self._desired_column = None
        self._end_move(select)

    # -- editing --------------------------------------------------------------

    def insert(self, text: str) -> None:
        """Insert ``text`` at the cursor and move the cursor past it."""
        if not self.multiline:
            text = text.replace("\r", "").replace("\n", " ")
        if not text:
            return
        self.clear_selection()
        self.text = self.text[: self.cursor] + text + self.text[self.cursor :]
        self.cursor += len(text)
        self._desired_column = None

    def newline(self) -> None:
        if self.multiline:
            self.insert("\n")

    def backspace(self) -> None:
        """Delete the character before the cursor; no-op at the start."""
        self.clear_selection()
        self._desired_column = None
        if self.cursor == 0:
            return
        self.text = self.text[: self.cursor - 1] + self.text[self.cursor :]
        self.cursor -= 1

    def delete(self) -> None:
        """Delete the character under the cursor; no-op at the end."""
        self.clear_selection()
        self._desired_column = None
        if self.cursor >= len(self.text):
            return
        self.text = self.text[: self.cursor] + self.text[self.cursor + 1 :]

    # -- scrolling ------------------------------------------------------------

    def scroll_into_view(self, height: int) -> None:
        """Adjust ``scroll`` so the cursor line is inside a window of ``height`` lines."""
        if height <= 0:
            return
        line = self.line()
        if line < self.scroll:
            self.scroll = line
        elif line >= self.scroll + height:
            self.scroll = line - height + 1

    def scroll_by(self, lines: int) -> None:
        self.scroll = max(0, min(self.scroll + lines, self.line_count - 1))
