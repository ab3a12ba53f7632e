"""Domain models for snipnotes."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, StrEnum

FOLDER_GLYPH = "📁"

CREATED_AT_FORMAT = "%Y-%m-%d %H:%M:%S"


class Language(StrEnum):
    """Language attached to a detail's code snippet."""

    RUST = "rust"
    PYTHON = "python"
    NONE = "none"

    @classmethod
    def parse(cls, value: str | None) -> "Language":
        """Parse a stored value, falling back to ``NONE`` for unknown input."""
        try:
            return cls((value or "none").strip().lower())
        except ValueError:
            return cls.NONE

    @property
    def extension(self) -> str:
        return _EXTENSIONS[self]

    @property
    def directory(self) -> str:
        return _DIRECTORIES[self]

    @property
    def icon(self) -> str:
        return _ICONS[self]

    @property
    def label(self) -> str:
        return f"{self.icon} {_LABELS[self]}"

    def next(self) -> "Language":
        order = list(_LANGUAGE_CYCLE)
        return order[(order.index(self) + 1) % len(order)]


_EXTENSIONS = {Language.RUST: "rs", Language.PYTHON: "py", Language.NONE: "txt"}
_DIRECTORIES = {Language.RUST: "rust", Language.PYTHON: "python", Language.NONE: "text"}
_ICONS = {Language.RUST: "🦀", Language.PYTHON: "🐍", Language.NONE: "📝"}
_LABELS = {Language.RUST: "Rust", Language.PYTHON: "Python", Language.NONE: "Text"}
_LANGUAGE_CYCLE = (Language.NONE, Language.RUST, Language.PYTHON)


class Focus(Enum):
    SECTIONS = "sections"
    DETAILS = "details"
    SEARCH = "search"


class Mode(Enum):
    NORMAL = "normal"
    ADDING = "adding"
    EDITING = "editing"
    VIEWING = "viewing"
    SEARCHING = "searching"
    HELP = "help"
    EXPORTING = "exporting"


class PopupFocus(Enum):
    TITLE = "title"
    DESCRIPTION = "description"
    CODE = "code"


class SearchSource(Enum):
    LOCAL = "Local"
    CRATES_IO = "Crates.io"
    CHEAT_SH = "cheat.sh"


class SearchTarget(Enum):
    LOCAL = "Local"
    CRATES_IO = "Crates.io"
    CHEAT_SH = "cheat.sh"
    ALL = "All"

    def next(self) -> "SearchTarget":
        order = list(SearchTarget)
        return order[(order.index(self) + 1) % len(order)]

    @property
    def is_remote(self) -> bool:
        return self is not SearchTarget.LOCAL


class ExportFormat(Enum):
    JSON = "json"
    HTML = "html"
    CSV = "csv"

    @property
    def extension(self) -> str:
        return self.value


def now_timestamp() -> str:
    """Return the current local time formatted for ``Detail.created_at``."""
    return datetime.now().strftime(CREATED_AT_FORMAT)


def normalize_section_title(title: str) -> str:
    """Trim the title and prefix it with the folder glyph unless already present."""
    title = title.strip()
    if title.startswith(FOLDER_GLYPH):
        return title
    return f"{FOLDER_GLYPH} {title}"


def strip_folder_glyph(title: str) -> str:
    """Return the title without its leading folder glyph, for editing."""
    if title.startswith(FOLDER_GLYPH):
        return title[len(FOLDER_GLYPH):].lstrip()
    return title


@dataclass
class Detail:
    """A single note entry inside a section."""

    id: int
    title: str
    description: str = ""
    code_path: str | None = None
    language: Language = Language.NONE
    created_at: str = field(default_factory=now_timestamp)


@dataclass
class Section:
    """Top-level grouping of details."""

    id: int
    title: str
    details: list[Detail] = field(default_factory=list)


@dataclass(frozen=True)
class SearchResult:
    """A search hit from one of the search back-ends."""

    title: str
    description: str
    source: SearchSource
    url: str | None = None
    section_id: int | None = None
    detail_id: int | None = None
