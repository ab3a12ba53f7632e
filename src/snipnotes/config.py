"""Configuration constants and paths for snipnotes."""

import os
from dataclasses import dataclass
from pathlib import Path

# Base directory. SNIPNOTES_HOME wins over the default.
BASE_DIR_ENV = "SNIPNOTES_HOME"
DEFAULT_BASE_DIR: Path = Path("~/.config/snipnotes").expanduser()

DB_FILENAME = "data.db"
CODE_DIRNAME = "code"
EXPORT_DIRNAME = "exports"
LOG_FILENAME = "snipnotes.log"

DEFAULT_SECTION_TITLE = "📁 Notes"

# Bounded request/response channels between the UI loop and the search worker.
SEARCH_CHANNEL_CAPACITY = 32

# Transport-level timeout for remote providers, in seconds.
REQUEST_TIMEOUT: float = 15.0
USER_AGENT = "snipnotes-tui"

CRATES_IO_URL = "https://crates.io/api/v1/crates"
CRATES_IO_PAGE_SIZE = 10
CHEAT_SH_URL = "https://cheat.sh"

# Soft limits reported when saving snippets.
MAX_CODE_SIZE = 50_000
MAX_CODE_LINES = 1000

TAB_WIDTH = 4


def resolve_base_directory(override: Path | None = None) -> Path:
    """Return the base directory: explicit override, then $SNIPNOTES_HOME, then the default."""
    if override is not None:
        return Path(override).expanduser()
    env = os.environ.get(BASE_DIR_ENV)
    if env:
        return Path(env).expanduser()
    return DEFAULT_BASE_DIR


@dataclass(frozen=True)
class AppPaths:
    """Filesystem locations derived from the base directory."""

    base_dir: Path

    @classmethod
    def resolve(cls, override: Path | None = None) -> "AppPaths":
        return cls(base_dir=resolve_base_directory(override))

    @property
    def db_path(self) -> Path:
        return self.base_dir / DB_FILENAME

    @property
    def code_dir(self) -> Path:
        return self.base_dir / CODE_DIRNAME

    @property
    def export_dir(self) -> Path:
        return self.base_dir / EXPORT_DIRNAME

    @property
    def log_file(self) -> Path:
        return self.base_dir / LOG_FILENAME

    def ensure(self) -> None:
        """Create the base, code and export directories."""
        for path in (self.base_dir, self.code_dir, self.export_dir):
            path.mkdir(parents=True, exist_ok=True)
