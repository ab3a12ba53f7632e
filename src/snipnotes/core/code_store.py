"""File storage for detail code snippets, one directory per language."""

import shutil
import subprocess
from datetime import datetime
from pathlib import Path

from loguru import logger

from snipnotes.config import MAX_CODE_LINES, MAX_CODE_SIZE
from snipnotes.errors import CodeStoreError
from snipnotes.models.note import Language

_FORMAT_TIMEOUT = 10


def format_rust(code: str) -> str:
    """Pipe code through rustfmt; return it unchanged if rustfmt is missing or fails."""
    rustfmt = shutil.which("rustfmt")
    if rustfmt is None:
        return code
    try:
        result = subprocess.run(
            [rustfmt, "--emit", "stdout", "--quiet"],
            input=code,
            capture_output=True,
            text=True,
            timeout=_FORMAT_TIMEOUT,
        )
    except (OSError, subprocess.TimeoutExpired):
        logger.debug("rustfmt failed to run, keeping unformatted code")
        return code
    if result.returncode != 0 or not result.stdout:
        logger.debug("rustfmt exited with {}, keeping unformatted code", result.returncode)
        return code
    return result.stdout


class CodeStore:
    """Write, read and delete snippet files under ``<base_dir>/<language dir>``.

    File names are ``code_<timestamp>.<ext>``; a numeric suffix is appended
    when two snippets land in the same directory within the same timestamp.
    """

    def __init__(self, base_dir: str | Path, *, format_code: bool = True) -> None:
        self.base_dir = Path(base_dir).expanduser().resolve()
        self.format_code = format_code

    def directory_for(self, language: Language) -> Path:
        return self.base_dir / language.directory

    def _make_unique_path(self, directory: Path, language: Language) -> Path:
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        unique_str = ""
        unique_count = 0
        while True:
            path = directory / f"code_{stamp}{unique_str}.{language.extension}"
            if not path.exists():
                return path
            unique_count += 1
            unique_str = f"-{unique_count}"

    def save(self, content: str, language: Language) -> Path:
        """Write ``content`` to a new file for ``language`` and return its path.

        Raises:
            CodeStoreError: The directory or file could not be written.
        """
        directory = self.directory_for(language)
        if self.format_code and language is Language.RUST:
            content = format_rust(content)
        try:
            directory.mkdir(parents=True, exist_ok=True)
            path = self._make_unique_path(directory, language)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            msg = f"Cannot write code file in {directory}: {e}"
            raise CodeStoreError(msg) from e
        logger.debug("Saved {} snippet to {}", language.value, path)
        return path

    def read(self, path: str | Path) -> str:
        try:
            return Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            msg = f"Cannot read code file {path}: {e}"
            raise CodeStoreError(msg) from e

    def owns(self, path: str | Path) -> bool:
        """Check whether ``path`` lies inside the store's base directory."""
        try:
            resolved = Path(path).expanduser().resolve()
        except OSError:
            return False
        return resolved.is_relative_to(self.base_dir)

    def delete(self, path: str | Path | None) -> bool:
        """Remove a snippet file, best-effort.

        Paths outside the base directory are left alone. Failures are logged,
        never raised.

        Returns:
            True if a file was removed.
        """
        if not path:
            return False
        if not self.owns(path):
            logger.warning("Refusing to delete {}: outside code directory {}", path, self.base_dir)
            return False
        try:
            Path(path).unlink()
        except FileNotFoundError:
            return False
        except OSError:
            logger.exception("Failed to delete code file {}", path)
            return False
        logger.debug("Deleted code file {}", path)
        return True

    @staticmethod
    def validate(content: str) -> list[str]:
        """Return warnings for snippets above the size or line limits."""
        warnings: list[str] = []
        if len(content) > MAX_CODE_SIZE:
            warnings.append(f"Code exceeds the {MAX_CODE_SIZE // 1000}KB limit")
        if len(content.splitlines()) > MAX_CODE_LINES:
            warnings.append(f"Code exceeds the {MAX_CODE_LINES} line limit")
        return warnings
