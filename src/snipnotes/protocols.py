"""Protocols for dependency injection into the session controller."""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from snipnotes.models.note import ExportFormat, SearchResult, Section


@runtime_checkable
class SearchProviderProtocol(Protocol):
    """A search back-end: local store or remote endpoint."""

    def search(self, query: str) -> list[SearchResult]:
        """Return results for a free-text query."""
        ...


@runtime_checkable
class ExporterProtocol(Protocol):
    """Serializes the section tree to a file."""

    def export(self, sections: Sequence[Section], fmt: ExportFormat) -> str:
        """Export and return a success or failure message for display."""
        ...


@runtime_checkable
class ClipboardProtocol(Protocol):
    """System clipboard access."""

    def copy(self, text: str) -> bool:
        """Put text on the clipboard, returning False if no backend worked."""
        ...

    def paste(self) -> str | None:
        """Return clipboard text, or None if unavailable."""
        ...
