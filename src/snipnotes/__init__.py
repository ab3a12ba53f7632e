"""snipnotes: a terminal notebook for sections of notes and code snippets."""

from snipnotes.core.code_store import CodeStore
from snipnotes.core.search.coordinator import SearchCoordinator
from snipnotes.core.session.controller import SessionController
from snipnotes.core.session.keys import Key, KeyEvent
from snipnotes.export import Exporter
from snipnotes.protocols import ClipboardProtocol, ExporterProtocol, SearchProviderProtocol

__all__ = [
    "ClipboardProtocol",
    "CodeStore",
    "Exporter",
    "ExporterProtocol",
    "Key",
    "KeyEvent",
    "SearchCoordinator",
    "SearchProviderProtocol",
    "SessionController",
]
