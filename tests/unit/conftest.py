"""Shared test fixtures."""

import sqlite3
from collections.abc import Iterator
from pathlib import Path

import pytest

from snipnotes.core.code_store import CodeStore
from snipnotes.core.database.schema import connect, create_schema
from snipnotes.core.database.store import save_section
from snipnotes.core.search.coordinator import SearchCoordinator
from snipnotes.core.session.controller import SessionController
from snipnotes.models.note import Detail, SearchSource, Section
from tests.unit.fakes import (
    CHEAT_RESULTS,
    CRATE_RESULTS,
    FakeClipboard,
    FakeExporter,
    FakeLinkOpener,
    FakeProvider,
)


@pytest.fixture
def conn() -> Iterator[sqlite3.Connection]:
    """Return an empty in-memory store with the schema created."""
    conn = connect(":memory:")
    create_schema(conn)
    yield conn
    conn.close()


@pytest.fixture
def seeded_conn(conn: sqlite3.Connection) -> sqlite3.Connection:
    """Store with one section "📁 Notes" holding the detail "Welcome"."""
    save_section(
        conn,
        Section(
            id=0,
            title="📁 Notes",
            details=[Detail(id=0, title="Welcome", description="Hello world")],
        ),
    )
    return conn


@pytest.fixture
def code_store(tmp_path: Path) -> CodeStore:
    return CodeStore(tmp_path / "code", format_code=False)


@pytest.fixture
def clipboard() -> FakeClipboard:
    return FakeClipboard()


@pytest.fixture
def exporter() -> FakeExporter:
    return FakeExporter("Exported 1 sections to /tmp/snipnotes-export.json")


@pytest.fixture
def link_opener() -> FakeLinkOpener:
    return FakeLinkOpener()


@pytest.fixture
def crates_provider() -> FakeProvider:
    return FakeProvider(CRATE_RESULTS)


@pytest.fixture
def cheat_provider() -> FakeProvider:
    return FakeProvider(CHEAT_RESULTS)


@pytest.fixture
def controller(
    seeded_conn: sqlite3.Connection,
    code_store: CodeStore,
    clipboard: FakeClipboard,
    exporter: FakeExporter,
    link_opener: FakeLinkOpener,
    crates_provider: FakeProvider,
    cheat_provider: FakeProvider,
) -> Iterator[SessionController]:
    """Loaded controller over the seeded store, with fake remote providers."""
    coordinator = SearchCoordinator(
        seeded_conn,
        provider_factory=lambda: {
            SearchSource.CRATES_IO: crates_provider,
            SearchSource.CHEAT_SH: cheat_provider,
        },
    )
    controller = SessionController(
        seeded_conn,
        code_store,
        exporter=exporter,
        clipboard=clipboard,
        coordinator=coordinator,
        link_opener=link_opener,
    )
    controller.load()
    yield controller
    controller.close()

