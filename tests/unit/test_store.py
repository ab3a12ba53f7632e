"""Tests for loading, saving, deleting and searching sections."""

import sqlite3
from collections import Counter

import pytest

from snipnotes.config import DEFAULT_SECTION_TITLE
from snipnotes.core.database.store import (
    delete_detail,
    delete_section,
    load_sections,
    save_section,
    search_local,
)
from snipnotes.errors import StoreError
from snipnotes.models.note import Detail, Language, Section


def test_load_seeds_default_section_when_empty(conn: sqlite3.Connection) -> None:
    sections = load_sections(conn)
    assert [s.title for s in sections] == [DEFAULT_SECTION_TITLE]
    assert sections[0].details == []
    # Seeding happens once.
    assert len(load_sections(conn)) == 1


def test_save_new_section_assigns_id(conn: sqlite3.Connection) -> None:
    saved = save_section(conn, Section(id=0, title="📁 Recipes"))
    assert saved.id > 0
    assert [s.id for s in load_sections(conn)] == [saved.id]


def test_save_then_reload_keeps_title_and_details(conn: sqlite3.Connection) -> None:
    section = Section(
        id=0,
        title="📁 Rust",
        details=[
            Detail(id=0, title="Vec", description="growable array", language=Language.RUST),
            Detail(id=0, title="Box", description="heap pointer\nsecond line"),
            Detail(id=0, title="Vec", description="growable array"),
        ],
    )
    saved = save_section(conn, section)

    (reloaded,) = load_sections(conn)
    assert reloaded.id == saved.id
    assert reloaded.title == "📁 Rust"
    assert Counter((d.title, d.description) for d in reloaded.details) == Counter(
        (d.title, d.description) for d in section.details
    )
    assert [d.title for d in reloaded.details] == ["Vec", "Box", "Vec"]
    assert reloaded.details[0].language is Language.RUST


def test_save_replaces_all_details_with_new_ids(seeded_conn: sqlite3.Connection) -> None:
    (section,) = load_sections(seeded_conn)
    old_ids = [d.id for d in section.details]

    section.details.append(Detail(id=0, title="Second"))
    saved = save_section(seeded_conn, section)

    assert [d.title for d in saved.details] == ["Welcome", "Second"]
    assert not set(old_ids) & {d.id for d in saved.details}
    assert seeded_conn.execute("SELECT COUNT(*) FROM details").fetchone()[0] == 2


def test_save_with_unknown_id_inserts_that_id(conn: sqlite3.Connection) -> None:
    saved = save_section(conn, Section(id=42, title="📁 Imported"))
    assert saved.id == 42
    assert [s.id for s in load_sections(conn)] == [42]


def test_delete_section_cascades(seeded_conn: sqlite3.Connection) -> None:
    (section,) = load_sections(seeded_conn)
    delete_section(seeded_conn, section.id)
    assert seeded_conn.execute("SELECT COUNT(*) FROM details").fetchone()[0] == 0


def test_delete_detail_removes_exactly_one_row(conn: sqlite3.Connection) -> None:
    saved = save_section(
        conn,
        Section(id=0, title="📁 S", details=[Detail(id=0, title="a"), Detail(id=0, title="b")]),
    )
    delete_detail(conn, saved.id, saved.details[0].id)
    (reloaded,) = load_sections(conn)
    assert [d.title for d in reloaded.details] == ["b"]


def test_search_local_is_case_insensitive(seeded_conn: sqlite3.Connection) -> None:
    results = search_local(seeded_conn, "HELL")
    assert len(results) == 1
    section, detail = results[0]
    assert section.title == "📁 Notes"
    assert detail is not None
    assert detail.title == "Welcome"


def test_search_local_matches_empty_section(conn: sqlite3.Connection) -> None:
    save_section(conn, Section(id=0, title="📁 Recipes"))
    ((section, detail),) = search_local(conn, "recipe")
    assert section.title == "📁 Recipes"
    assert detail is None


def test_search_local_treats_wildcards_literally(seeded_conn: sqlite3.Connection) -> None:
    assert search_local(seeded_conn, "%") == []
    assert search_local(seeded_conn, "") == []


def test_broken_store_raises_store_error(conn: sqlite3.Connection) -> None:
    conn.execute("DROP TABLE details")
    with pytest.raises(StoreError):
        load_sections(conn)
    with pytest.raises(StoreError):
        save_section(conn, Section(id=0, title="x"))
