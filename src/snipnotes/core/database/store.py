"""Load, save, delete and search sections and details in SQLite."""

import sqlite3

from loguru import logger

from snipnotes.config import DEFAULT_SECTION_TITLE
from snipnotes.errors import StoreError
from snipnotes.models.note import Detail, Language, Section

_DETAIL_COLUMNS = "id, title, description, code_path, language, created_at"


def _casefold(value: str | None) -> str | None:
    return value.casefold() if value is not None else None


def _row_to_detail(row: sqlite3.Row | tuple) -> Detail:
    return Detail(
        id=row[0],
        title=row[1],
        description=row[2] or "",
        code_path=row[3] or None,
        language=Language.parse(row[4]),
        created_at=row[5],
    )


def _insert_details(conn: sqlite3.Connection, section_id: int, details: list[Detail]) -> None:
    conn.executemany(
        """INSERT INTO details
           (section_id, title, description, code_path, language, created_at)
           VALUES (?, ?, ?, ?, ?, ?)""",
        [
            (
                section_id, d.title, d.description, d.code_path,
                d.language.value, d.created_at,
            )
            for d in details
        ],
    )


def _load_details(conn: sqlite3.Connection, section_id: int) -> list[Detail]:
    rows = conn.execute(
        f"SELECT {_DETAIL_COLUMNS} FROM details WHERE section_id = ? ORDER BY id",
        (section_id,),
    ).fetchall()
    return [_row_to_detail(r) for r in rows]


def load_sections(conn: sqlite3.Connection) -> list[Section]:
    """Return all sections with their details, seeding a default section if empty.

    Raises:
        StoreError: The tables could not be read or seeded.
    """
    try:
        count = conn.execute("SELECT COUNT(*) FROM sections").fetchone()[0]
        if count == 0:
            conn.execute("INSERT INTO sections (title) VALUES (?)", (DEFAULT_SECTION_TITLE,))
            conn.commit()
            logger.info("Seeded empty store with {!r}", DEFAULT_SECTION_TITLE)

        rows = conn.execute("SELECT id, title FROM sections ORDER BY id").fetchall()
        return [
            Section(id=section_id, title=title, details=_load_details(conn, section_id))
            for section_id, title in rows
        ]
    except sqlite3.Error as e:
        conn.rollback()
        msg = f"Failed to load sections: {e}"
        raise StoreError(msg) from e


def save_section(conn: sqlite3.Connection, section: Section) -> Section:
    """Upsert a section and replace all of its details.

    Every detail row of the section is deleted and the in-memory set is
    inserted again, so detail ids change on every save.

    Args:
        conn: Database connection.
        section: Section to persist. ``id == 0`` inserts a new row.

    Returns:
        The section as stored, carrying its (possibly new) id and fresh detail ids.

    Raises:
        StoreError: The transaction failed and was rolled back.
    """
    try:
        if section.id == 0:
            cursor = conn.execute("INSERT INTO sections (title) VALUES (?)", (section.title,))
            section_id = cursor.lastrowid
        else:
            exists = conn.execute(
                "SELECT 1 FROM sections WHERE id = ?", (section.id,)
            ).fetchone()
            if exists:
                conn.execute(
                    "UPDATE sections SET title = ? WHERE id = ?", (section.title, section.id)
                )
            else:
                conn.execute(
                    "INSERT INTO sections (id, title) VALUES (?, ?)", (section.id, section.title)
                )
            section_id = section.id

        conn.execute("DELETE FROM details WHERE section_id = ?", (section_id,))
        _insert_details(conn, section_id, section.details)
        conn.commit()
        details = _load_details(conn, section_id)
    except sqlite3.Error as e:
        conn.rollback()
        logger.exception("Failed to save section {!r}", section.title)
        msg = f"Failed to save section {section.title!r}: {e}"
        raise StoreError(msg) from e

    logger.debug("Saved section {} ({} details)", section_id, len(details))
    return Section(id=section_id, title=section.title, details=details)


def delete_section(conn: sqlite3.Connection, section_id: int) -> None:
    """Delete a section; its details go with it through the cascading foreign key."""
    try:
        conn.execute("DELETE FROM sections WHERE id = ?", (section_id,))
        conn.commit()
    except sqlite3.Error as e:
        conn.rollback()
        msg = f"Failed to delete section {section_id}: {e}"
        raise StoreError(msg) from e


def delete_detail(conn: sqlite3.Connection, section_id: int, detail_id: int) -> None:
    """Delete exactly one detail row."""
    try:
        conn.execute(
            "DELETE FROM details WHERE section_id = ? AND id = ?", (section_id, detail_id)
        )
        conn.commit()
    except sqlite3.Error as e:
        conn.rollback()
        msg = f"Failed to delete detail {detail_id} of section {section_id}: {e}"
        raise StoreError(msg) from e


def search_local(conn: sqlite3.Connection, query: str) -> list[tuple[Section, Detail | None]]:
    """Case-insensitive substring search over section titles and detail text.

    Args:
        conn: Database connection.
        query: Substring to look for.

    Returns:
        ``(section, detail)`` pairs ordered by section and detail id. The
        section carries no details; ``detail`` is None for a matching section
        that has no details at all.
    """
    if not query:
        return []

    # instr() instead of LIKE so that % and _ in the query match literally.
    needle = query.casefold()
    try:
        conn.create_function("casefold", 1, _casefold, deterministic=True)
        rows = conn.execute(
            """SELECT s.id, s.title,
                      d.id, d.title, d.description, d.code_path, d.language, d.created_at
               FROM sections s
               LEFT JOIN details d ON d.section_id = s.id
               WHERE instr(casefold(s.title), ?) > 0
                  OR instr(casefold(d.title), ?) > 0
                  OR instr(casefold(d.description), ?) > 0
               ORDER BY s.id, d.id""",
            (needle, needle, needle),
        ).fetchall()
    except sqlite3.Error as e:
        msg = f"Local search failed: {e}"
        raise StoreError(msg) from e

    results: list[tuple[Section, Detail | None]] = []
    for row in rows:
        section = Section(id=row[0], title=row[1])
        detail = _row_to_detail(row[2:]) if row[2] is not None else None
        results.append((section, detail))
    return results
