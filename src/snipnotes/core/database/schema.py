"""SQLite schema creation and migration for the snipnotes store."""

import sqlite3
from pathlib import Path

SCHEMA_VERSION = 1
SCHEMA_VERSION_KEY = "schema_version"

_SCHEMA_SQL = """\
CREATE TABLE IF NOT EXISTS sections (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS details (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    section_id INTEGER NOT NULL,
    title TEXT NOT NULL,
    description TEXT NOT NULL DEFAULT '',
    code_path TEXT,
    language TEXT NOT NULL DEFAULT 'none',
    created_at TEXT NOT NULL,
    FOREIGN KEY (section_id) REFERENCES sections(id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_details_section ON details(section_id);

CREATE TABLE IF NOT EXISTS metadata (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""


def connect(db_path: str | Path) -> sqlite3.Connection:
    """Open a connection with foreign keys enforced, so detail rows cascade."""
    conn = sqlite3.connect(str(db_path))
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def get_metadata(conn: sqlite3.Connection, key: str) -> str | None:
    row = conn.execute("SELECT value FROM metadata WHERE key = ?", (key,)).fetchone()
    return row[0] if row else None


def set_metadata(conn: sqlite3.Connection, key: str, value: str) -> None:
    """Store a bookkeeping value; the caller commits."""
    conn.execute("INSERT OR REPLACE INTO metadata (key, value) VALUES (?, ?)", (key, value))


def create_schema(conn: sqlite3.Connection) -> None:
    """Create all tables and indexes and stamp the schema version."""
    conn.executescript(_SCHEMA_SQL)
    set_metadata(conn, SCHEMA_VERSION_KEY, str(SCHEMA_VERSION))
    conn.commit()


def get_schema_version(conn: sqlite3.Connection) -> int | None:
    """Return the stamped schema version; None for a store that was never created."""
    try:
        value = get_metadata(conn, SCHEMA_VERSION_KEY)
    except sqlite3.OperationalError:
        return None
    return int(value) if value is not None else None


def migrate_schema(conn: sqlite3.Connection) -> None:
    """Bring a new or existing store up to ``SCHEMA_VERSION``."""
    version = get_schema_version(conn)
    # Every statement in _SCHEMA_SQL is IF NOT EXISTS, so re-running it upgrades in place.
    if version is None or version < SCHEMA_VERSION:
        create_schema(conn)

