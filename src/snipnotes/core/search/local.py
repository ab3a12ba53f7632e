"""Synchronous substring search over the local store."""

import sqlite3

from snipnotes.core.database.store import search_local
from snipnotes.models.note import SearchResult, SearchSource

SECTION_MATCH_DESCRIPTION = "Section"


class LocalProvider:
    """Search section titles and detail text in the SQLite store."""

    source = SearchSource.LOCAL

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def search(self, query: str) -> list[SearchResult]:
        results: list[SearchResult] = []
        for section, detail in search_local(self._conn, query):
            if detail is None:
                results.append(
                    SearchResult(
                        title=section.title,
                        description=SECTION_MATCH_DESCRIPTION,
                        source=self.source,
                        section_id=section.id,
                    )
                )
                continue
            results.append(
                SearchResult(
                    title=detail.title,
                    description=detail.description,
                    source=self.source,
                    section_id=section.id,
                    detail_id=detail.id,
                )
            )
        return results
