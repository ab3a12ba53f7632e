"""Remote search providers: crates.io and cheat.sh."""

from typing import Any
from urllib.parse import quote

import requests
from loguru import logger

from snipnotes.config import (
    CHEAT_SH_URL,
    CRATES_IO_PAGE_SIZE,
    CRATES_IO_URL,
    REQUEST_TIMEOUT,
    USER_AGENT,
)
from snipnotes.errors import ProviderError
from snipnotes.models.note import SearchResult, SearchSource


class _HttpProvider:
    """Shared session handling for the remote providers."""

    source: SearchSource

    def __init__(self, *, timeout: float = REQUEST_TIMEOUT) -> None:
        self.timeout = timeout
        self.sess = requests.Session()
        self.sess.headers["User-Agent"] = USER_AGENT

    def _get(self, url: str, params: dict[str, Any] | None = None) -> requests.Response:
        logger.debug("Making request: {!r} {!r}", url, params)
        try:
            r = self.sess.get(url, params=params, timeout=self.timeout)
            r.raise_for_status()
        except requests.RequestException as e:
            msg = f"{self.source.value} request failed: {e}"
            raise ProviderError(msg) from e
        return r

    def close(self) -> None:
        self.sess.close()


class CratesIoProvider(_HttpProvider):
    """Search crates.io by name and keyword."""

    source = SearchSource.CRATES_IO

    def search(self, query: str) -> list[SearchResult]:
        r = self._get(CRATES_IO_URL, {"q": query, "per_page": CRATES_IO_PAGE_SIZE})
        try:
            crates: list[dict[str, Any]] = r.json()["crates"]
        except (ValueError, KeyError, TypeError) as e:
            msg = f"Unexpected crates.io response: {e}"
            raise ProviderError(msg) from e

        return [
            SearchResult(
                title=info["name"],
                description=info.get("description") or "",
                source=self.source,
                url=f"https://crates.io/crates/{info['name']}",
            )
            for info in crates
            if info.get("name")
        ]


class CheatShProvider(_HttpProvider):
    """Fetch a plain-text cheat sheet from cheat.sh."""

    source = SearchSource.CHEAT_SH

    def search(self, query: str) -> list[SearchResult]:
        page_url = f"{CHEAT_SH_URL}/{quote(query, safe='')}"
        # "?T" asks cheat.sh for text without ANSI colour codes.
        r = self._get(page_url + "?T")
        return [
            SearchResult(
                title=query,
                description=r.text.strip(),
                source=self.source,
                url=page_url,
            )
        ]
