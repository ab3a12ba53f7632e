"""Route search queries to the local store or the background remote worker.

Local queries are answered synchronously. Remote queries travel over a
bounded request queue to a daemon thread that owns the provider instances;
its answers come back over a bounded response queue that the UI loop polls
once per iteration. Requests are never cancelled: every response is
delivered, and the last one to arrive is what the user sees.
"""

import queue
import sqlite3
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace

from loguru import logger

from snipnotes.config import SEARCH_CHANNEL_CAPACITY
from snipnotes.core.search.local import LocalProvider
from snipnotes.errors import ProviderError
from snipnotes.models.note import SearchResult, SearchSource, SearchTarget
from snipnotes.protocols import SearchProviderProtocol

ProviderFactory = Callable[[], Mapping[SearchSource, SearchProviderProtocol]]

# Remote sources queried for each target, in order.
REMOTE_SOURCES: dict[SearchTarget, tuple[SearchSource, ...]] = {
    SearchTarget.LOCAL: (),
    SearchTarget.CRATES_IO: (SearchSource.CRATES_IO,),
    SearchTarget.CHEAT_SH: (SearchSource.CHEAT_SH,),
    SearchTarget.ALL: (SearchSource.CRATES_IO, SearchSource.CHEAT_SH),
}

_WORKER_POLL_INTERVAL = 0.2


@dataclass(frozen=True)
class SearchRequest:
    query: str
    target: SearchTarget


@dataclass(frozen=True)
class SearchResponse:
    """Results for one request, delivered whether or not it is still current."""

    query: str
    target: SearchTarget
    results: tuple[SearchResult, ...]


def default_remote_providers() -> dict[SearchSource, SearchProviderProtocol]:
    from snipnotes.providers import CheatShProvider, CratesIoProvider

    return {
        SearchSource.CRATES_IO: CratesIoProvider(),
        SearchSource.CHEAT_SH: CheatShProvider(),
    }


def _run_providers(
    providers: Mapping[SearchSource, SearchProviderProtocol], request: SearchRequest
) -> list[SearchResult]:
    results: list[SearchResult] = []
    for source in REMOTE_SOURCES[request.target]:
        provider = providers.get(source)
        if provider is None:
            continue
        try:
            results.extend(provider.search(request.query))
        except ProviderError as e:
            logger.warning("{} search for {!r} failed: {}", source.value, request.query, e)
        except Exception:
            logger.exception("{} search for {!r} crashed", source.value, request.query)
    return results


def run_search_worker(
    requests: "queue.Queue[SearchRequest | None]",
    responses: "queue.Queue[SearchResponse]",
    stop: threading.Event,
    provider_factory: ProviderFactory,
) -> None:
    """Consume requests until stopped, pushing one response per request.

    The providers are created here so that they live on the worker thread only.
    """
    providers = provider_factory()
    logger.debug("Search worker started with {}", [s.value for s in providers])
    try:
        while not stop.is_set():
            try:
                request = requests.get(timeout=_WORKER_POLL_INTERVAL)
            except queue.Empty:
                continue
            if request is None:
                break

            results = _run_providers(providers, request)
            response = SearchResponse(request.query, request.target, tuple(results))
            try:
                responses.put_nowait(response)
            except queue.Full:
                logger.debug("Response queue full, dropping results for {!r}", request.query)
    finally:
        for provider in providers.values():
            close = getattr(provider, "close", None)
            if callable(close):
                close()
        logger.debug("Search worker stopped")


class SearchCoordinator:
    """Dispatch queries to the local provider or the background worker."""

    def __init__(
        self,
        conn: sqlite3.Connection,
        *,
        provider_factory: ProviderFactory = default_remote_providers,
        capacity: int = SEARCH_CHANNEL_CAPACITY,
    ) -> None:
        self._local = LocalProvider(conn)
        self._provider_factory = provider_factory
        self._capacity = capacity
        self._requests: queue.Queue[SearchRequest | None] | None = None
        self._responses: queue.Queue[SearchResponse] | None = None
        self._stop = threading.Event()
        self._worker: threading.Thread | None = None

    @property
    def worker_started(self) -> bool:
        return self._worker is not None

    def _ensure_worker(self) -> None:
        if self._worker is not None:
            return
        self._stop = threading.Event()
        self._requests = queue.Queue(maxsize=self._capacity)
        self._responses = queue.Queue(maxsize=self._capacity)
        self._worker = threading.Thread(
            target=run_search_worker,
            args=(self._requests, self._responses, self._stop, self._provider_factory),
            name="snipnotes-search",
            daemon=True,
        )
        self._worker.start()

    def search_local(self, query: str) -> list[SearchResult]:
        if not query:
            return []
        return self._local.search(query)

    def search(self, query: str, target: SearchTarget) -> list[SearchResult]:
        """Start a search and return whatever is available right away.

        For ``LOCAL`` that is the complete answer. Remote targets return an
        empty list (``ALL``: the local part) and deliver the rest via ``poll``.
        An empty query returns nothing and dispatches nothing.
        """
        if not query:
            return []
        if not target.is_remote:
            return self.search_local(query)

        self._ensure_worker()
        assert self._requests is not None
        try:
            self._requests.put_nowait(SearchRequest(query, target))
        except queue.Full:
            logger.debug("Request queue full, dropping query {!r}", query)

        if target is SearchTarget.ALL:
            return self.search_local(query)
        return []

    def poll(self) -> SearchResponse | None:
        """Return at most one pending response without blocking."""
        if self._responses is None:
            return None
        try:
            response = self._responses.get_nowait()
        except queue.Empty:
            return None
        if response.target is SearchTarget.ALL:
            local = self.search_local(response.query)
            response = replace(response, results=(*local, *response.results))
        return response

    def close(self) -> None:
        """Stop the worker thread if it was started."""
        if self._worker is None:
            return
        self._stop.set()
        assert self._requests is not None
        try:
            self._requests.put_nowait(None)
        except queue.Full:
            # The worker also checks the stop event between requests.
            pass
        self._worker.join(timeout=1.0)
        self._worker = None
