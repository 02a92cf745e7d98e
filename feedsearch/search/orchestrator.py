"""Debounced, supersession-safe search orchestration."""

from __future__ import annotations

import asyncio
from contextlib import suppress
from typing import Awaitable, Callable, Generic, Iterable, TypeVar

from feedsearch.logging import logger
from feedsearch.search.ordering import Comparator, sort_items
from feedsearch.search.state import SearchState
from feedsearch.services.exceptions import OrchestratorClosedError

T = TypeVar("T")

FetchFunction = Callable[[str], Awaitable[Iterable[T]]]
StateCallback = Callable[[SearchState[T]], None]

DEFAULT_DEBOUNCE_SECONDS = 0.5


class SearchOrchestrator(Generic[T]):
    """Turn a stream of query edits into at most one visible search result.

    Query edits restart a trailing-edge debounce timer. When the timer fires
    with a non-empty query that differs from the previously dispatched one,
    ``fetch`` runs in its own task tagged with a fresh generation number.
    Completions from older generations are dropped, so a slow response can
    never overwrite a newer one.

    All state lives on the event loop that first drives the orchestrator.
    Use :meth:`set_query_threadsafe` to feed input from other threads.
    """

    def __init__(
        self,
        fetch: FetchFunction[T],
        compare: Comparator[T] | None = None,
        *,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
    ) -> None:
        if debounce_seconds < 0:
            raise ValueError("debounce_seconds must not be negative")
        self._fetch = fetch
        self._compare = compare
        self._debounce_seconds = debounce_seconds
        self._query = ""
        self._last_dispatched: str | None = None
        self._state: SearchState[T] = SearchState()
        self._generation = 0
        self._debounce_task: asyncio.Task[None] | None = None
        self._fetch_task: asyncio.Task[None] | None = None
        self._subscribers: list[StateCallback[T]] = []
        self._closed = False
        try:
            self._loop: asyncio.AbstractEventLoop | None = asyncio.get_running_loop()
        except RuntimeError:
            self._loop = None

    # Observable surface

    @property
    def query(self) -> str:
        return self._query

    @query.setter
    def query(self, text: str) -> None:
        self.set_query(text)

    @property
    def state(self) -> SearchState[T]:
        return self._state

    @property
    def items(self) -> tuple[T, ...]:
        return self._state.items

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    @property
    def error(self) -> BaseException | None:
        return self._state.error

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, callback: StateCallback[T]) -> Callable[[], None]:
        """Register ``callback`` for every published state; returns an unsubscribe hook."""

        self._subscribers.append(callback)

        def unsubscribe() -> None:
            with suppress(ValueError):
                self._subscribers.remove(callback)

        return unsubscribe

    # Input

    def set_query(self, text: str) -> None:
        self._ensure_open()
        if text == self._query:
            return
        loop = self._owner_loop()
        self._query = text
        self._cancel_timer()
        self._debounce_task = loop.create_task(self._debounce())

    def set_query_threadsafe(self, text: str) -> None:
        if self._loop is None:
            raise RuntimeError("SearchOrchestrator is not bound to an event loop yet")
        self._ensure_open()
        self._loop.call_soon_threadsafe(self._apply_query, text)

    def refresh(self) -> None:
        """Search the current query right away, skipping the debounce window."""

        self._ensure_open()
        self._owner_loop()
        self._cancel_timer()
        text = self._query
        self._last_dispatched = text
        if text.strip():
            self._dispatch(text)

    async def settle(self) -> SearchState[T]:
        """Wait until no timer or fetch is pending and return the current state."""

        while True:
            pending = {
                task
                for task in (self._debounce_task, self._fetch_task)
                if task is not None and not task.done()
            }
            if not pending:
                return self._state
            await asyncio.wait(pending)

    # Teardown

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._generation += 1
        for task in (self._debounce_task, self._fetch_task):
            if task is not None and not task.done():
                task.cancel()
        self._subscribers.clear()
        logger.debug("search_orchestrator_closed", generation=self._generation)

    async def aclose(self) -> None:
        tasks = [task for task in (self._debounce_task, self._fetch_task) if task is not None]
        self.close()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def __aenter__(self) -> SearchOrchestrator[T]:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # Internals

    def _ensure_open(self) -> None:
        if self._closed:
            raise OrchestratorClosedError("Search orchestrator has been closed.")

    def _owner_loop(self) -> asyncio.AbstractEventLoop:
        loop = asyncio.get_running_loop()
        if self._loop is None:
            self._loop = loop
        elif loop is not self._loop:
            raise RuntimeError("SearchOrchestrator is bound to a different event loop")
        return loop

    def _apply_query(self, text: str) -> None:
        if self._closed:
            logger.debug("search_query_dropped", query=text, reason="closed")
            return
        self.set_query(text)

    def _cancel_timer(self) -> None:
        if self._debounce_task is not None and not self._debounce_task.done():
            self._debounce_task.cancel()
        self._debounce_task = None

    async def _debounce(self) -> None:
        await asyncio.sleep(self._debounce_seconds)
        self._debounce_task = None
        text = self._query
        if text == self._last_dispatched:
            logger.debug("search_duplicate_skipped", query=text)
            return
        self._last_dispatched = text
        if not text.strip():
            return
        self._dispatch(text)

    def _dispatch(self, text: str) -> None:
        self._generation += 1
        generation = self._generation
        if self._fetch_task is not None and not self._fetch_task.done():
            self._fetch_task.cancel()
        logger.info("search_dispatched", query=text, generation=generation)
        self._publish(self._state.loading())
        # A subscriber may have closed us or started another search.
        if generation != self._generation:
            return
        self._fetch_task = self._owner_loop().create_task(self._run_fetch(text, generation))

    async def _run_fetch(self, text: str, generation: int) -> None:
        try:
            results = await self._fetch(text)
            items = tuple(sort_items(results, self._compare))
        except asyncio.CancelledError as exc:
            task = asyncio.current_task()
            # Cancellation aimed at this task or at a superseded search propagates.
            if generation != self._generation or (task is not None and task.cancelling()):
                raise
            self._fail(text, generation, exc)
            return
        except Exception as exc:
            self._fail(text, generation, exc)
            return

        if generation != self._generation:
            logger.debug("search_result_discarded", query=text, generation=generation)
            return
        logger.info("search_completed", query=text, generation=generation, count=len(items))
        self._publish(self._state.succeeded(items))

    def _fail(self, text: str, generation: int, exc: BaseException) -> None:
        if generation != self._generation:
            logger.debug("search_result_discarded", query=text, generation=generation)
            return
        logger.warning(
            "search_failed",
            query=text,
            generation=generation,
            error_type=exc.__class__.__name__,
            error=str(exc),
        )
        self._publish(self._state.failed(exc))

    def _publish(self, state: SearchState[T]) -> None:
        self._state = state
        for callback in list(self._subscribers):
            try:
                callback(state)
            except Exception:
                logger.exception("search_subscriber_failed", phase=state.phase.value)


__all__ = ["DEFAULT_DEBOUNCE_SECONDS", "FetchFunction", "SearchOrchestrator", "StateCallback"]
