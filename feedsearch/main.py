"""Application entrypoint: search the photo feed from the command line."""

from __future__ import annotations

import asyncio
import sys
from typing import Sequence

import httpx

from feedsearch.config import AppSettings, get_settings
from feedsearch.domain.models import FeedItem
from feedsearch.logging import configure_logging, logger
from feedsearch.search import SearchOrchestrator, SearchState, newest_first, oldest_first
from feedsearch.services.feed import FeedClient


def build_search(
    http_client: httpx.AsyncClient, settings: AppSettings
) -> SearchOrchestrator[FeedItem]:
    feed_client = FeedClient(http_client, settings=settings.feed)
    compare = newest_first if settings.search.order == "newest_first" else oldest_first
    return SearchOrchestrator(
        feed_client.search,
        compare,
        debounce_seconds=settings.search.debounce_seconds,
    )


def log_state(state: SearchState[FeedItem]) -> None:
    logger.info(
        "search_state",
        phase=state.phase.value,
        items=len(state.items),
        error=str(state.error) if state.error is not None else None,
    )


def format_item(item: FeedItem) -> str:
    columns = [item.published.isoformat(), item.title or "(untitled)", str(item.link)]
    if item.tag_list:
        columns.append(" ".join(f"#{tag}" for tag in item.tag_list))
    return "  ".join(columns)


async def main(
    queries: Sequence[str],
    *,
    settings: AppSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    settings = settings or get_settings()
    configure_logging(settings.log_level, json_output=settings.environment != "dev")
    if not queries:
        print("usage: feedsearch QUERY [QUERY ...]", file=sys.stderr)
        return 2

    async with httpx.AsyncClient(transport=transport, follow_redirects=True) as client:
        async with build_search(client, settings) as search:
            search.subscribe(log_state)
            # Successive queries arrive like keystrokes; only the last survives the debounce.
            for query in queries:
                search.query = query
            state = await search.settle()

    for item in state.items:
        print(format_item(item))
    if state.error is not None:
        print(f"Error: {state.error}", file=sys.stderr)
        return 1
    return 0


def run() -> None:
    raise SystemExit(asyncio.run(main(sys.argv[1:])))


if __name__ == "__main__":
    run()
