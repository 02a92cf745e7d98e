"""Client for the public photo feed used as the search backend."""

from __future__ import annotations

from urllib.parse import quote

import httpx
from pydantic import ValidationError

from feedsearch.config import FeedSettings
from feedsearch.domain.models import Feed, FeedItem
from feedsearch.logging import logger
from feedsearch.services.exceptions import (
    FeedDecodeError,
    FeedTransportError,
    InvalidQueryError,
)
from feedsearch.utils.retry import retry_async

# Reserved characters left unescaped; &, =, + and # are always encoded.
QUERY_SAFE_CHARS = "!$'()*,;:@/?"


def _is_transient(exc: Exception) -> bool:
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code >= 500
    return isinstance(exc, httpx.RequestError)


class FeedClient:
    """Resolve search text to a decoded feed.

    ``search`` matches the fetch signature expected by
    :class:`feedsearch.search.SearchOrchestrator`.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: FeedSettings | None = None,
    ) -> None:
        self._client = http_client
        self._settings = settings or FeedSettings()

    def build_url(self, query: str) -> str:
        tags = (query or "").strip()
        if not tags:
            raise InvalidQueryError("Search query must not be empty.")
        encoded = quote(tags, safe=QUERY_SAFE_CHARS)
        return self._settings.endpoint_template.format(tags=encoded)

    async def search(self, query: str) -> list[FeedItem]:
        if not (query or "").strip():
            return []
        feed = await self.fetch_feed(query)
        return list(feed.items)

    async def fetch_feed(self, query: str) -> Feed:
        url = self.build_url(query)
        headers = {"Accept": "application/json", "User-Agent": self._settings.user_agent}

        async def _request() -> httpx.Response:
            resp = await self._client.get(
                url,
                headers=headers,
                timeout=self._settings.request_timeout_seconds,
            )
            resp.raise_for_status()
            return resp

        logger.debug("feed_request", url=url)
        try:
            response = await retry_async(
                _request,
                max_attempts=self._settings.max_attempts,
                base_delay=self._settings.retry_base_delay,
                retry_if=_is_transient,
                logger=logger,
                operation_name="feed_request",
            )
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            detail = exc.response.text[:500]
            raise FeedTransportError(
                f"Feed request failed ({status_code}): {detail}",
                status_code=status_code,
            ) from exc
        except httpx.RequestError as exc:
            raise FeedTransportError(f"Feed request failed: {exc!r}") from exc

        return self._decode(response)

    @staticmethod
    def _decode(response: httpx.Response) -> Feed:
        try:
            return Feed.model_validate_json(response.content)
        except ValidationError as exc:
            raise FeedDecodeError(
                f"Unexpected feed payload: {exc.error_count()} validation error(s)"
            ) from exc


__all__ = ["FeedClient", "QUERY_SAFE_CHARS"]
