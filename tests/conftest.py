"""Shared fixtures: realistic feed payloads and item factories."""

from __future__ import annotations

from typing import Any

import pytest

from feedsearch.domain.models import FeedItem


def feed_item_payload(
    title: str,
    published: str,
    *,
    photo_id: str | None = None,
    tags: str = "cats pets",
) -> dict[str, Any]:
    photo_id = photo_id or title.lower().replace(" ", "-")
    return {
        "title": title,
        "link": f"https://www.flickr.com/photos/tester/{photo_id}/",
        "media": {"m": f"https://live.staticflickr.com/65535/{photo_id}_m.jpg"},
        "date_taken": "2025-01-14T09:30:00-08:00",
        "description": f" <p><a href=\"https://www.flickr.com/people/tester/\">tester</a> posted a photo:</p> <p>{title}</p> ",
        "published": published,
        "author": "nobody@flickr.com (\"tester\")",
        "author_id": "12345678@N00",
        "tags": tags,
    }


def feed_payload(items: list[dict[str, Any]], *, tags: str = "cats") -> dict[str, Any]:
    return {
        "title": f"Recent Uploads tagged {tags}",
        "link": f"https://www.flickr.com/photos/tags/{tags}/",
        "description": "",
        "modified": "2025-01-15T18:04:12Z",
        "generator": "https://www.flickr.com",
        "items": items,
    }


def make_item(title: str, published: str) -> FeedItem:
    return FeedItem.model_validate(feed_item_payload(title, published))


@pytest.fixture
def cats_payload() -> dict[str, Any]:
    return feed_payload(
        [
            feed_item_payload("Middle cat", "2025-01-15T12:00:00Z"),
            feed_item_payload("Newest cat", "2025-01-15T18:00:00Z"),
            feed_item_payload("Oldest cat", "2025-01-15T06:00:00Z"),
        ]
    )
