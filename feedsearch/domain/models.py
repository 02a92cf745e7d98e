"""Pydantic models for the public photo feed."""

from __future__ import annotations

from datetime import datetime

from pydantic import AnyHttpUrl, BaseModel, ConfigDict


class FeedMedia(BaseModel):
    model_config = ConfigDict(frozen=True)

    m: AnyHttpUrl


class FeedItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    link: AnyHttpUrl
    media: FeedMedia
    date_taken: datetime
    description: str
    published: datetime
    author: str
    author_id: str
    tags: str

    @property
    def id(self) -> str:
        return str(self.link)

    @property
    def tag_list(self) -> list[str]:
        return self.tags.split()


class Feed(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    link: str
    description: str
    modified: datetime
    generator: str
    items: list[FeedItem]


__all__ = ["Feed", "FeedItem", "FeedMedia"]
