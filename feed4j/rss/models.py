"""Pydantic models for parsed RSS feeds."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class Item(BaseModel):
    """A single entry from an RSS channel."""

    model_config = ConfigDict(frozen=True)

    title: str
    link: str
    description: str
    pub_date: datetime | None = None


class Feed(BaseModel):
    """An RSS channel with its items in document order."""

    model_config = ConfigDict(frozen=True)

    title: str
    link: str
    description: str
    items: tuple[Item, ...] = ()
