"""Feed4j: cached RSS feed fetching and parsing."""

from feed4j.client import Feed4j
from feed4j.config import Feed4jConfig, get_default_config
from feed4j.errors import (
    FeedError,
    MalformedDocument,
    MissingRequiredField,
    NetworkFailure,
    UnrecognizedDateFormat,
)
from feed4j.rss import Feed, FeedCache, FeedFetcher, Item

__all__ = [
    "Feed",
    "Feed4j",
    "Feed4jConfig",
    "FeedCache",
    "FeedError",
    "FeedFetcher",
    "Item",
    "MalformedDocument",
    "MissingRequiredField",
    "NetworkFailure",
    "UnrecognizedDateFormat",
    "get_default_config",
]
