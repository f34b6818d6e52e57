"""RSS feed fetching, parsing and caching."""

from .cache import CacheEntry, FeedCache
from .dates import normalize_date, parse_date
from .fetcher import FeedFetcher
from .items import parse_item, parse_items
from .models import Feed, Item

__all__ = [
    "CacheEntry",
    "Feed",
    "FeedCache",
    "FeedFetcher",
    "Item",
    "normalize_date",
    "parse_date",
    "parse_item",
    "parse_items",
]
