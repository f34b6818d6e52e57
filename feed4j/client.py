"""Public entry point: cached RSS feed reading."""

import logging
from typing import cast

from feed4j.config import Feed4jConfig
from feed4j.errors import FeedError
from feed4j.rss.cache import FeedCache
from feed4j.rss.fetcher import FeedFetcher
from feed4j.rss.models import Feed

logger = logging.getLogger(__name__)


class Feed4j:
    """Reads RSS feeds through a per-instance cache.

    Each instance owns its cache; nothing is shared between instances.
    """

    def __init__(self, config: Feed4jConfig | None = None):
        """Initialize the reader.

        Args:
            config: Settings to use. The reader keeps its own copy, so later
                changes to ``config`` do not affect it. Defaults to a fresh
                ``Feed4jConfig()``, which reads ``FEED4J_*`` environment variables.
        """
        if config is None:
            config = Feed4jConfig()
        self._config = config.model_copy()
        self._cache = FeedCache(self._config.cache_duration_ms)
        self._fetcher = FeedFetcher(self._config)

    def fetch_feed(self, url: str) -> Feed:
        """
        Return the feed at ``url``, from the cache when it is still fresh.

        Raises:
            NetworkFailure: If the document could not be retrieved
            MalformedDocument: If the document is not valid XML
            MissingRequiredField: If channel metadata is missing
        """
        # The fetcher raises instead of returning None
        return cast(Feed, self._cache.get(url, lambda: self._fetcher.fetch(url)))

    def read_feed(self, url: str) -> Feed | None:
        """
        Return the feed at ``url``, or None if it could not be read.

        Never raises. Failures are logged and not cached, so the next call
        retries. Use :meth:`fetch_feed` to see why a read failed.
        """
        try:
            return self.fetch_feed(url)
        except FeedError as exc:
            logger.warning(
                "Could not read feed %s: %s",
                url,
                exc,
                extra={"url": url, "error": type(exc).__name__},
            )
        except Exception:  # pylint: disable=broad-exception-caught
            logger.exception(
                "Unexpected error reading feed %s", url, extra={"url": url}
            )
        return None

    def clear_cache(self) -> None:
        """Empty the feed cache."""
        self._cache.clear()

    def remove_from_cache(self, url: str | None) -> None:
        """Drop one feed from the cache."""
        self._cache.remove(url)

    def get_cache_size(self) -> int:
        """Number of cached feeds."""
        return self._cache.size()

    def get_config(self) -> Feed4jConfig:
        """Return a copy of the settings in use."""
        return self._config.model_copy()
