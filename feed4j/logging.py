"""Logging configuration for Feed4j."""

import json
import logging
import sys

from feed4j.config import Feed4jConfig, get_default_config
from feed4j.errors import FeedError


class JsonFormatter(logging.Formatter):
    """JSON formatter for production logging.

    Adds the feed ``url`` and ``error`` kind when a record carries them,
    either as ``extra`` fields or through an attached ``FeedError``.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        base = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }

        url = getattr(record, "url", None)
        error = getattr(record, "error", None)
        if record.exc_info:
            exc = record.exc_info[1]
            if isinstance(exc, FeedError):
                url = url or exc.url
                error = error or type(exc).__name__
            base["exc_info"] = self.formatException(record.exc_info)

        if url:
            base["url"] = url
        if error:
            base["error"] = error
        return json.dumps(base)


def setup_logging(config: Feed4jConfig | None = None) -> None:
    """Configure root logging from the given (or default) config.

    Feed4j never calls this on import; applications opt in.
    """
    config = config or get_default_config()
    handler = logging.StreamHandler(sys.stdout)

    if config.log_format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(config.log_level.upper())
