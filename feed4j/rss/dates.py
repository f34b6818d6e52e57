"""Normalization of the date formats found in real-world RSS feeds."""

import logging
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Callable

from feed4j.errors import UnrecognizedDateFormat

logger = logging.getLogger(__name__)


def _rfc_1123(text: str) -> datetime:
    # Handles zone names (GMT, EST, ...) and numeric offsets
    return parsedate_to_datetime(text)


def _rfc_822_named_zone(text: str) -> datetime:
    return datetime.strptime(text, "%a, %d %b %Y %H:%M:%S %Z")


def _iso_8601(text: str) -> datetime:
    if "T" not in text:
        raise ValueError("not an ISO 8601 date-time")
    # Convert Z to +00:00 for fromisoformat
    return datetime.fromisoformat(text.replace("Z", "+00:00"))


def _iso_t_separated(text: str) -> datetime:
    return datetime.strptime(text, "%Y-%m-%dT%H:%M:%S")


def _space_separated(text: str) -> datetime:
    return datetime.strptime(text, "%Y-%m-%d %H:%M:%S")


# Most common in the wild first; the first match wins.
DATE_PARSERS: tuple[Callable[[str], datetime], ...] = (
    _rfc_1123,
    _rfc_822_named_zone,
    _iso_8601,
    _iso_t_separated,
    _space_separated,
)


def _to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_date(text: str) -> datetime:
    """Parse an RSS date string into a timezone-aware UTC datetime.

    Args:
        text: Raw ``pubDate`` text

    Returns:
        The parsed point in time, in UTC. Values carrying no zone are
        taken as UTC.

    Raises:
        UnrecognizedDateFormat: If none of the supported formats match
    """
    candidate = text.strip()
    if candidate:
        for parser in DATE_PARSERS:
            try:
                return _to_utc(parser(candidate))
            except (TypeError, ValueError, IndexError, OverflowError):
                continue
    raise UnrecognizedDateFormat(text)


def normalize_date(text: str | None) -> datetime | None:
    """Like :func:`parse_date`, but returns None for unrecognized text."""
    if text is None:
        return None
    try:
        return parse_date(text)
    except UnrecognizedDateFormat as exc:
        logger.warning("%s", exc)
        return None
