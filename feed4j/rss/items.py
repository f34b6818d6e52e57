"""Extraction of feed items, sequentially or with a worker pool."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

from lxml import etree

from feed4j.errors import FeedError, MissingRequiredField

from .dates import normalize_date
from .models import Item

logger = logging.getLogger(__name__)


def first_text(element: etree._Element, tag: str, owner: str = "item") -> str:
    """Return the stripped text content of the first descendant named ``tag``.

    Raises:
        MissingRequiredField: If ``element`` has no such descendant
    """
    found = next(element.iter(tag), None)
    if found is None:
        raise MissingRequiredField(tag, element=owner)
    return "".join(found.itertext()).strip()


def parse_item(element: etree._Element) -> Item:
    """Build an Item from an ``<item>`` element.

    An unparsable ``pubDate`` yields ``pub_date=None`` rather than an error.

    Raises:
        MissingRequiredField: If title, link, description or pubDate is absent
    """
    title = first_text(element, "title")
    link = first_text(element, "link")
    description = first_text(element, "description")
    pub_date = first_text(element, "pubDate")

    return Item(
        title=title,
        link=link,
        description=description,
        pub_date=normalize_date(pub_date),
    )


def _parse_or_skip(index: int, element: etree._Element) -> Item | None:
    try:
        return parse_item(element)
    except FeedError as exc:
        logger.warning("Skipping item %d: %s", index, exc)
    except Exception:  # pylint: disable=broad-exception-caught
        logger.warning("Skipping malformed item %d", index, exc_info=True)
    return None


def parse_items(elements: Sequence[etree._Element], max_workers: int) -> list[Item]:
    """Parse ``<item>`` elements, dropping any that fail.

    Uses ``min(len(elements), max_workers)`` worker threads; with one
    effective worker or fewer the items are parsed sequentially. Results are
    collected in submission order, so the output follows document order in
    both modes.

    Args:
        elements: Item elements in document order
        max_workers: Upper bound on worker threads

    Returns:
        The successfully parsed items, in document order
    """
    workers = min(len(elements), max_workers)

    if workers <= 1:
        results = [_parse_or_skip(i, el) for i, el in enumerate(elements)]
    else:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [
                pool.submit(_parse_or_skip, i, el) for i, el in enumerate(elements)
            ]
            results = [future.result() for future in futures]

    items = [item for item in results if item is not None]
    if len(items) < len(elements):
        logger.info("Parsed %d of %d items", len(items), len(elements))
    return items
