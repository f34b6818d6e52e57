"""Tests for item parsing and the parsing fan-out."""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from unittest.mock import patch

import pytest
from lxml import etree

from feed4j.errors import MissingRequiredField
from feed4j.rss.items import parse_item, parse_items


def make_item_xml(
    title: str | None = "Item",
    link: str | None = "https://example.com/item",
    description: str | None = "Body",
    pub_date: str | None = "Wed, 02 Oct 2024 15:00:00 GMT",
) -> str:
    """Helper to build an <item> element as XML text, omitting None fields."""
    parts = []
    if title is not None:
        parts.append(f"<title>{title}</title>")
    if link is not None:
        parts.append(f"<link>{link}</link>")
    if description is not None:
        parts.append(f"<description>{description}</description>")
    if pub_date is not None:
        parts.append(f"<pubDate>{pub_date}</pubDate>")
    return f"<item>{''.join(parts)}</item>"


def make_element(xml: str) -> etree._Element:
    return etree.fromstring(xml)


def make_elements(*xml_items: str) -> list[etree._Element]:
    channel = etree.fromstring(f"<channel>{''.join(xml_items)}</channel>")
    return list(channel.iter("item"))


class TestParseItem:
    """Tests for parse_item."""

    def test_all_fields(self):
        item = parse_item(make_element(make_item_xml(title="Hello")))

        assert item.title == "Hello"
        assert item.link == "https://example.com/item"
        assert item.description == "Body"
        assert item.pub_date == datetime(2024, 10, 2, 15, 0, tzinfo=timezone.utc)

    def test_text_is_stripped(self):
        item = parse_item(make_element(make_item_xml(title="\n   Spaced   \n")))

        assert item.title == "Spaced"

    def test_cdata_description(self):
        xml = make_item_xml(description="<![CDATA[<p>Rich <b>text</b></p>]]>")

        item = parse_item(make_element(xml))

        assert item.description == "<p>Rich <b>text</b></p>"

    def test_empty_fields_are_allowed(self):
        item = parse_item(make_element(make_item_xml(title="", description="")))

        assert item.title == ""
        assert item.description == ""

    def test_unparsable_date_gives_none(self):
        item = parse_item(make_element(make_item_xml(pub_date="not-a-date")))

        assert item.title == "Item"
        assert item.pub_date is None

    @pytest.mark.parametrize("missing", ["title", "link", "description", "pubDate"])
    def test_missing_field_raises(self, missing):
        fields = {"title": "T", "link": "L", "description": "D", "pub_date": "P"}
        key = "pub_date" if missing == "pubDate" else missing
        fields[key] = None

        with pytest.raises(MissingRequiredField) as exc_info:
            parse_item(make_element(make_item_xml(**fields)))

        assert exc_info.value.field == missing
        assert exc_info.value.element == "item"


class TestParseItems:
    """Tests for parse_items."""

    def test_sequential_preserves_document_order(self):
        elements = make_elements(
            make_item_xml(title="A"), make_item_xml(title="B"), make_item_xml(title="C")
        )

        with patch(
            "feed4j.rss.items.ThreadPoolExecutor", wraps=ThreadPoolExecutor
        ) as pool:
            items = parse_items(elements, max_workers=1)

        pool.assert_not_called()
        assert [i.title for i in items] == ["A", "B", "C"]

    def test_single_item_is_parsed_sequentially(self):
        elements = make_elements(make_item_xml(title="Only"))

        with patch(
            "feed4j.rss.items.ThreadPoolExecutor", wraps=ThreadPoolExecutor
        ) as pool:
            items = parse_items(elements, max_workers=8)

        pool.assert_not_called()
        assert [i.title for i in items] == ["Only"]

    def test_workers_capped_by_item_count(self):
        elements = make_elements(
            make_item_xml(title="A"), make_item_xml(title="B"), make_item_xml(title="C")
        )

        with patch(
            "feed4j.rss.items.ThreadPoolExecutor", wraps=ThreadPoolExecutor
        ) as pool:
            parse_items(elements, max_workers=16)

        pool.assert_called_once_with(max_workers=3)

    def test_concurrent_skips_malformed_item(self):
        """A broken middle item is dropped without aborting the batch."""
        elements = make_elements(
            make_item_xml(title="A"),
            make_item_xml(title=None),
            make_item_xml(title="C"),
        )

        items = parse_items(elements, max_workers=4)

        assert len(items) == 2
        assert {i.title for i in items} == {"A", "C"}

    def test_sequential_skips_malformed_item(self):
        elements = make_elements(
            make_item_xml(title="A"),
            make_item_xml(link=None),
            make_item_xml(title="C"),
        )

        items = parse_items(elements, max_workers=1)

        assert [i.title for i in items] == ["A", "C"]

    def test_concurrent_results_follow_document_order(self):
        titles = [f"Item {n}" for n in range(50)]
        elements = make_elements(*(make_item_xml(title=t) for t in titles))

        items = parse_items(elements, max_workers=8)

        assert [i.title for i in items] == titles

    def test_unparsable_date_keeps_item(self):
        elements = make_elements(
            make_item_xml(title="A", pub_date="not-a-date"), make_item_xml(title="B")
        )

        items = parse_items(elements, max_workers=2)

        assert [i.title for i in items] == ["A", "B"]
        assert items[0].pub_date is None
        assert items[1].pub_date is not None

    def test_empty_list(self):
        assert parse_items([], max_workers=4) == []


@pytest.mark.parametrize("max_workers", [1, 4])
def test_out_of_range_date_keeps_batch(max_workers):
    """An overflowing pubDate degrades to None without dropping the feed."""
    elements = make_elements(
        make_item_xml(title="A"),
        make_item_xml(title="B", pub_date="0001-01-01T00:00:00+01:00"),
        make_item_xml(title="C"),
    )

    items = parse_items(elements, max_workers=max_workers)

    assert [i.title for i in items] == ["A", "B", "C"]
    assert items[1].pub_date is None


@pytest.mark.parametrize("max_workers", [1, 4])
def test_unexpected_item_error_drops_only_that_item(max_workers):
    elements = make_elements(
        make_item_xml(title="A"), make_item_xml(title="B"), make_item_xml(title="C")
    )

    def flaky_normalize(text):
        if text == "boom":
            raise OverflowError("date value out of range")
        return None

    elements[1].find("pubDate").text = "boom"

    with patch("feed4j.rss.items.normalize_date", side_effect=flaky_normalize):
        items = parse_items(elements, max_workers=max_workers)

    assert [i.title for i in items] == ["A", "C"]
