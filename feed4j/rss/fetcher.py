"""RSS feed download and parsing."""

import logging

import httpx
from lxml import etree

from feed4j.config import Feed4jConfig
from feed4j.errors import MalformedDocument, MissingRequiredField, NetworkFailure

from .items import first_text, parse_items
from .models import Feed

logger = logging.getLogger(__name__)


class FeedFetcher:
    """Downloads RSS documents and assembles them into Feed objects.

    Each call opens its own HTTP client, so a fetcher can be shared by
    threads.
    """

    def __init__(self, config: Feed4jConfig):
        """Initialize the fetcher.

        Args:
            config: Timeouts, user agent, validation flag and worker cap
        """
        self.config = config

    def _timeout(self) -> httpx.Timeout:
        return httpx.Timeout(
            self.config.read_timeout_ms / 1000,
            connect=self.config.connect_timeout_ms / 1000,
        )

    def _xml_parser(self) -> etree.XMLParser:
        # Schema validation is never performed; validate_xml only turns on DTD checks
        validate = self.config.validate_xml
        return etree.XMLParser(
            dtd_validation=validate,
            load_dtd=validate,
            no_network=True,
            resolve_entities=False,
            recover=False,
        )

    def download(self, url: str) -> bytes:
        """Fetch the raw document body.

        Raises:
            NetworkFailure: On connection errors, timeouts or HTTP error status
        """
        headers = {"User-Agent": self.config.user_agent}
        try:
            with httpx.Client(
                timeout=self._timeout(), headers=headers, follow_redirects=True
            ) as client:
                response = client.get(url)
                response.raise_for_status()
                return response.content
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise NetworkFailure(f"Failed to fetch {url}: {exc}", url=url) from exc

    def parse_document(self, content: bytes, url: str | None = None) -> etree._Element:
        """Parse a document body into an element tree.

        Raises:
            MalformedDocument: If the XML is not well-formed or fails DTD validation
        """
        try:
            return etree.fromstring(content, parser=self._xml_parser())
        except (etree.XMLSyntaxError, etree.DocumentInvalid) as exc:
            raise MalformedDocument(f"Invalid XML from {url}: {exc}", url=url) from exc

    def build_feed(self, root: etree._Element, url: str | None = None) -> Feed:
        """Assemble a Feed from the first ``<channel>`` in the tree.

        Raises:
            MissingRequiredField: If the channel, or its title, link or
                description, is missing
        """
        channel = next(root.iter("channel"), None)
        if channel is None:
            raise MissingRequiredField("channel", element="rss", url=url)

        try:
            title = first_text(channel, "title", owner="channel")
            link = first_text(channel, "link", owner="channel")
            description = first_text(channel, "description", owner="channel")
        except MissingRequiredField as exc:
            exc.url = url
            raise

        items = parse_items(list(channel.iter("item")), self.config.max_threads)

        return Feed(title=title, link=link, description=description, items=tuple(items))

    def fetch(self, url: str) -> Feed:
        """Download, parse and assemble the feed at ``url``.

        Args:
            url: Address of an RSS document

        Returns:
            The assembled Feed

        Raises:
            NetworkFailure: If the document could not be retrieved
            MalformedDocument: If the document is not valid XML
            MissingRequiredField: If channel metadata is missing
        """
        logger.debug("Fetching feed %s", url)
        content = self.download(url)
        root = self.parse_document(content, url=url)
        feed = self.build_feed(root, url=url)
        logger.debug("Fetched feed %s with %d items", url, len(feed.items))
        return feed
