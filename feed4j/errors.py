"""Exceptions raised while fetching and parsing feeds."""


class FeedError(Exception):
    """Base exception for all Feed4j errors."""

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.url = url


class NetworkFailure(FeedError):
    """Connection failure, timeout, or non-success HTTP status."""

    pass


class MalformedDocument(FeedError):
    """XML not well-formed, or DTD validation failed."""

    pass


class MissingRequiredField(FeedError):
    """A required tag is absent on a channel or an item."""

    def __init__(self, field: str, element: str = "item", url: str | None = None):
        super().__init__(f"<{element}> is missing required <{field}>", url=url)
        self.field = field
        self.element = element


class UnrecognizedDateFormat(FeedError):
    """No supported date format matched. Handled locally, never fatal."""

    def __init__(self, value: str):
        super().__init__(f"Unrecognized date format: {value!r}")
        self.value = value
