"""
Errors - Exception types raised by the ingestion pipeline.

Every error raised by the core derives from WordPressSourceError, so callers
can catch the whole family at the top level. None of them are retried: the
first one raised fails the run.
"""


class WordPressSourceError(Exception):
    """Base class for all ingestion failures."""


class UnreachableAPIError(WordPressSourceError):
    """The REST root of the configured site did not answer.

    Raised before any type discovery, so no store calls have happened yet.
    """

    def __init__(self, base_url: str):
        self.base_url = base_url
        super().__init__(f"Failed to fetch baseUrl {base_url}")


class FetchError(WordPressSourceError):
    """A page request failed at the transport level (network or non-2xx)."""

    def __init__(self, url: str, cause: Exception):
        self.url = url
        self.cause = cause
        super().__init__(f"{url} failed with error: {cause}")


class MalformedResponseError(WordPressSourceError):
    """A page body could not be read as a list of records.

    Typically an HTML error page served with a 200 status. The preview is
    the stripped body cut to PREVIEW_LENGTH characters.
    """

    PREVIEW_LENGTH = 150

    def __init__(self, source: str, raw_body):
        self.source = source
        self.preview = str(raw_body).strip()[:self.PREVIEW_LENGTH]
        super().__init__(
            f"Failed to fetch {source}\n"
            f"Expected JSON response but got:\n"
            f"{self.preview}...\n"
        )
