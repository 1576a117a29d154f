# bibcrawl/errors.py
"""Exception hierarchy for crawls and page requests."""


class BibcrawlError(Exception):
    """Base class for all bibcrawl errors."""


class InvalidQueryError(BibcrawlError):
    """Query is empty or malformed. Raised before any network activity."""


class CrawlCancelledError(BibcrawlError):
    """The crawl was cancelled through its CancelToken."""

    def __init__(self, message: str = "Crawl cancelled") -> None:
        super().__init__(message)


class RequestError(BibcrawlError):
    """A single page request failed."""


class TransientRequestError(RequestError):
    """Retryable HTTP status (5xx or 429) persisted after all attempts."""

    def __init__(self, status_code: int, url: str | None = None) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"Upstream returned HTTP {status_code} after retries")


class PermanentRequestError(RequestError):
    """Non-retryable HTTP status (4xx other than 429)."""

    def __init__(self, status_code: int, url: str | None = None) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"Upstream rejected request with HTTP {status_code}")


class ResponseFormatError(RequestError):
    """Response body could not be decoded into a result page."""


class ServiceUnavailableError(BibcrawlError):
    """The source could not be reached at all (first page failed)."""


class PartialPageFailure(BibcrawlError):
    """Terminal failure of one page after the first.

    Recorded on the crawl result and logged; never raised out of a crawl.
    """

    def __init__(self, offset: int, cause: BaseException) -> None:
        self.offset = offset
        self.cause = cause
        super().__init__(f"Page at offset {offset} failed: {cause}")
