# bibcrawl/fetch.py
"""Single-page HTTP fetch with retry and linear backoff."""

import logging

import httpx

from bibcrawl.cancel import CancelToken
from bibcrawl.config import Settings
from bibcrawl.errors import PermanentRequestError, TransientRequestError

logger = logging.getLogger(__name__)


def is_retryable_status(status_code: int) -> bool:
    """5xx and 429 are worth another attempt; other 4xx are not."""
    return status_code >= 500 or status_code == 429


class PageFetcher:
    """Issues GET requests against the search endpoint.

    Use as an async context manager, or pass an existing httpx.AsyncClient
    (which the fetcher then does not close).
    """

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> "PageFetcher":
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._settings.timeout,
                follow_redirects=True,
                headers={
                    "Accept": "application/json",
                    "User-Agent": self._settings.user_agent,
                },
            )
        return self

    async def __aexit__(self, *_: object) -> None:
        if self._client and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def fetch(
        self,
        url: str,
        max_attempts: int | None = None,
        cancel: CancelToken | None = None,
    ) -> httpx.Response:
        """Fetch `url`, retrying transport failures, 5xx and 429.

        Backoff between attempts is linear: attempt * base_delay.

        Raises:
            CrawlCancelledError: token fired before or between attempts.
            PermanentRequestError: non-retryable 4xx status.
            TransientRequestError: retryable status persisted on the last attempt.
            httpx.TransportError: the last transport failure, once attempts run out.
        """
        if self._client is None:
            raise RuntimeError("Fetcher not initialized. Use 'async with fetcher:'")

        attempts = max_attempts if max_attempts is not None else self._settings.max_attempts
        if attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        cancel = cancel or CancelToken()

        last_error: httpx.TransportError | None = None
        last_status: int | None = None

        for attempt in range(1, attempts + 1):
            cancel.raise_if_cancelled()
            logger.debug("Requesting (attempt %d/%d): %s", attempt, attempts, url)
            try:
                response = await cancel.guard(self._client.get(url))
            except httpx.TransportError as e:
                last_error = e
                last_status = None
                logger.warning(
                    "Transport error on %s (attempt %d/%d): %s", url, attempt, attempts, e
                )
            else:
                if response.is_success:
                    return response
                if not is_retryable_status(response.status_code):
                    raise PermanentRequestError(response.status_code, url)
                last_error = None
                last_status = response.status_code
                logger.warning(
                    "HTTP %d from %s (attempt %d/%d)",
                    response.status_code,
                    url,
                    attempt,
                    attempts,
                )

            if attempt < attempts:
                await cancel.sleep(attempt * self._settings.base_delay)

        if last_error is not None:
            raise last_error
        raise TransientRequestError(last_status or 0, url)
