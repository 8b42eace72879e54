"""HTTP client service with retry logic."""

import asyncio
from typing import Any

import httpx
import structlog

from .. import __version__
from .errors import describe_http_error

log = structlog.stdlib.get_logger()


class HttpClientService:
    """HTTP client service with retry logic and timeout handling."""

    def __init__(
        self,
        timeout: float | None = None,
        max_retries: int = 1,
        base_delay: float = 1.0,
        max_delay: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client service.

        Args:
            timeout: Request timeout in seconds (None keeps the httpx default)
            max_retries: Maximum number of retry attempts after the first request
            base_delay: Base delay for exponential backoff in seconds
            max_delay: Maximum delay between retries in seconds
            transport: Optional transport override, used by tests
        """
        self.timeout = timeout
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay

        client_kwargs: dict[str, Any] = {
            "headers": {
                "User-Agent": f"rawg-compare/{__version__}",
                "Accept": "application/json",
            },
            "follow_redirects": True,
        }
        if timeout is not None:
            client_kwargs["timeout"] = httpx.Timeout(timeout)
        if transport is not None:
            client_kwargs["transport"] = transport

        self._client = httpx.AsyncClient(**client_kwargs)

        log.debug(
            "HTTP client service initialized",
            timeout=timeout,
            max_retries=max_retries,
        )

    async def get(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        params: dict[str, str | int] | None = None
    ) -> httpx.Response:
        """Make a GET request with retry logic.

        Query parameters are never logged, since they carry the API key.

        Args:
            url: The URL to request
            headers: Optional additional headers
            params: Optional query parameters

        Returns:
            HTTP response object

        Raises:
            httpx.HTTPStatusError: On a 4xx response, or a 5xx after all retries
            httpx.RequestError: If the transport fails after all retries
        """
        for attempt in range(self.max_retries + 1):
            try:
                log.debug(
                    "Making HTTP GET request",
                    url=url,
                    attempt=attempt + 1,
                    max_attempts=self.max_retries + 1
                )

                response = await self._client.get(url, headers=headers, params=params)
                response.raise_for_status()

                log.info(
                    "HTTP GET request successful",
                    url=url,
                    status_code=response.status_code,
                    content_length=len(response.content)
                )

                return response

            except (httpx.HTTPStatusError, httpx.RequestError) as e:
                log.warning(
                    "HTTP GET request failed",
                    url=url,
                    attempt=attempt + 1,
                    error=describe_http_error(e),
                    error_type=type(e).__name__
                )

                if isinstance(e, httpx.HTTPStatusError):
                    status_code = e.response.status_code
                    if status_code == 429 and attempt < self.max_retries:
                        retry_after = e.response.headers.get("retry-after")
                        if retry_after:
                            try:
                                delay = min(float(retry_after), self.max_delay)
                                log.info("Rate limited, waiting", delay=delay)
                                await asyncio.sleep(delay)
                                continue
                            except ValueError:
                                pass
                    elif 400 <= status_code < 500 and status_code != 429:
                        log.error("Client error, not retrying", url=url, status_code=status_code)
                        raise

                if attempt == self.max_retries:
                    log.error(
                        "HTTP GET request failed after all retries",
                        url=url,
                        total_attempts=self.max_retries + 1
                    )
                    raise

                delay = min(self.base_delay * (2 ** attempt), self.max_delay)
                log.info("Retrying after delay", delay=delay)
                await asyncio.sleep(delay)

        # Unreachable, the loop either returns or raises
        raise RuntimeError("Unexpected end of retry loop")

    async def close(self) -> None:
        """Close the HTTP client and clean up resources."""
        await self._client.aclose()
        log.debug("HTTP client closed")

    async def __aenter__(self) -> "HttpClientService":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: type[Exception] | None, exc_val: Exception | None, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
