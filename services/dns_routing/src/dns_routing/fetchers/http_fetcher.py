"""HTTP fetcher for remote domain lists."""

import asyncio

import aiohttp
import structlog
from typing import Dict, Any
from tenacity import (
    AsyncRetrying,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)
from routing_common import FetchError
from routing_common.constants import (
    DEFAULT_URL_FETCH_BACKOFF,
    DEFAULT_URL_FETCH_RETRIES,
    DEFAULT_URL_FETCH_TIMEOUT,
)
from .base_fetcher import BaseFetcher

logger = structlog.get_logger()


class HTTPFetcher(BaseFetcher):
    """HTTP fetcher with a hard per-attempt timeout.

    A single attempt is the default so that an unreachable list costs at
    most ``timeout`` seconds.
    """

    def __init__(
        self,
        source_name: str,
        url: str,
        timeout: int = DEFAULT_URL_FETCH_TIMEOUT,
        retries: int = DEFAULT_URL_FETCH_RETRIES,
        backoff: float = DEFAULT_URL_FETCH_BACKOFF,
    ):
        """
        Initialize HTTP fetcher.

        Args:
            source_name: Name of the data source
            url: URL to fetch from
            timeout: Request timeout in seconds
            retries: Number of attempts
            backoff: Initial backoff time between attempts
        """
        super().__init__(source_name, url)
        self.timeout = timeout
        self.retries = max(1, retries)
        self.backoff = backoff

    @property
    def url(self) -> str:
        return self.location

    async def fetch(self) -> Dict[str, Any]:
        """
        Fetch a remote domain list.

        Returns:
            Dictionary containing:
                - content: The response body as string
                - metadata: Metadata (http_status, content_length, etc.)

        Raises:
            FetchError: On timeout, transport error, undecodable body or any
                status other than 200
        """
        logger.debug(
            "Starting HTTP fetch",
            source=self.source_name,
            url=self.url,
            timeout=self.timeout,
        )

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.retries),
                wait=wait_exponential(multiplier=self.backoff, min=self.backoff),
                retry=retry_if_exception_type(
                    (aiohttp.ClientError, asyncio.TimeoutError)
                ),
                reraise=True,
            ):
                with attempt:
                    async with aiohttp.ClientSession() as session:
                        async with session.get(
                            self.url,
                            timeout=aiohttp.ClientTimeout(total=self.timeout),
                        ) as response:
                            if response.status != 200:
                                raise FetchError(
                                    message=f"Unexpected status code {response.status}",
                                    context={
                                        "source_name": self.source_name,
                                        "url": self.url,
                                        "status_code": response.status,
                                    },
                                )
                            try:
                                content = await response.text()
                            except UnicodeDecodeError as e:
                                raise FetchError(
                                    message=f"Domain URL {self.url} is not valid text",
                                    context={
                                        "source_name": self.source_name,
                                        "url": self.url,
                                    },
                                    original_error=e,
                                )

                            logger.debug(
                                "HTTP fetch successful",
                                source=self.source_name,
                                status=response.status,
                                content_length=len(content),
                            )

                            return {
                                "content": content,
                                "metadata": {
                                    "http_status": response.status,
                                    "content_length": len(content),
                                    "source_url": self.url,
                                },
                            }

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(
                "HTTP fetch failed",
                source=self.source_name,
                url=self.url,
                attempts=self.retries,
                error=str(e) or type(e).__name__,
            )
            raise FetchError(
                message=f"Failed to fetch domain URL {self.url}",
                context={
                    "source_name": self.source_name,
                    "url": self.url,
                    "attempts": self.retries,
                    "timeout": self.timeout,
                },
                original_error=e,
            )
