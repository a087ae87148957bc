"""iTunes top-movies connector using the public RSS JSON feed."""

import logging
import os
from typing import Optional

import httpx

from showtime.connectors.base import BaseFeedConnector
from showtime.errors import FetchError
from showtime.models.entry import GenericEntry
from showtime.models.rules import CatalogRules

from .constants import DEFAULT_FEED_URL
from .parsers import decode_feed

logger = logging.getLogger(__name__)


class ITunesTopMoviesConnector(BaseFeedConnector):
    """
    Connector for the iTunes top-movies feed.
    One GET per call; no caching, paging or retries.
    """

    source_id = "itunes"

    DEFAULT_HEADERS = {
        "User-Agent": "showtime/0.1 (top movies catalog)",
        "Accept": "application/json, text/plain, */*",
    }
    TIMEOUT = 30.0

    def __init__(
        self,
        feed_url: Optional[str] = None,
        client: Optional[httpx.Client] = None,
        async_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Args:
            feed_url: Feed URL; falls back to SHOWTIME_FEED_URL, then the US top 50 feed
            client: Optional httpx client for fetch_text
            async_client: Optional httpx async client for afetch_text
        """
        self.feed_url = feed_url or os.environ.get("SHOWTIME_FEED_URL") or DEFAULT_FEED_URL
        self._client = client
        self._async_client = async_client

    def _new_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=self.TIMEOUT,
            follow_redirects=True,
            headers=self.DEFAULT_HEADERS,
        )

    def _new_async_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.TIMEOUT,
            follow_redirects=True,
            headers=self.DEFAULT_HEADERS,
        )

    def _body_text(self, response: httpx.Response) -> str:
        """Raise for HTTP errors and decode the body as UTF-8."""
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchError(f"HTTP {e.response.status_code} from {self.feed_url}") from e
        try:
            return response.content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise FetchError(f"Response from {self.feed_url} is not UTF-8: {e}") from e

    def fetch_text(self) -> str:
        """Fetch the feed body."""
        client = self._client or self._new_client()
        try:
            response = client.get(self.feed_url)
        except httpx.RequestError as e:
            raise FetchError(f"Request to {self.feed_url} failed: {e}") from e
        finally:
            if self._client is None:
                client.close()
        logger.debug("Fetched %d bytes from %s", len(response.content), self.feed_url)
        return self._body_text(response)

    async def afetch_text(self) -> str:
        """Fetch the feed body without blocking the event loop."""
        client = self._async_client or self._new_async_client()
        try:
            response = await client.get(self.feed_url)
        except httpx.RequestError as e:
            raise FetchError(f"Request to {self.feed_url} failed: {e}") from e
        finally:
            if self._async_client is None:
                await client.aclose()
        logger.debug("Fetched %d bytes from %s", len(response.content), self.feed_url)
        return self._body_text(response)

    def decode(self, raw: str, rules: CatalogRules) -> list[GenericEntry]:
        """Decode iTunes feed text (or any payload matching the rules)."""
        return decode_feed(raw, rules)
