"""
Fetch layer for restaurant pages.
Single-attempt HTTP GET with browser-like headers and a bounded timeout.
Retrying is left to the caller.
"""
import logging
import time
from typing import Optional, Dict, Any, Tuple

import httpx

from .config import CrawlerConfig

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Custom exception for fetch errors"""
    pass


class RateLimitError(FetchError):
    """Raised when rate limited"""
    pass


class BotChallengeError(FetchError):
    """Raised when bot challenge is detected"""
    pass


class Fetcher:
    """Async fetcher for static page content"""

    def __init__(self, config: CrawlerConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self.transport = transport
        self.client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        """Async context manager entry"""
        self.client = httpx.AsyncClient(
            timeout=self.config.request_timeout,
            follow_redirects=True,
            headers=self.config.get_headers(),
            transport=self.transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        if self.client:
            await self.client.aclose()
            self.client = None

    def _detect_bot_challenge(self, html: str) -> bool:
        """Detect bot challenge pages"""
        challenge_indicators = [
            'please verify you are human',
            'verify you are not a robot',
            'cf-browser-verification',
            'checking your browser',
        ]
        html_lower = html.lower()
        return any(indicator in html_lower for indicator in challenge_indicators)

    async def fetch(self, url: str) -> Tuple[str, Dict[str, Any]]:
        """
        Fetch a page once.

        Returns:
            Tuple of (HTML content, metadata dict)

        Raises:
            FetchError: network failure, timeout or non-success status
        """
        if self.client is None:
            raise FetchError("Client not initialized. Use async context manager.")

        started = time.time()
        try:
            response = await self.client.get(url)
        except httpx.TimeoutException as e:
            raise FetchError(f"Timeout fetching {url}") from e
        except httpx.HTTPError as e:
            raise FetchError(f"Error fetching {url}: {e}") from e

        if response.status_code == 429:
            raise RateLimitError(f"429 Too Many Requests: {url}")

        if not response.is_success:
            raise FetchError(f"HTTP error {response.status_code}: {url}")

        html = response.text

        if self._detect_bot_challenge(html):
            raise BotChallengeError(f"Bot challenge detected: {url}")

        metadata = {
            "url": url,
            "status_code": response.status_code,
            "content_type": response.headers.get("content-type", ""),
            "final_url": str(response.url),
            "html_length": len(html),
            "duration": time.time() - started,
        }

        logger.info(f"Successfully fetched {url} ({len(html):,} bytes)")
        return html, metadata
