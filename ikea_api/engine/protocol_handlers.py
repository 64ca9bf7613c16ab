# Path: ikea_api/engine/protocol_handlers.py
"""
Protocol Handlers

Host HTTP transport used by the transport pool.
Issues one GET and hands back the raw status and body; classifying the
outcome is the pool's job.

Architecture:
- Async HTTP client with aiohttp
- One shared session, created on first use
- Timeout configuration per call
"""

from typing import Optional
import aiohttp

from ikea_api.core.config_loader import ConfigLoader
from ikea_api.core.logger import get_logger
from ikea_api.constants import LOG_PROCESS, LOG_OUTPUT

logger = get_logger(__name__, 'engine')


class HTTPHandler:
    """
    HTTP/HTTPS GET handler.

    Example:
        handler = HTTPHandler()
        status, body = await handler.get(url, headers={'User-Agent': '...'})
        await handler.close()
    """

    def __init__(self, config: Optional[ConfigLoader] = None):
        """
        Initialize HTTP handler.

        Args:
            config: Optional ConfigLoader instance
        """
        self.config = config if config else ConfigLoader()
        self._session: Optional[aiohttp.ClientSession] = None

    async def get(self, url: str, headers: Optional[dict[str, str]] = None) -> tuple[int, bytes]:
        """
        Perform a GET request.

        Args:
            url: Fully built URL (query string included)
            headers: Request headers

        Returns:
            Tuple of (status code, raw body)

        Raises:
            aiohttp.ClientError: Transport-level failure
            asyncio.TimeoutError: Request exceeded the configured timeout
        """
        session = await self._get_session()

        timeout = aiohttp.ClientTimeout(
            total=self.config.get('request_timeout'),
            connect=self.config.get('connect_timeout'),
        )

        logger.debug(f"{LOG_PROCESS} GET {url}")

        async with session.get(url, headers=headers, timeout=timeout) as response:
            body = await response.read()
            logger.debug(f"{LOG_OUTPUT} {response.status} from {url} ({len(body)} bytes)")
            return response.status, body

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(limit=self.config.get('pool_size'))
            self._session = aiohttp.ClientSession(connector=connector)
        return self._session

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
            logger.debug("HTTP session closed")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


__all__ = ['HTTPHandler']
