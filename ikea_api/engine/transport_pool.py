# Path: ikea_api/engine/transport_pool.py
"""
Transport Pool

Bounded pool of concurrent request slots.

Every outbound call runs in one acquired slot. When all slots are busy,
acquire() returns None and the requesting flow fails immediately; there is
no internal queue. A slot is released exactly once when its call finishes,
whatever the outcome.

Architecture:
- Fixed-size slot array, sized from configuration at creation
- acquire/release are plain synchronous state flips
- execute() normalizes host transport outcomes into TransportResult
"""

import asyncio
import socket
import ssl
import time
from dataclasses import dataclass
from http import HTTPStatus
from typing import Optional
from urllib.parse import urlencode, urlparse

import aiohttp

from ikea_api.core.config_loader import ConfigLoader
from ikea_api.core.logger import get_logger
from ikea_api.engine.errors import ErrorKind
from ikea_api.engine.protocol_handlers import HTTPHandler
from ikea_api.engine.result import ErrorDetail, TransportResult
from ikea_api.constants import (
    HTTP_OK,
    HTTP_MULTIPLE_CHOICES,
    HEADER_USER_AGENT,
    HEADER_ACCEPT,
    HEADER_CLIENT_ID,
    DEFAULT_ACCEPT_HEADER,
    LOG_INPUT,
    LOG_PROCESS,
    LOG_OUTPUT,
)

logger = get_logger(__name__, 'engine')


@dataclass
class TransportSlot:
    """One unit of concurrent transport capacity."""
    index: int
    busy: bool = False


class TransportPool:
    """
    Fixed-size pool of transport slots over a host HTTP handler.

    Example:
        pool = TransportPool()
        slot = pool.acquire()
        if slot is None:
            ...  # capacity exhausted
        result = await pool.execute(slot, url, {'q': 'chair'})
    """

    def __init__(self, config: Optional[ConfigLoader] = None, handler=None):
        """
        Initialize transport pool.

        Args:
            config: Optional ConfigLoader instance
            handler: Host transport with `async get(url, headers)`;
                     defaults to HTTPHandler
        """
        self.config = config if config else ConfigLoader()
        self.handler = handler if handler is not None else HTTPHandler(self.config)

        size = max(1, int(self.config.get('pool_size')))
        self._slots = [TransportSlot(index=i) for i in range(size)]

    @property
    def size(self) -> int:
        return len(self._slots)

    @property
    def in_flight(self) -> int:
        """Number of busy slots."""
        return sum(1 for slot in self._slots if slot.busy)

    def acquire(self) -> Optional[TransportSlot]:
        """
        Take an idle slot.

        Returns:
            The slot, or None when every slot is busy
        """
        for slot in self._slots:
            if not slot.busy:
                slot.busy = True
                return slot

        logger.warning(f"Transport pool exhausted ({self.size} slots busy)")
        return None

    def release(self, slot: TransportSlot) -> None:
        """Return a slot to idle."""
        slot.busy = False

    def build_url(self, url: str, query_params: Optional[dict] = None) -> str:
        """Append URL-encoded query parameters."""
        if not query_params:
            return url
        separator = '&' if urlparse(url).query else '?'
        return f"{url}{separator}{urlencode(query_params)}"

    def build_headers(self, url: str, extra_headers: Optional[dict] = None) -> dict:
        """
        Fixed identifying headers, plus the client id for the first-party API host.

        The client id header is never sent to other hosts (CDNs, image hosts).
        """
        headers = {
            HEADER_USER_AGENT: self.config.get('user_agent'),
            HEADER_ACCEPT: DEFAULT_ACCEPT_HEADER,
        }

        api_host = urlparse(self.config.get('api_base_url')).hostname
        if api_host and urlparse(url).hostname == api_host:
            headers[HEADER_CLIENT_ID] = self.config.get('client_id')

        if extra_headers:
            headers.update(extra_headers)

        return headers

    async def execute(
        self,
        slot: TransportSlot,
        url: str,
        query_params: Optional[dict] = None,
        extra_headers: Optional[dict] = None
    ) -> TransportResult:
        """
        Run one GET in an acquired slot.

        The slot is released before this returns, on every path.

        Args:
            slot: Slot returned by acquire()
            url: Endpoint URL without query string
            query_params: Parameters to URL-encode and append
            extra_headers: Headers merged over the fixed set

        Returns:
            TransportResult with body on success or ErrorDetail on failure
        """
        start_time = time.time()
        full_url = url

        try:
            full_url = self.build_url(url, query_params)
            headers = self.build_headers(full_url, extra_headers)
            timeout = self.config.get('request_timeout')

            logger.info(f"{LOG_INPUT} GET {full_url} (slot {slot.index})")

            status, body = await asyncio.wait_for(
                self.handler.get(full_url, headers),
                timeout=timeout
            )

            duration = time.time() - start_time

            if not HTTP_OK <= status < HTTP_MULTIPLE_CHOICES:
                detail = ErrorDetail(
                    kind=ErrorKind.HTTP_STATUS,
                    message=f"HTTP {status}: {_reason_phrase(status)}",
                    status_code=status,
                )
                logger.warning(f"{LOG_OUTPUT} {detail.message} from {full_url}")
                return TransportResult(
                    success=False,
                    url=full_url,
                    status_code=status,
                    duration=duration,
                    error=detail,
                )

            logger.info(
                f"{LOG_OUTPUT} {status} from {full_url} "
                f"({len(body)} bytes, {duration:.2f}s)"
            )
            return TransportResult(
                success=True,
                body=body,
                url=full_url,
                status_code=status,
                duration=duration,
            )

        except Exception as e:
            detail = classify_exception(e, timeout=self.config.get('request_timeout'))
            if detail.kind == ErrorKind.TRANSPORT:
                logger.error(f"{LOG_PROCESS} Transport failure for {full_url}: {e}", exc_info=True)
            else:
                logger.warning(f"{LOG_PROCESS} {detail.message} ({full_url})")
            return TransportResult(
                success=False,
                url=full_url,
                duration=time.time() - start_time,
                error=detail,
            )

        finally:
            self.release(slot)

    async def close(self) -> None:
        """Close the host transport."""
        await self.handler.close()


def _reason_phrase(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return 'Unknown Status'


def _is_dns_failure(error: BaseException) -> bool:
    os_error = getattr(error, 'os_error', None)
    return isinstance(error, socket.gaierror) or isinstance(os_error, socket.gaierror)


def classify_exception(error: BaseException, timeout: Optional[float] = None) -> ErrorDetail:
    """
    Map a host transport exception to a classified ErrorDetail.

    Order matters: aiohttp's connector errors subclass OSError and each other.
    """
    if isinstance(error, asyncio.TimeoutError):
        limit = f" after {timeout}s" if timeout else ''
        return ErrorDetail(ErrorKind.TIMEOUT, f"Request timed out{limit}")

    if isinstance(error, (aiohttp.ClientSSLError, ssl.SSLError)):
        return ErrorDetail(ErrorKind.TLS, f"TLS failure: {error}")

    if _is_dns_failure(error):
        return ErrorDetail(ErrorKind.DNS, f"Cannot resolve host: {error}")

    if isinstance(error, (aiohttp.ClientConnectorError, ConnectionError)):
        return ErrorDetail(ErrorKind.CONNECT, f"Connection failed: {error}")

    if isinstance(error, (aiohttp.ClientError, OSError)):
        return ErrorDetail(ErrorKind.TRANSPORT, f"Transport failure: {error}")

    return ErrorDetail(ErrorKind.TRANSPORT, f"Unexpected error: {type(error).__name__}: {error}")


__all__ = ['TransportSlot', 'TransportPool', 'classify_exception']
