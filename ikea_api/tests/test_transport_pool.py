# Path: ikea_api/tests/test_transport_pool.py
"""Transport pool: slot bound, release, headers and outcome classification."""

import asyncio
import socket
import ssl

import aiohttp
import pytest

from ikea_api.engine.errors import ErrorKind, HttpStatusError, TransportError
from ikea_api.engine.transport_pool import TransportPool, classify_exception
from ikea_api.tests.fakes import (
    EXISTS_URL,
    FakeHTTPHandler,
    SEARCH_URL,
    THUMBNAIL_URL,
)


@pytest.fixture
def pool(config, handler):
    return TransportPool(config, handler=handler)


class TestSlots:

    def test_size_from_configuration(self, config, handler):
        config.set('pool_size', 3)
        assert TransportPool(config, handler=handler).size == 3

    def test_acquire_until_exhausted(self, config, handler):
        config.set('pool_size', 2)
        pool = TransportPool(config, handler=handler)

        first = pool.acquire()
        second = pool.acquire()
        assert first is not None and second is not None
        assert first.index != second.index
        assert pool.acquire() is None

        pool.release(first)
        assert pool.acquire() is first

    @pytest.mark.asyncio
    async def test_slot_released_after_success(self, pool, handler):
        handler.add(SEARCH_URL, {'ok': True})
        slot = pool.acquire()
        result = await pool.execute(slot, SEARCH_URL)
        assert result.success
        assert slot.busy is False
        assert pool.in_flight == 0

    @pytest.mark.asyncio
    async def test_slot_released_after_transport_failure(self, pool, handler):
        handler.fail(SEARCH_URL, ConnectionRefusedError('refused'))
        slot = pool.acquire()
        result = await pool.execute(slot, SEARCH_URL)
        assert not result.success
        assert slot.busy is False

    @pytest.mark.asyncio
    async def test_slot_released_when_call_cannot_start(self, pool):
        class BrokenHandler:
            def get(self, url, headers):
                raise RuntimeError('no transport')

        pool.handler = BrokenHandler()
        slot = pool.acquire()
        result = await pool.execute(slot, SEARCH_URL)
        assert result.error.kind == ErrorKind.TRANSPORT
        assert 'Unexpected error' in result.error.message
        assert slot.busy is False

    @pytest.mark.asyncio
    async def test_pool_bound_under_concurrency(self, config):
        config.set('pool_size', 2)
        handler = FakeHTTPHandler(delay=0.05)
        handler.add(SEARCH_URL, {'ok': True})
        pool = TransportPool(config, handler=handler)

        async def request():
            slot = pool.acquire()
            if slot is None:
                return None
            return await pool.execute(slot, SEARCH_URL)

        results = await asyncio.gather(*(request() for _ in range(3)))

        assert results.count(None) == 1
        assert sum(1 for r in results if r is not None and r.success) == 2
        assert len(handler.calls) == 2
        assert pool.in_flight == 0


class TestRequests:

    @pytest.mark.asyncio
    async def test_query_parameters_are_encoded(self, pool, handler):
        handler.add(SEARCH_URL, {})
        result = await pool.execute(pool.acquire(), SEARCH_URL, {'q': 'poäng chair', 'size': '24'})
        assert result.url == f"{SEARCH_URL}?q=po%C3%A4ng+chair&size=24"
        assert handler.calls[0][0] == result.url

    @pytest.mark.asyncio
    async def test_client_id_only_for_api_host(self, pool, handler, config):
        handler.add(EXISTS_URL, {'exists': True})
        handler.add(THUMBNAIL_URL, b'x')

        await pool.execute(pool.acquire(), EXISTS_URL)
        await pool.execute(pool.acquire(), THUMBNAIL_URL)

        api_headers = handler.headers_for(EXISTS_URL)
        cdn_headers = handler.headers_for(THUMBNAIL_URL)

        assert api_headers['X-Client-Id'] == config.get('client_id')
        assert 'X-Client-Id' not in cdn_headers
        assert api_headers['User-Agent'] == config.get('user_agent')
        assert cdn_headers['User-Agent'] == config.get('user_agent')

    @pytest.mark.asyncio
    async def test_extra_headers_merged(self, pool, handler):
        handler.add(SEARCH_URL, {})
        await pool.execute(pool.acquire(), SEARCH_URL, extra_headers={'Accept': 'application/json'})
        assert handler.headers_for(SEARCH_URL)['Accept'] == 'application/json'

    @pytest.mark.asyncio
    async def test_http_status_failure(self, pool, handler):
        handler.add(SEARCH_URL, b'gone', status=404)
        result = await pool.execute(pool.acquire(), SEARCH_URL)

        assert not result.success
        assert result.status_code == 404
        assert result.error.kind == ErrorKind.HTTP_STATUS
        assert result.error.message == 'HTTP 404: Not Found'

        with pytest.raises(HttpStatusError) as exc_info:
            result.raise_for_error('00346735')
        assert exc_info.value.status_code == 404
        assert exc_info.value.identifier == '00346735'

    @pytest.mark.asyncio
    async def test_result_to_dict(self, pool, handler):
        handler.add(SEARCH_URL, b'{}')
        data = (await pool.execute(pool.acquire(), SEARCH_URL)).to_dict()
        assert data['success'] is True
        assert data['body_size'] == 2
        assert data['status_code'] == 200
        assert data['error_kind'] is None

    @pytest.mark.asyncio
    async def test_redirect_status_is_failure(self, pool, handler):
        handler.add(SEARCH_URL, b'', status=302)
        result = await pool.execute(pool.acquire(), SEARCH_URL)
        assert result.error.kind == ErrorKind.HTTP_STATUS

    @pytest.mark.asyncio
    async def test_timeout_is_its_own_kind(self, config):
        config.set('request_timeout', 0.01)
        handler = FakeHTTPHandler(delay=1.0)
        handler.add(SEARCH_URL, {})
        pool = TransportPool(config, handler=handler)

        slot = pool.acquire()
        result = await pool.execute(slot, SEARCH_URL)

        assert result.error.kind == ErrorKind.TIMEOUT
        assert slot.busy is False
        with pytest.raises(TransportError) as exc_info:
            result.raise_for_error()
        assert exc_info.value.kind == ErrorKind.TIMEOUT
        assert exc_info.value.retryable

    @pytest.mark.asyncio
    async def test_close_closes_handler(self, pool, handler):
        await pool.close()
        assert handler.closed


class TestClassification:

    @pytest.mark.parametrize('error, kind', [
        (asyncio.TimeoutError(), ErrorKind.TIMEOUT),
        (socket.gaierror(-2, 'Name or service not known'), ErrorKind.DNS),
        (ConnectionRefusedError(111, 'Connection refused'), ErrorKind.CONNECT),
        (ssl.SSLError(1, 'certificate verify failed'), ErrorKind.TLS),
        (aiohttp.ServerDisconnectedError(), ErrorKind.TRANSPORT),
        (OSError('broken pipe'), ErrorKind.TRANSPORT),
        (RuntimeError('boom'), ErrorKind.TRANSPORT),
    ])
    def test_kinds(self, error, kind):
        assert classify_exception(error).kind == kind

    def test_timeout_message_names_limit(self):
        assert '30.0s' in classify_exception(asyncio.TimeoutError(), timeout=30.0).message
