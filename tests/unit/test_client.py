"""Unit tests for ShortenClient

Test coverage includes:

1. Request layout
   - POST {base_url}/shorten with a JSON body and JSON headers

2. Successful responses
   - Returns Shortened with the returned short_url

3. Failures
   - Non-2xx status returns Failed with the status
   - Transport failures (unreachable, timeout) return Failed without status
   - Undecodable or incomplete payloads return Failed
"""

import io
import json
import socket
import urllib.error
from unittest.mock import MagicMock, patch

import pytest

from shortclient.client import ShortenClient
from shortclient.constants import SHORTEN_FAILURE_MESSAGE, TRANSPORT_FAILURE_MESSAGE
from shortclient.models import Failed, Shortened


URLOPEN = 'shortclient.client.urllib.request.urlopen'


def response(body: bytes) -> MagicMock:
    """Mock the context manager returned by urlopen()."""
    resp = MagicMock()
    resp.__enter__.return_value.read.return_value = body
    return resp


def http_error(code: int) -> urllib.error.HTTPError:
    return urllib.error.HTTPError('https://sho.rt/shorten', code, 'error', {}, io.BytesIO(b'{"error": "nope"}'))


@pytest.fixture
def client():
    return ShortenClient('https://sho.rt/', timeout=3.0)


# -------------------------------
# 1. Request layout
# -------------------------------


def test_endpoint_strips_trailing_slash(client):
    assert client.base_url == 'https://sho.rt'
    assert client.endpoint == 'https://sho.rt/shorten'


@pytest.mark.asyncio
async def test_request_layout(client):
    with patch(URLOPEN, return_value=response(b'{"short_url": "abc123"}')) as urlopen:
        await client.shorten('https://example.com')

    urlopen.assert_called_once()
    request = urlopen.call_args.args[0]
    assert urlopen.call_args.kwargs == {'timeout': 3.0}
    assert request.full_url == 'https://sho.rt/shorten'
    assert request.get_method() == 'POST'
    assert json.loads(request.data) == {'original_url': 'https://example.com'}
    assert request.get_header('Content-type') == 'application/json'
    assert request.get_header('Accept') == 'application/json'


# -------------------------------
# 2. Successful responses
# -------------------------------


@pytest.mark.asyncio
async def test_shorten_success(client):
    body = b'{"original_url": "https://example.com", "short_url": "abc123"}'
    with patch(URLOPEN, return_value=response(body)):
        outcome = await client.shorten('https://example.com')

    assert outcome == Shortened(original_url='https://example.com', short_url='abc123')


# -------------------------------
# 3. Failures
# -------------------------------


@pytest.mark.asyncio
@pytest.mark.parametrize('code', [400, 404, 429, 500, 503])
async def test_error_status(client, code):
    with patch(URLOPEN, side_effect=http_error(code)):
        outcome = await client.shorten('https://example.com')

    assert outcome == Failed(reason=SHORTEN_FAILURE_MESSAGE, status=code)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    'error',
    [
        urllib.error.URLError('Name or service not known'),
        TimeoutError('timed out'),
        socket.timeout('timed out'),
        ConnectionResetError('reset by peer'),
    ],
)
async def test_transport_failure(client, error):
    with patch(URLOPEN, side_effect=error):
        outcome = await client.shorten('https://example.com')

    assert outcome == Failed(reason=TRANSPORT_FAILURE_MESSAGE, status=None)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    'body',
    [
        b'not json',
        b'\xff\xfe',
        b'[]',
        b'{}',
        b'{"short_url": ""}',
        b'{"short_url": 42}',
        pytest.param(b'[' * 100_000, id='deeply-nested'),
    ],
)
async def test_bad_payload(client, body):
    with patch(URLOPEN, return_value=response(body)):
        outcome = await client.shorten('https://example.com')

    assert outcome == Failed(reason=SHORTEN_FAILURE_MESSAGE, status=None)


@pytest.mark.asyncio
async def test_one_request_per_call(client):
    """Ensure failures aren't retried."""
    with patch(URLOPEN, side_effect=http_error(500)) as urlopen:
        await client.shorten('https://example.com')

    assert urlopen.call_count == 1
