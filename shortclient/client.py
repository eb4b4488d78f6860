"""Client for the remote shorten endpoint

The service exposes a single operation:

    POST {base_url}/shorten
    Content-Type: application/json

    {"original_url": "https://example.com"}

A 2xx response carries a JSON object with at least `short_url` (and usually
echoes `original_url`). Anything else is a failure.

Classes:
    ShortenClient:
        Issues exactly one request per `shorten()` call and returns an Outcome
        (Shortened | Failed). No retries, no caching.

Example:
    >>> client = ShortenClient('https://sho.rt')
    >>> await client.shorten('https://example.com')
    Shortened(original_url='https://example.com', short_url='abc123')
    >>> await client.shorten('https://unreachable.example')
    Failed(reason='An error occurred', status=None)
"""

import json
import asyncio
import logging
import http.client
import urllib.error
import urllib.request
from typing import Any

from shortclient.constants import Defaults, SHORTEN_FAILURE_MESSAGE, TRANSPORT_FAILURE_MESSAGE
from shortclient.exceptions import RequestFailure
from shortclient.models import Failed, Outcome, Shortened


logger = logging.getLogger(__name__)


class ShortenClient:
    """Async client for the shortening service

    Attributes:
        base_url (str):
            Service base URL, without trailing slash.
        timeout (float):
            Seconds before a request is abandoned.

    The blocking urllib call runs in a worker thread (`asyncio.to_thread`), so
    the event loop only suspends while the request is in flight.
    """

    def __init__(self, base_url: str, timeout: float = Defaults.REQUEST_TIMEOUT_SECONDS):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

    @property
    def endpoint(self) -> str:
        return f'{self.base_url}/shorten'

    async def shorten(self, original_url: str) -> Outcome:
        """Ask the service to shorten one URL

        Args:
            original_url (str):
                URL submitted by the user (already validated).

        Returns:
            Shortened: on a 2xx response with a decodable payload.
            Failed: on error status, undecodable payload or transport failure.
        """
        try:
            payload = await asyncio.to_thread(self._post, {'original_url': original_url})
            short_url = self._short_url(payload)
        except RequestFailure as e:
            logger.warning('Failed to shorten URL.', extra={'originalUrl': original_url, 'status': e.status, 'error': str(e)})
            return Failed(reason=str(e), status=e.status)

        logger.info('Shortened URL.', extra={'originalUrl': original_url, 'shortUrl': short_url})
        return Shortened(original_url=original_url, short_url=short_url)

    def _post(self, body: dict[str, Any]) -> Any:
        request = urllib.request.Request(
            self.endpoint,
            data=json.dumps(body).encode('utf-8'),
            headers={'Content-Type': 'application/json', 'Accept': 'application/json'},
            method='POST',
        )

        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as response:  # noqa: S310
                raw = response.read()
        except urllib.error.HTTPError as e:
            # Non-2xx status: the body is irrelevant, the status is kept for diagnostics
            raise RequestFailure(SHORTEN_FAILURE_MESSAGE, status=e.code) from e
        except (urllib.error.URLError, http.client.HTTPException, TimeoutError, OSError, ValueError) as e:
            raise RequestFailure(TRANSPORT_FAILURE_MESSAGE) from e

        try:
            return json.loads(raw)
        except (UnicodeDecodeError, ValueError, RecursionError) as e:
            raise RequestFailure(SHORTEN_FAILURE_MESSAGE) from e

    def _short_url(self, payload: Any) -> str:
        short_url = payload.get('short_url') if isinstance(payload, dict) else None
        if not isinstance(short_url, str) or not short_url:
            raise RequestFailure(SHORTEN_FAILURE_MESSAGE)
        return short_url
