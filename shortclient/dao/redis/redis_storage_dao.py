"""Data Access Object (DAO) storing the history cache in a local Redis

The history never leaves the device: only loopback hosts (or a unix socket)
are accepted. The whole collection lives under one string key:

    <prefix>:history:<slot>   -> JSON-encoded history collection

No TTL is applied to the key. Record expiry is enforced by HistoryStore on
load, since individual records age out independently of the slot.

Classes:
    RedisStorageDAO:
        DAO for reading and writing the history slot in a local Redis.

Example:
    >>> from shortclient.dao.redis import RedisStorageDAO

    >>> dao = RedisStorageDAO(prefix='shortclient:local')
    >>> dao.key
    'shortclient:local:history:shortenedUrls'
    >>> dao.write('[]').read()
    '[]'
    >>> dao.delete().read() is None
    True
"""

import functools
from typing import Any, TypeVar
from collections.abc import Callable

import redis
from beartype import beartype

from shortclient.constants import History, LOCAL_REDIS_HOSTS
from shortclient.dao.base import HistoryStorageBaseDAO
from shortclient.dao.exceptions import CorruptHistoryError, DataStoreError


def is_local_host(host: str | None) -> bool:
    """Return True for loopback hosts. None stands for a unix socket connection."""
    return host is None or host.lower() in LOCAL_REDIS_HOSTS


F = TypeVar('F', bound=Callable[..., Any])


def handle_history_errors(method: F) -> F:
    """Map Redis failures on the history slot to DAO exceptions

    Connectivity issues become DataStoreError. A slot holding bytes that aren't
    UTF-8 becomes CorruptHistoryError, whether the client decodes responses
    itself or returns raw bytes.
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            raise DataStoreError(f"Can't connect to Redis at {self.address}.") from e
        except UnicodeDecodeError as e:
            raise CorruptHistoryError(f'History key {self.key} is not valid UTF-8.') from e

    return wrapper


class RedisStorageDAO(HistoryStorageBaseDAO):
    """Redis-based Data Access Object (DAO) for the history slot

    Attributes:
        redis (redis.Redis):
            Client bound to a loopback host or unix socket.
        key (str):
            Redis key holding the history slot.
        slot (str):
            Name of the history slot.

    Methods:
        read(**kwargs) -> str | None:
            GET the history key.
        write(payload: str, **kwargs) -> RedisStorageDAO:
            SET the history key.
        delete(**kwargs) -> RedisStorageDAO:
            DEL the history key.

        All methods raise DataStoreError on connectivity issues with Redis.
    """

    def __init__(
        self,
        slot: str = History.SLOT,
        host: str = 'localhost',
        port: int = 6379,
        db: int = 0,
        username: str | None = None,
        password: str | None = None,
        client: redis.Redis | None = None,
        prefix: str | None = None,
    ):
        """Connect to the local Redis and check it answers

        Raises:
            ValueError:
                If the client points anywhere but a loopback host or unix socket.
            TypeError:
                If prefix isn't a string.
            DataStoreError:
                If Redis doesn't answer PING.
        """
        super().__init__(slot=slot)
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        if client is None:
            if not is_local_host(host):
                raise ValueError(f'History storage must stay on this device (given Redis host: {host}).')
            client = redis.Redis(
                host=host,
                port=int(port),
                db=int(db),
                decode_responses=True,
                username=username,
                password=password,
            )

        self.redis = client
        if not is_local_host(self._connection_info.get('host')):
            raise ValueError(f'History storage must stay on this device (given Redis address: {self.address}).')

        self.key = f'history:{slot}' if prefix is None else f'{prefix}:history:{slot}'
        self.ping()

    @property
    def _connection_info(self) -> dict[str, Any]:
        return self.redis.connection_pool.connection_kwargs

    @property
    def address(self) -> str:
        info = self._connection_info
        if info.get('path'):
            return f"unix://{info['path']}/{info.get('db', 0)}"
        return f"{info.get('host')}:{info.get('port')}/{info.get('db')}"

    def ping(self, raise_error: bool = True) -> bool:
        """PING Redis to check the history slot is reachable

        Returns:
            bool: True if Redis answered, False otherwise (only if raise_error=False).

        Raises:
            DataStoreError:
                If Redis is unreachable and raise_error=True.
        """
        try:
            self.redis.ping()
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            if raise_error:
                raise DataStoreError(f"Can't connect to Redis at {self.address}. Check the redis settings of the client config.") from e
            return False
        return True

    @handle_history_errors
    def read(self, **kwargs) -> str | None:
        payload = self.redis.get(self.key)
        if isinstance(payload, bytes):
            # Client created with decode_responses=False
            payload = payload.decode('utf-8')
        return payload

    @handle_history_errors
    @beartype
    def write(self, payload: str, **kwargs) -> 'RedisStorageDAO':
        self.redis.set(self.key, payload)
        return self

    @handle_history_errors
    def delete(self, **kwargs) -> 'RedisStorageDAO':
        self.redis.delete(self.key)
        return self
