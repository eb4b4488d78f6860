"""Utility functions for client configuration management.

The client needs one externally supplied base URL (used both to reach the
shortening service and to render display links) plus a few local settings:
where the history cache lives and how often age labels are refreshed.

Settings are resolved from, highest precedence first:

    1. explicit overrides (CLI flags)
    2. environment variables (see `shortclient.constants.ENV`)
    3. a per-environment YAML file
    4. defaults (see `shortclient.constants.Defaults`)

The YAML file defaults to `~/.config/shortclient/<APP_ENV>.yml` (override with
`SHORTCLIENT_CONFIG_FILE`) and follows this structure:

    api_url: https://sho.rt
    storage: redis
    data_dir: ~/.local/share/shortclient
    refresh_interval: 60
    request_timeout: 10
    redis:
      host: localhost
      port: 6379
      db: 0

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return the Redis key prefix, or None if `APP_NAME` is not set.

    config_file_path() -> Path
        Return the YAML file consulted by `load_config()`.

    read_config_file(path: Path) -> dict
        Parse a YAML config file. A missing file is an empty config.

    load_config(**overrides) -> ClientConfig
        Resolve the full client configuration.

    require_api_url(config: ClientConfig) -> str
        Return the configured base URL or raise MissingEnvironmentVariableError.

Example:
    >>> from shortclient.utils.config import load_config
    >>> os.environ['SHORTCLIENT_API_URL'] = 'https://sho.rt'
    >>> config = load_config(storage='memory')
    >>> config.api_url, config.storage
    ('https://sho.rt', 'memory')
"""

import os
import logging
from dataclasses import dataclass, field
from pathlib import Path
from collections.abc import Callable
from typing import Any

import yaml

from shortclient.constants import ENV, Defaults, STORAGE_BACKENDS
from shortclient.dao.redis.redis_storage_dao import is_local_host
from shortclient.exceptions import BadConfigurationError, MissingEnvironmentVariableError
from shortclient.types import YamlConfig
from shortclient.validation import is_valid_url


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RedisSettings:
    host: str = Defaults.REDIS_HOST
    port: int = Defaults.REDIS_PORT
    db: int = Defaults.REDIS_DB
    username: str | None = None
    password: str | None = field(default=None, repr=False)

    def as_dao_kwargs(self) -> dict[str, Any]:
        """Return the settings as RedisStorageDAO keyword arguments."""
        return dict(vars(self))


@dataclass(frozen=True)
class ClientConfig:
    """Resolved client configuration.

    Attributes:
        api_url (str | None):
            Base URL of the shortening service, also used for display links.
        storage (str):
            History storage backend: 'file', 'redis' or 'memory'.
        data_dir (Path):
            Directory of the file storage backend.
        refresh_interval (float):
            Seconds between age label refreshes in `watch` mode.
        request_timeout (float):
            Seconds before a shorten request is abandoned.
        redis (RedisSettings):
            Connection settings of the redis storage backend.
    """

    api_url: str | None = None
    storage: str = Defaults.STORAGE_BACKEND
    data_dir: Path = Path(Defaults.DATA_DIR).expanduser()
    refresh_interval: float = Defaults.REFRESH_INTERVAL_SECONDS
    request_timeout: float = Defaults.REQUEST_TIMEOUT_SECONDS
    redis: RedisSettings = field(default_factory=RedisSettings)


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Returns:
        str:
            Value of `APP_ENV` environment variable, `'local'` by default.

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'

    Returns:
        str:
            Value of `APP_NAME` environment variable.
            None if variable is not set.
    """
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return the key prefix for Redis-backed storage

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'shortclient'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'shortclient:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def config_file_path() -> Path:
    """Return the YAML config file path

    Returns:
        Path:
            `SHORTCLIENT_CONFIG_FILE` if set, `~/.config/shortclient/<APP_ENV>.yml` otherwise.
    """
    explicit = os.environ.get(ENV.Client.CONFIG_FILE)
    if explicit:
        return Path(explicit).expanduser()
    return Path(Defaults.CONFIG_DIR).expanduser() / f'{app_env()}.yml'


def read_config_file(path: Path) -> YamlConfig:
    """Parse a YAML config file

    Args:
        path (Path):
            Location of the YAML file.

    Returns:
        dict: Parsed mapping. Empty if the file doesn't exist or is empty.

    Raises:
        BadConfigurationError:
            If the file can't be read, isn't valid YAML or isn't a mapping.
    """
    if not path.exists():
        logger.debug('No config file found.', extra={'configFile': str(path)})
        return {}

    try:
        with path.open(encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise BadConfigurationError(f"Can't read config file {path}.") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise BadConfigurationError(f'Config file {path} must contain a mapping (given type: {type(data).__name__}).')

    logger.debug('Loaded config file.', extra={'configFile': str(path)})
    return data


def _resolve(name: str, override: Any, env_var: str, file_value: Any, default: Any, cast: Callable[[Any], Any]) -> Any:
    for value in (override, os.environ.get(env_var) or None, file_value):
        if value is None:
            continue
        try:
            return cast(value)
        except (TypeError, ValueError) as e:
            raise BadConfigurationError(f'Invalid value for {name!r}: {value!r}.') from e
    return default


def _positive(cast: Callable[[Any], float]) -> Callable[[Any], float]:
    def wrapper(value: Any) -> float:
        number = cast(value)
        if number <= 0:
            raise ValueError(f'{number} is not positive')
        return number

    return wrapper


def _storage_backend(value: Any) -> str:
    backend = str(value).lower()
    if backend not in STORAGE_BACKENDS:
        raise ValueError(f'unknown backend {backend}')
    return backend


def _local_host(value: Any) -> str:
    host = str(value).strip()
    if not is_local_host(host):
        raise ValueError(f'{host} is not a loopback host')
    return host


def _api_url(value: Any) -> str:
    url = str(value).strip().rstrip('/')
    if not is_valid_url(url):
        raise ValueError(f'{url} is not an absolute URL')
    return url


def load_config(
    api_url: str | None = None,
    storage: str | None = None,
    data_dir: str | os.PathLike | None = None,
    refresh_interval: float | None = None,
) -> ClientConfig:
    """Resolve the client configuration

    Args:
        api_url, storage, data_dir, refresh_interval:
            Explicit overrides (typically CLI flags). None means "not given".

    Returns:
        ClientConfig: The resolved configuration.

    Raises:
        BadConfigurationError:
            If any source holds an invalid value or the YAML file is broken.
    """
    file_config = read_config_file(config_file_path())
    file_redis = file_config.get('redis') or {}
    if not isinstance(file_redis, dict):
        raise BadConfigurationError("Config key 'redis' must be a mapping.")

    # fmt: off
    redis_settings = RedisSettings(
        host=_resolve('redis.host', None, ENV.Redis.HOST, file_redis.get('host'), Defaults.REDIS_HOST, _local_host),
        port=_resolve('redis.port', None, ENV.Redis.PORT, file_redis.get('port'), Defaults.REDIS_PORT, int),
        db=_resolve('redis.db', None, ENV.Redis.DB, file_redis.get('db'), Defaults.REDIS_DB, int),
        username=_resolve('redis.username', None, ENV.Redis.USERNAME, file_redis.get('username'), None, str),
        password=_resolve('redis.password', None, ENV.Redis.PASSWORD, file_redis.get('password'), None, str),
    )

    config = ClientConfig(
        api_url=_resolve('api_url', api_url, ENV.Client.API_URL, file_config.get('api_url'), None, _api_url),
        storage=_resolve('storage', storage, ENV.Client.STORAGE, file_config.get('storage'), Defaults.STORAGE_BACKEND, _storage_backend),
        data_dir=_resolve('data_dir', data_dir, ENV.Client.DATA_DIR, file_config.get('data_dir'), Path(Defaults.DATA_DIR), Path).expanduser(),
        refresh_interval=_resolve('refresh_interval', refresh_interval, ENV.Client.REFRESH_INTERVAL, file_config.get('refresh_interval'),
                                  Defaults.REFRESH_INTERVAL_SECONDS, _positive(float)),
        request_timeout=_resolve('request_timeout', None, ENV.Client.REQUEST_TIMEOUT, file_config.get('request_timeout'),
                                 Defaults.REQUEST_TIMEOUT_SECONDS, _positive(float)),
        redis=redis_settings,
    )
    # fmt: on

    logger.debug('Resolved client configuration.', extra={'storage': config.storage, 'apiUrl': config.api_url})
    return config


def require_api_url(config: ClientConfig) -> str:
    """Return the configured base URL

    Raises:
        MissingEnvironmentVariableError:
            If no base URL was configured through any source.
    """
    if not config.api_url:
        raise MissingEnvironmentVariableError(
            f"Missing shortening service URL: set '{ENV.Client.API_URL}', pass --api-url or add 'api_url' to {config_file_path()}."
        )
    return config.api_url
