from enum import StrEnum


class History:
    """History cache limits."""

    CAPACITY = 5  # Most recent conversions kept locally
    RETENTION_MS = 604_800_000  # 7 days * 24 hours * 60 minutes * 60 seconds * 1000 ms
    SLOT = 'shortenedUrls'  # Name of the durable storage slot


class Duration:
    """Durations in milliseconds used by the age formatter."""

    MINUTE_MS = 60_000
    HOUR_MS = 3_600_000
    DAY_MS = 86_400_000


class Defaults:
    """Default runtime settings."""

    REFRESH_INTERVAL_SECONDS = 60.0  # Age labels change at most once a minute
    REQUEST_TIMEOUT_SECONDS = 10.0
    STORAGE_BACKEND = 'file'
    CONFIG_DIR = '~/.config/shortclient'
    DATA_DIR = '~/.local/share/shortclient'
    REDIS_HOST = 'localhost'
    REDIS_PORT = 6379
    REDIS_DB = 0


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        LOG_LEVEL = 'LOG_LEVEL'

    class Client(StrEnum):
        API_URL = 'SHORTCLIENT_API_URL'
        CONFIG_FILE = 'SHORTCLIENT_CONFIG_FILE'
        DATA_DIR = 'SHORTCLIENT_DATA_DIR'
        STORAGE = 'SHORTCLIENT_STORAGE'
        REFRESH_INTERVAL = 'SHORTCLIENT_REFRESH_INTERVAL'
        REQUEST_TIMEOUT = 'SHORTCLIENT_REQUEST_TIMEOUT'

    class Redis(StrEnum):
        HOST = 'SHORTCLIENT_REDIS_HOST'
        PORT = 'SHORTCLIENT_REDIS_PORT'
        DB = 'SHORTCLIENT_REDIS_DB'
        USERNAME = 'SHORTCLIENT_REDIS_USERNAME'
        PASSWORD = 'SHORTCLIENT_REDIS_PASSWORD'  # noqa: S105


# Hosts the redis storage backend may connect to
LOCAL_REDIS_HOSTS = frozenset({'localhost', '127.0.0.1', '::1'})

# Storage backends selectable via config
STORAGE_BACKENDS = frozenset({'file', 'redis', 'memory'})

# User-facing messages
INVALID_URL_MESSAGE = 'Please enter a valid URL.'
SHORTEN_SUCCESS_MESSAGE = 'URL shortened successfully'
SHORTEN_FAILURE_MESSAGE = 'Failed to shorten URL'
TRANSPORT_FAILURE_MESSAGE = 'An error occurred'
COPY_SUCCESS_MESSAGE = 'Copied to clipboard'
COPY_FAILURE_MESSAGE = 'Failed to copy'
CLEAR_SUCCESS_MESSAGE = 'Cleared shortened URLs'
