from shortclient.utils.config import (
    ClientConfig,
    RedisSettings,
    app_env,
    app_name,
    app_prefix,
    load_config,
    require_api_url,
)
from shortclient.utils.helpers import now_ms, from_ms
from shortclient.utils.logging import initialize_logging


__all__ = [
    'ClientConfig',
    'RedisSettings',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'require_api_url',
    'now_ms',
    'from_ms',
    'initialize_logging',
]
