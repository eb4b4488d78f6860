from shortclient.dao.base import HistoryStorageBaseDAO
from shortclient.dao.file import FileStorageDAO
from shortclient.dao.memory import MemoryStorageDAO
from shortclient.dao.redis import RedisStorageDAO


__all__ = [
    'HistoryStorageBaseDAO',
    'FileStorageDAO',
    'MemoryStorageDAO',
    'RedisStorageDAO',
]
