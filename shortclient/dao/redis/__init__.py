from shortclient.dao.redis.redis_storage_dao import RedisStorageDAO


__all__ = [
    'RedisStorageDAO',
]
