from shortclient.dao.base.history_storage_base_dao import HistoryStorageBaseDAO


__all__ = [
    'HistoryStorageBaseDAO',
]
