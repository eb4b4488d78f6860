from shortclient.history.store import HistoryStore


__all__ = [
    'HistoryStore',
]
