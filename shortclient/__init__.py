from shortclient.client import ShortenClient
from shortclient.controller import ControllerState, ShortenerController
from shortclient.formatting import display_url, format_age
from shortclient.history import HistoryStore
from shortclient.models import Failed, HistoryCollection, Notification, NotificationLevel, Shortened, ShortenedRecord
from shortclient.ticker import AgeRefreshTicker
from shortclient.validation import is_valid_url, validate_url


__all__ = [
    'ShortenClient',
    'ControllerState',
    'ShortenerController',
    'display_url',
    'format_age',
    'HistoryStore',
    'Failed',
    'HistoryCollection',
    'Notification',
    'NotificationLevel',
    'Shortened',
    'ShortenedRecord',
    'AgeRefreshTicker',
    'is_valid_url',
    'validate_url',
]
