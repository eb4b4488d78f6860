"""Exceptions related to history storage Data Access Object (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    DataStoreError:
        Raised when the data store cannot be read or written (connection issues,
        permissions, full disk, etc.).

    CorruptHistoryError:
        Raised when the stored history slot cannot be decoded.

All DAO exceptions are PersistenceFailures: the history cache is a convenience,
so HistoryStore recovers from them instead of surfacing them to the user.

Example:
    >>> from shortclient.dao.exceptions import CorruptHistoryError
    >>> raise CorruptHistoryError("History slot 'shortenedUrls' is not a JSON list.")
    Traceback (most recent call last):
        ...
    shortclient.dao.exceptions.CorruptHistoryError: History slot 'shortenedUrls' is not a JSON list.
"""

from shortclient.exceptions import PersistenceFailure


class DAOError(PersistenceFailure):
    """Generic base class for DAO-related exceptions."""

    error_code = 'storage:dao_error'


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, permissions, full disk, etc.
    """

    error_code = 'storage:data_store_error'


class CorruptHistoryError(DAOError):
    """Exception raised when a stored history slot cannot be decoded."""

    error_code = 'storage:corrupt_history_error'
