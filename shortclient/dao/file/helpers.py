import functools
from typing import Any, TypeVar
from collections.abc import Callable

from shortclient.dao.exceptions import DataStoreError


__all__ = []


F = TypeVar('F', bound=Callable[..., Any])


def handle_os_error(method: F) -> F:
    """Wrap file-interacting DAO methods to handle filesystem errors

    Args:
        method (Callable[..., Any]):
            DAO method performing file operations which may raise OSError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on filesystem issues
            (missing permissions, full disk, read-only mounts, etc.).
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except OSError as e:
            raise DataStoreError(f"Can't access history file at {self.path}.") from e

    return wrapper
