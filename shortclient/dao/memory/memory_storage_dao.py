"""Process-local history storage.

Used when nothing may touch the disk (e.g. `--storage memory`) and as the
fallback when the configured backend is unreachable at startup. The slot
disappears with the process.
"""

from beartype import beartype

from shortclient.constants import History
from shortclient.dao.base import HistoryStorageBaseDAO


class MemoryStorageDAO(HistoryStorageBaseDAO):
    def __init__(self, slot: str = History.SLOT, payload: str | None = None):
        super().__init__(slot=slot)
        self.payload = payload

    def read(self, **kwargs) -> str | None:
        return self.payload

    @beartype
    def write(self, payload: str, **kwargs) -> 'MemoryStorageDAO':
        self.payload = payload
        return self

    def delete(self, **kwargs) -> 'MemoryStorageDAO':
        self.payload = None
        return self
