"""Data Access Object (DAO) storing the history cache in a local JSON file

The history slot maps to one file:

    <data_dir>/<slot>.json

Writes go to a temporary file in the same directory which then replaces the
slot file, so a crash mid-write never leaves a truncated history behind.

Classes:
    FileStorageDAO:
        DAO for reading and writing the history slot on the local filesystem.

Example:
    >>> from shortclient.dao.file import FileStorageDAO

    >>> dao = FileStorageDAO(data_dir='~/.local/share/shortclient')
    >>> dao.path
    PosixPath('/home/me/.local/share/shortclient/shortenedUrls.json')
    >>> dao.write('[]').read()
    '[]'
"""

import os
import tempfile
from pathlib import Path

from beartype import beartype

from shortclient.constants import History
from shortclient.dao.base import HistoryStorageBaseDAO
from shortclient.dao.exceptions import CorruptHistoryError
from shortclient.dao.file.helpers import handle_os_error


class FileStorageDAO(HistoryStorageBaseDAO):
    """File-based Data Access Object (DAO) for the history slot

    Attributes:
        data_dir (Path):
            Directory holding the slot file. Created on first write.
        path (Path):
            Full path of the slot file.

    Methods:
        read(**kwargs) -> str | None:
            Return the file contents, None if the file doesn't exist.
        write(payload: str, **kwargs) -> FileStorageDAO:
            Atomically replace the file contents.
        delete(**kwargs) -> FileStorageDAO:
            Remove the file if present.

        All methods raise DataStoreError on filesystem errors.
        read() raises CorruptHistoryError when the file is not valid UTF-8.
    """

    def __init__(self, data_dir: str | os.PathLike, slot: str = History.SLOT):
        super().__init__(slot=slot)
        self.data_dir = Path(data_dir).expanduser()
        self.path = self.data_dir / f'{slot}.json'

    @handle_os_error
    def read(self, **kwargs) -> str | None:
        if not self.path.exists():
            return None
        try:
            return self.path.read_text(encoding='utf-8')
        except UnicodeDecodeError as e:
            raise CorruptHistoryError(f'History file at {self.path} is not valid UTF-8.') from e

    @handle_os_error
    @beartype
    def write(self, payload: str, **kwargs) -> 'FileStorageDAO':
        self.data_dir.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(prefix=f'.{self.slot}.', suffix='.tmp', dir=self.data_dir)
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as tmp:
                tmp.write(payload)
            os.replace(tmp_name, self.path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        return self

    @handle_os_error
    def delete(self, **kwargs) -> 'FileStorageDAO':
        self.path.unlink(missing_ok=True)
        return self
