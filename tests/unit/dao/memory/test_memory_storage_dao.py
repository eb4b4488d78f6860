"""Unit tests for the MemoryStorageDAO"""

import pytest
from beartype.roar import BeartypeCallHintParamViolation

from shortclient.dao import MemoryStorageDAO


def test_starts_empty():
    assert MemoryStorageDAO().read() is None


def test_initial_payload():
    assert MemoryStorageDAO(payload='[]').read() == '[]'


def test_write_then_delete():
    dao = MemoryStorageDAO()

    assert dao.write('[]') is dao
    assert dao.read() == '[]'
    assert dao.delete() is dao
    assert dao.read() is None


def test_write_invalid_type():
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        MemoryStorageDAO().write(42)


def test_repr():
    assert repr(MemoryStorageDAO()) == '<MemoryStorageDAO>'
