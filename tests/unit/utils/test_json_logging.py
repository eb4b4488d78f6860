import sys
import json
import logging

import pytest

from shortclient.utils.logging import JsonFormatter, initialize_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    level, handlers = root.level, root.handlers[:]
    yield root
    root.setLevel(level)
    root.handlers[:] = handlers


def make_record(msg='Loaded history.', exc_info=None, **extra) -> logging.LogRecord:
    record = logging.LogRecord('shortclient.history.store', logging.INFO, __file__, 1, msg, None, exc_info)
    record.__dict__.update(extra)
    return record


def test_format_base_fields():
    record = make_record()
    record.created = 1_792_324_800.0  # 2026-10-18T12:00:00Z

    log = json.loads(JsonFormatter().format(record))

    assert log == {
        'timestamp': '2026-10-18T12:00:00.000Z',
        'level': 'INFO',
        'logger': 'shortclient.history.store',
        'message': 'Loaded history.',
    }


def test_format_includes_extras():
    log = json.loads(JsonFormatter().format(make_record(count=3, storage='<MemoryStorageDAO>')))

    assert log['count'] == 3
    assert log['storage'] == '<MemoryStorageDAO>'


def test_extras_never_override_base_fields():
    log = json.loads(JsonFormatter().format(make_record(level='bogus')))

    assert log['level'] == 'INFO'


def test_non_serializable_extras_are_stringified(tmp_path):
    log = json.loads(JsonFormatter().format(make_record(path=tmp_path)))

    assert log['path'] == str(tmp_path)


def test_format_exception():
    try:
        raise RuntimeError('boom')
    except RuntimeError:
        record = make_record(exc_info=sys.exc_info())

    log = json.loads(JsonFormatter().format(record))

    assert 'RuntimeError: boom' in log['exception']


@pytest.mark.parametrize(
    'level, env, expected',
    [
        (None, None, logging.WARNING),
        (None, 'info', logging.INFO),
        ('DEBUG', 'error', logging.DEBUG),
    ],
)
def test_initialize_logging_level(monkeypatch, restore_root_logger, level, env, expected):
    if env is None:
        monkeypatch.delenv('LOG_LEVEL', raising=False)
    else:
        monkeypatch.setenv('LOG_LEVEL', env)

    initialize_logging(level)

    assert restore_root_logger.level == expected
    assert isinstance(restore_root_logger.handlers[-1].formatter, JsonFormatter)
