"""JSON encoding of the history collection.

The durable slot holds a JSON list, most recent first:

    [
        {"original_url": "https://example.com", "short_url": "abc123", "timestamp": 1760745600000},
        ...
    ]

Functions:
    encode(collection) -> str
    decode(payload) -> HistoryCollection
        Raises CorruptHistoryError on anything that isn't a list of well-formed records.
"""

import json
import math
from dataclasses import asdict
from typing import Any

from shortclient.dao.exceptions import CorruptHistoryError
from shortclient.models import HistoryCollection, ShortenedRecord


def encode(collection: HistoryCollection) -> str:
    return json.dumps([asdict(record) for record in collection])


def _record(item: Any, index: int) -> ShortenedRecord:
    if not isinstance(item, dict):
        raise CorruptHistoryError(f'History entry #{index} is not an object.')

    original_url = item.get('original_url')
    short_url = item.get('short_url')
    timestamp = item.get('timestamp')

    if not isinstance(original_url, str) or not isinstance(short_url, str):
        raise CorruptHistoryError(f'History entry #{index} has non-string URLs.')
    # bool is an int subclass, but never a timestamp
    if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)) or not math.isfinite(timestamp):
        raise CorruptHistoryError(f'History entry #{index} has an invalid timestamp.')

    return ShortenedRecord(original_url=original_url, short_url=short_url, timestamp=int(timestamp))


def decode(payload: str) -> HistoryCollection:
    """Decode a stored payload into a history collection.

    Raises:
        CorruptHistoryError:
            If the payload isn't valid JSON, isn't a list, or holds a malformed record.
    """
    try:
        items = json.loads(payload)
    except (TypeError, ValueError, RecursionError) as e:
        # RecursionError: arrays nested deeper than the interpreter stack
        raise CorruptHistoryError('History payload is not valid JSON.') from e

    if not isinstance(items, list):
        raise CorruptHistoryError(f'History payload must be a JSON list (given type: {type(items).__name__}).')

    return tuple(_record(item, index) for index, item in enumerate(items))
