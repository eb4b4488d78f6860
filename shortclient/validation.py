"""Syntactic URL validation

Functions:
    is_valid_url(candidate) -> bool
        True if the candidate is an absolute URL with a scheme and a host.
    validate_url(candidate) -> str
        Same check, raising ValidationError on rejection.

No network access is involved: reachability is the shortening service's concern.

Example:
    >>> is_valid_url('https://example.com/path?q=1')
    True
    >>> is_valid_url('not-a-url')
    False
    >>> is_valid_url('https://')
    False
"""

import re
from typing import Any
from urllib.parse import urlsplit

from shortclient.constants import INVALID_URL_MESSAGE
from shortclient.exceptions import ValidationError


# Whitespace and ASCII control characters are never valid inside a URL
_FORBIDDEN = re.compile(r'[\s\x00-\x1f\x7f]')
_SCHEME = re.compile(r'^[a-zA-Z][a-zA-Z0-9+.\-]*$')


def is_valid_url(candidate: Any) -> bool:
    """Decide whether `candidate` is a syntactically valid absolute URL.

    Args:
        candidate (Any):
            Value typed into the input field. Non-strings are rejected.

    Returns:
        bool: True only for an absolute URL carrying both a scheme and a host.
    """
    if not isinstance(candidate, str) or not candidate or _FORBIDDEN.search(candidate):
        return False

    try:
        parts = urlsplit(candidate)
        # Accessing .port validates it (raises ValueError when out of range or not numeric)
        _ = parts.port
    except ValueError:
        return False

    if not parts.scheme or not _SCHEME.match(parts.scheme):
        return False
    return bool(parts.netloc) and bool(parts.hostname)


def validate_url(candidate: Any) -> str:
    """Return `candidate` unchanged if it is a valid absolute URL.

    Raises:
        ValidationError:
            If `candidate` is not a syntactically valid absolute URL.
    """
    if not is_valid_url(candidate):
        raise ValidationError(INVALID_URL_MESSAGE)
    return candidate
