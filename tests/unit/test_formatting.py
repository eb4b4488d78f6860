"""Unit tests for presentation helpers

Test coverage includes:

1. format_age() bucket boundaries (minutes, hours, days) and pluralization
2. format_age() treats zero and negative elapsed time as '0 minutes ago'
3. display_url() joins base URL and short URL
"""

import pytest

from shortclient.formatting import display_url, format_age


T = 1_792_324_800_000
SECOND = 1_000


# -------------------------------
# 1. Buckets
# -------------------------------


@pytest.mark.parametrize(
    'elapsed_seconds, expected',
    [
        (0, '0 minutes ago'),
        (59, '0 minutes ago'),
        (60, '1 minute ago'),
        (90, '1 minute ago'),
        (120, '2 minutes ago'),
        (59 * 60 + 59, '59 minutes ago'),
        (3_600, '1 hour ago'),
        (3_700, '1 hour ago'),
        (7_200, '2 hours ago'),
        (23 * 3_600 + 3_599, '23 hours ago'),
        (86_400, '1 day ago'),
        (90_000, '1 day ago'),
        (172_800, '2 days ago'),
        (6 * 86_400 + 86_399, '6 days ago'),
        (30 * 86_400, '30 days ago'),
    ],
)
def test_format_age_buckets(elapsed_seconds, expected):
    assert format_age(T - elapsed_seconds * SECOND, T) == expected


def test_format_age_same_instant():
    assert format_age(T, T) == '0 minutes ago'


# -------------------------------
# 2. Clock skew
# -------------------------------


@pytest.mark.parametrize('ahead_ms', [1, SECOND, 3_600 * SECOND, 3 * 86_400 * SECOND])
def test_format_age_future_timestamp(ahead_ms):
    """Ensure timestamps in the future read as '0 minutes ago'."""
    assert format_age(T + ahead_ms, T) == '0 minutes ago'


# -------------------------------
# 3. display_url()
# -------------------------------


@pytest.mark.parametrize(
    'base_url, expected',
    [
        ('https://sho.rt', 'https://sho.rt/abc123'),
        ('https://sho.rt/', 'https://sho.rt/abc123'),
        ('https://api.example.com/Prod', 'https://api.example.com/Prod/abc123'),
    ],
)
def test_display_url(base_url, expected):
    assert display_url(base_url, 'abc123') == expected
