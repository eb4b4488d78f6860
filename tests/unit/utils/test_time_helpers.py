from datetime import datetime, UTC

from freezegun import freeze_time

from shortclient.utils.helpers import now_ms, from_ms


@freeze_time('2026-10-18T12:00:00Z')
def test_now_ms():
    assert now_ms() == 1_792_324_800_000


@freeze_time('2026-10-18T12:00:00.250Z')
def test_now_ms_keeps_milliseconds():
    assert now_ms() == 1_792_324_800_250


def test_from_ms():
    assert from_ms(0) == datetime(1970, 1, 1, tzinfo=UTC)
    assert from_ms(1_792_324_800_000) == datetime(2026, 10, 18, 12, tzinfo=UTC)


@freeze_time('2026-10-18T12:00:00Z')
def test_round_trip():
    assert from_ms(now_ms()) == datetime.now(UTC)
