from datetime import datetime, timedelta, timezone

import pytest

from spinwin.application.time_utils import (
    resolve_timezone, same_time_next_day, format_remaining, format_local_time, to_epoch_ms, from_epoch_ms,
)


def test_same_time_next_day_utc():
    t = datetime(2026, 3, 1, 13, 5, tzinfo=timezone.utc)
    assert same_time_next_day(t, timezone.utc) == datetime(2026, 3, 2, 13, 5, tzinfo=timezone.utc)


def test_same_time_next_day_rolls_month_and_year():
    t = datetime(2026, 12, 31, 23, 59, 30, tzinfo=timezone.utc)
    assert same_time_next_day(t, timezone.utc) == datetime(2027, 1, 1, 23, 59, 30, tzinfo=timezone.utc)


def test_same_time_next_day_fixed_offset_keeps_local_wall_clock():
    ist = resolve_timezone("+05:30")
    # 20:00 UTC is 01:30 IST on the next local day
    t = datetime(2026, 3, 1, 20, 0, tzinfo=timezone.utc)
    nxt = same_time_next_day(t, ist)
    assert nxt.astimezone(ist).hour == 1
    assert nxt.astimezone(ist).minute == 30
    assert nxt - t == timedelta(days=1)


def test_same_time_next_day_across_dst_is_calendar_day():
    ny = resolve_timezone("America/New_York")
    # the night before the March 2026 spring-forward
    t = datetime(2026, 3, 7, 17, 0, tzinfo=timezone.utc)  # 12:00 EST
    nxt = same_time_next_day(t, ny)
    assert nxt.astimezone(ny).hour == 12
    assert nxt - t == timedelta(hours=23)


@pytest.mark.parametrize("name,offset", [
    ("UTC", timedelta(0)),
    ("+05:30", timedelta(hours=5, minutes=30)),
    ("-0300", timedelta(hours=-3)),
    ("UTC+01:00", timedelta(hours=1)),
])
def test_resolve_timezone_offsets(name, offset):
    tz = resolve_timezone(name)
    assert tz.utcoffset(datetime(2026, 1, 1)) == offset


@pytest.mark.parametrize("ms,expected", [
    (0, "0s"),
    (59_999, "59s"),
    (60_000, "1m 0s"),
    (3_599_000, "59m 59s"),
    (3_600_000, "1h 0m 0s"),
    (86_399_000, "23h 59m 59s"),
])
def test_format_remaining_drops_leading_zero_units(ms, expected):
    assert format_remaining(ms).display == expected


def test_format_remaining_parts():
    parts = format_remaining(3_723_500)
    assert (parts.hours, parts.minutes, parts.seconds, parts.total_seconds) == (1, 2, 3, 3723)


def test_epoch_ms_conversion():
    t = datetime(2026, 3, 1, 13, 5, 0, 250000, tzinfo=timezone.utc)
    assert from_epoch_ms(to_epoch_ms(t)) == t
    assert from_epoch_ms("1772370300000") == datetime(2026, 3, 1, 13, 5, tzinfo=timezone.utc)


def test_format_local_time_uses_zone():
    t = datetime(2026, 3, 1, 13, 5, tzinfo=timezone.utc)
    assert format_local_time(t, resolve_timezone("+05:30")) == "01/03/2026, 06:35:00 PM"
