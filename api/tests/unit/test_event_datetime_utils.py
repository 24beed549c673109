from datetime import datetime, timedelta, timezone

from eventsync.shared.utils.datetime_utils import format_time_of_day, parse_timestamp, to_iso_z


def test_parse_timestamp_compact_offset():
    dt = parse_timestamp("2020-09-30T19:00:00-0400")
    assert dt == datetime(2020, 9, 30, 19, 0, tzinfo=timezone(timedelta(hours=-4)))


def test_parse_timestamp_z_and_naive():
    assert parse_timestamp("2025-01-15T10:30:00Z") == datetime(2025, 1, 15, 10, 30, tzinfo=timezone.utc)
    assert parse_timestamp("2025-01-15T10:30:00") == datetime(2025, 1, 15, 10, 30, tzinfo=timezone.utc)


def test_parse_timestamp_invalid_values():
    assert parse_timestamp(None) is None
    assert parse_timestamp("") is None
    assert parse_timestamp("mañana") is None
    assert parse_timestamp("2020-13-45T99:00:00") is None
    assert parse_timestamp(12345) is None


def test_to_iso_z_matches_millisecond_format():
    dt = datetime(2020, 9, 30, 19, 0, 0, 123456, tzinfo=timezone(timedelta(hours=-4)))
    assert to_iso_z(dt) == "2020-09-30T23:00:00.123Z"


def test_format_time_of_day_12h():
    assert format_time_of_day(datetime(2020, 1, 1, 0, 5)) == "12:05 AM"
    assert format_time_of_day(datetime(2020, 1, 1, 9, 0)) == "9:00 AM"
    assert format_time_of_day(datetime(2020, 1, 1, 12, 30)) == "12:30 PM"
    assert format_time_of_day(datetime(2020, 1, 1, 19, 0)) == "7:00 PM"
