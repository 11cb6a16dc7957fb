"""Tests de TimeRange, OperatingHours y objetos de contacto."""

from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from salon_booking.domain.errors import (
    InvalidEmailError,
    InvalidOperatingHoursError,
    InvalidPhoneError,
    InvalidTimeRangeError,
)
from salon_booking.domain.value_objects import (
    DayHours,
    Email,
    OperatingHours,
    PhoneNumber,
    TimeRange,
    intervals_overlap,
    parse_hhmm,
)

UTC = timezone.utc


def t(hour: int, minute: int = 0) -> datetime:
    return datetime(2025, 6, 3, hour, minute, tzinfo=UTC)


class TestIntervalOverlap:
    def test_touching_intervals_do_not_overlap(self):
        """[10:00,11:00) y [11:00,12:00) no se solapan."""
        assert not intervals_overlap(t(10), t(11), t(11), t(12))
        assert not intervals_overlap(t(11), t(12), t(10), t(11))

    def test_one_minute_overlap(self):
        """[10:00,11:00) y [10:59,11:30) sí se solapan."""
        assert intervals_overlap(t(10), t(11), t(10, 59), t(11, 30))

    def test_containment_overlaps(self):
        assert intervals_overlap(t(9), t(12), t(10), t(11))


class TestTimeRange:
    def test_start_must_precede_end(self):
        with pytest.raises(InvalidTimeRangeError):
            TimeRange(t(10), t(10))

    def test_duration_and_factory(self):
        period = TimeRange.from_duration(t(10), 90)
        assert period.end == t(11, 30)
        assert period.duration_minutes == 90

    def test_contains(self):
        shift = TimeRange(t(9), t(18))
        assert shift.contains(TimeRange(t(17), t(18)))
        assert not shift.contains(TimeRange(t(17, 30), t(18, 30)))
        assert shift.contains_instant(t(9))
        assert not shift.contains_instant(t(18))

    def test_shift(self):
        assert TimeRange(t(9), t(10)).shift(timedelta(hours=2)) == TimeRange(t(11), t(12))


class TestOperatingHours:
    def test_parse_hhmm(self):
        assert parse_hhmm("09:30") == time(9, 30)
        with pytest.raises(InvalidOperatingHoursError):
            parse_hhmm("9h")

    def test_open_must_precede_close(self):
        with pytest.raises(InvalidOperatingHoursError):
            DayHours(open=time(18), close=time(9))

    def test_admits_is_half_open_and_skips_breaks(self):
        hours = DayHours.from_strings("09:00", "18:00", [("13:00", "14:00")])
        assert hours.admits(time(9, 0))
        assert hours.admits(time(17, 59))
        assert not hours.admits(time(18, 0))
        assert not hours.admits(time(13, 30))
        assert hours.admits(time(14, 0))

    def test_closed_day(self):
        assert not DayHours.closed_day().admits(time(12))
        assert DayHours.closed_day().interval_on(date(2025, 6, 3), UTC) is None

    def test_weekday_weekend_split(self):
        hours = OperatingHours.weekday_weekend(
            weekday=DayHours.from_strings("09:00", "18:00"),
            weekend=DayHours.from_strings("10:00", "16:00"),
        )
        assert hours.for_date(date(2025, 6, 3)).close == time(18)  # martes
        assert hours.for_date(date(2025, 6, 7)).close == time(16)  # sábado

    def test_from_mapping_missing_day_is_closed(self):
        hours = OperatingHours.from_mapping({"Monday": DayHours()})
        assert not hours.for_weekday(0).closed
        assert hours.for_weekday(6).closed

    def test_from_mapping_unknown_day(self):
        with pytest.raises(InvalidOperatingHoursError):
            OperatingHours.from_mapping({"funday": DayHours()})

    def test_interval_on_uses_timezone(self):
        tz = ZoneInfo("America/Mexico_City")
        interval = DayHours().interval_on(date(2025, 6, 3), tz)
        assert interval.start.astimezone(UTC).hour == 15


class TestContact:
    def test_email_lower_cased(self):
        assert Email("Ana@Salon.COM").value == "ana@salon.com"

    def test_invalid_email(self):
        with pytest.raises(InvalidEmailError) as exc:
            Email("no-at-sign")
        assert exc.value.code == "INVALID_EMAIL"

    def test_phone_strips_separators(self):
        assert PhoneNumber("(555) 123-4567").value == "5551234567"
        assert PhoneNumber("+15551234567").value == "+15551234567"

    def test_invalid_phone(self):
        with pytest.raises(InvalidPhoneError):
            PhoneNumber("12345")
