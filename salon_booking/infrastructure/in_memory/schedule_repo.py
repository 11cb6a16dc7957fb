from datetime import date
from zoneinfo import ZoneInfo

from salon_booking.application.interfaces.booking_repo import day_window
from salon_booking.application.interfaces.schedule_repo import ScheduleRepo
from salon_booking.domain.value_objects.operating_hours import OperatingHours
from salon_booking.domain.value_objects.time_range import TimeRange


class InMemoryScheduleRepo(ScheduleRepo):
    """
    Turnos semanales por profesional, con excepciones por fecha.

    Una excepción con None marca el día como libre.
    """

    def __init__(self) -> None:
        self.weekly: dict[str, tuple[OperatingHours, ZoneInfo]] = {}
        self.overrides: dict[tuple[str, date], TimeRange | None] = {}
        self.time_off: dict[str, list[TimeRange]] = {}

    def set_weekly_shift(self, staff_id: str, hours: OperatingHours, timezone: str = "UTC") -> None:
        self.weekly[staff_id] = (hours, ZoneInfo(timezone))

    def set_working_interval(self, staff_id: str, day: date, interval: TimeRange | None) -> None:
        self.overrides[(staff_id, day)] = interval

    def add_time_off(self, staff_id: str, period: TimeRange) -> None:
        self.time_off.setdefault(staff_id, []).append(period)

    async def get_working_interval(self, staff_id: str, day: date) -> TimeRange | None:
        if (staff_id, day) in self.overrides:
            return self.overrides[(staff_id, day)]
        if staff_id not in self.weekly:
            return None
        hours, tz = self.weekly[staff_id]
        return hours.for_date(day).interval_on(day, tz)

    async def get_time_off(self, staff_id: str, day: date) -> list[TimeRange]:
        tz = self.weekly[staff_id][1] if staff_id in self.weekly else ZoneInfo("UTC")
        start, end = day_window(day, tz)
        window = TimeRange(start=start, end=end)
        return [period for period in self.time_off.get(staff_id, []) if period.overlaps_with(window)]
