from dataclasses import replace
from datetime import date, datetime, timezone, tzinfo

from salon_booking.application.interfaces.booking_repo import (
    BookingRepo,
    StaffSlotConflictError,
    day_window,
)
from salon_booking.domain.entities.booking import Booking
from salon_booking.domain.errors import BookingAlreadyExistsError, OptimisticLockError
from salon_booking.domain.value_objects.time_range import intervals_overlap


def _touches(booking: Booking, start: datetime, end: datetime) -> bool:
    if booking.duration_minutes == 0:
        return start <= booking.scheduled_at < end
    return intervals_overlap(booking.scheduled_at, booking.end_time, start, end)


class InMemoryBookingRepo(BookingRepo):
    def __init__(self) -> None:
        self.bookings: dict[str, Booking] = {}

    async def add(self, booking: Booking) -> Booking:
        if booking.id in self.bookings:
            raise BookingAlreadyExistsError(booking.id)
        self._check_staff_claims(booking)
        self.bookings[booking.id] = booking
        return booking

    async def save(self, booking: Booking) -> Booking:
        stored = self.bookings.get(booking.id)
        if stored is not None and stored.lock_version != booking.lock_version:
            raise OptimisticLockError(booking.id, booking.lock_version, stored.lock_version)

        self._check_staff_claims(booking)

        persisted = booking if stored is None else replace(booking, lock_version=booking.lock_version + 1)
        self.bookings[booking.id] = persisted
        return persisted

    def _check_staff_claims(self, booking: Booking) -> None:
        # Misma comprobación que la restricción única de staff_time_claims
        for staff_id, claimed in booking.staff_intervals():
            for other in self.bookings.values():
                if other.id == booking.id:
                    continue
                for other_staff_id, other_range in other.staff_intervals():
                    if other_staff_id == staff_id and claimed.overlaps_with(other_range):
                        raise StaffSlotConflictError(staff_id, other.id)

    async def find_by_id(self, booking_id: str) -> Booking | None:
        return self.bookings.get(booking_id)

    async def find_by_branch_and_date(
        self, branch_id: str, day: date, tz: tzinfo = timezone.utc
    ) -> list[Booking]:
        start, end = day_window(day, tz)
        found = [
            b for b in self.bookings.values() if b.branch_id == branch_id and _touches(b, start, end)
        ]
        return sorted(found, key=lambda b: (b.scheduled_at, b.id))

    async def find_by_customer_and_date_range(
        self, customer_id: str, start: datetime, end: datetime
    ) -> list[Booking]:
        found = [
            b for b in self.bookings.values() if b.customer_id == customer_id and start <= b.scheduled_at < end
        ]
        return sorted(found, key=lambda b: (b.scheduled_at, b.id))

    async def find_by_staff_and_date(
        self, staff_id: str, day: date, tz: tzinfo = timezone.utc
    ) -> list[Booking]:
        start, end = day_window(day, tz)
        found = [
            b
            for b in self.bookings.values()
            if any(
                item.staff_id == staff_id and intervals_overlap(item.start_time, item.end_time, start, end)
                for item in b.services
            )
        ]
        return sorted(found, key=lambda b: (b.scheduled_at, b.id))
