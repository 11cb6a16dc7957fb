"""ScheduleAvailabilityService - disponibilidad a partir de turnos y reservas."""

import logging
from datetime import date, datetime, timedelta

from salon_booking.application.dtos.booking_dto import StaffAssignment, TimeSlot
from salon_booking.application.interfaces.availability_service import AvailabilityService
from salon_booking.application.interfaces.booking_repo import BookingRepo
from salon_booking.application.interfaces.catalog_repo import BranchRepo, ServiceRepo, StaffRepo
from salon_booking.application.interfaces.clock import Clock
from salon_booking.application.interfaces.schedule_repo import ScheduleRepo
from salon_booking.application.services.slot_calculator import SlotCalculator, overlaps_any
from salon_booking.domain.entities.branch import Branch
from salon_booking.domain.entities.staff import Staff
from salon_booking.domain.value_objects.time_range import TimeRange

SPECIALIST_CONFIDENCE = 1.0
GENERALIST_CONFIDENCE = 0.6


class ScheduleAvailabilityService(AvailabilityService):
    """
    Implementación de AvailabilityService sobre ScheduleRepo y BookingRepo.

    Un profesional está libre en un intervalo si éste cabe en su turno del
    día y no se solapa con sus reservas activas ni con sus ausencias.
    """

    def __init__(
        self,
        branch_repo: BranchRepo,
        staff_repo: StaffRepo,
        service_repo: ServiceRepo,
        schedule_repo: ScheduleRepo,
        booking_repo: BookingRepo,
        slot_calculator: SlotCalculator | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._branch_repo = branch_repo
        self._staff_repo = staff_repo
        self._service_repo = service_repo
        self._schedule_repo = schedule_repo
        self._booking_repo = booking_repo
        self._slot_calculator = slot_calculator or SlotCalculator()
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    async def _busy_ranges(
        self,
        staff_id: str,
        day: date,
        branch: Branch,
        exclude_booking_id: str | None = None,
    ) -> list[TimeRange]:
        busy: list[TimeRange] = []
        bookings = await self._booking_repo.find_by_staff_and_date(staff_id, day, branch.tz)
        for booking in bookings:
            if booking.id == exclude_booking_id:
                continue
            busy.extend(rng for owner, rng in booking.staff_intervals() if owner == staff_id)
        busy.extend(await self._schedule_repo.get_time_off(staff_id, day))
        return busy

    def _booking_window(self, branch: Branch) -> tuple[datetime | None, datetime | None]:
        if self._clock is None:
            return None, None
        now = self._clock.now()
        horizon_days = branch.settings.max_advance_booking_days
        not_after = now + timedelta(days=horizon_days) if horizon_days is not None else None
        return now, not_after

    async def check_staff_availability(
        self,
        staff_id: str,
        start: datetime,
        duration_minutes: int,
        exclude_booking_id: str | None = None,
    ) -> bool:
        staff = await self._staff_repo.find_by_id(staff_id)
        if staff is None or not staff.is_active:
            return False
        branch = await self._branch_repo.find_by_id(staff.branch_id)
        if branch is None:
            return False

        candidate = TimeRange.from_duration(start, duration_minutes)
        day = branch.to_local(start).date()
        working = await self._schedule_repo.get_working_interval(staff_id, day)
        if working is None or not working.contains(candidate):
            return False

        busy = await self._busy_ranges(staff_id, day, branch, exclude_booking_id)
        return not overlaps_any(candidate, busy)

    async def _staff_slots(
        self,
        staff: Staff,
        branch: Branch,
        day: date,
        duration_minutes: int,
        exclude_booking_id: str | None,
    ) -> list[TimeRange]:
        working = await self._schedule_repo.get_working_interval(staff.id, day)
        if working is None:
            return []
        busy = await self._busy_ranges(staff.id, day, branch, exclude_booking_id)
        not_before, not_after = self._booking_window(branch)
        return self._slot_calculator.available_slots(
            branch,
            day,
            duration_minutes,
            working_interval=working,
            busy=busy,
            not_before=not_before,
            not_after=not_after,
        )

    async def get_available_time_slots(
        self,
        branch_id: str,
        day: date,
        duration_minutes: int,
        exclude_booking_id: str | None = None,
    ) -> list[TimeSlot]:
        branch = await self._branch_repo.find_by_id(branch_id)
        if branch is None or not branch.is_active:
            return []

        by_range: dict[TimeRange, list[str]] = {}
        for staff in await self._staff_repo.find_by_branch(branch_id):
            if not staff.is_active:
                continue
            for slot in await self._staff_slots(staff, branch, day, duration_minutes, exclude_booking_id):
                by_range.setdefault(slot, []).append(staff.id)

        return [
            TimeSlot(start=slot.start, end=slot.end, staff_ids=tuple(sorted(staff_ids)))
            for slot, staff_ids in sorted(by_range.items(), key=lambda entry: entry[0].start)
        ]

    async def find_optimal_staff_assignment(
        self,
        service_ids: list[str],
        start: datetime,
        branch_id: str,
    ) -> list[StaffAssignment]:
        """
        Propone un profesional por servicio, agendando los servicios uno tras
        otro desde `start`.

        Preferencia: especialistas antes que roles ADMIN/MANAGER, luego menos
        reservas ese día, luego id.
        """
        branch = await self._branch_repo.find_by_id(branch_id)
        if branch is None:
            return []

        assignments: list[StaffAssignment] = []
        cursor = start
        for service_id in service_ids:
            service = await self._service_repo.find_by_id(service_id)
            if service is None:
                self._logger.warning(
                    "Service not found during staff assignment",
                    extra={"service_id": service_id, "branch_id": branch_id},
                )
                continue

            candidates = await self._staff_repo.find_available_staff(
                branch_id, cursor, service.duration_minutes
            )
            ranked = []
            for staff in candidates:
                if not staff.can_perform_service(service.category):
                    continue
                if not await self.check_staff_availability(staff.id, cursor, service.duration_minutes):
                    continue
                day = branch.to_local(cursor).date()
                same_day = await self._booking_repo.find_by_staff_and_date(staff.id, day, branch.tz)
                load = sum(1 for booking in same_day if booking.holds_staff_time)
                specialist = staff.is_specialist_in(service.category)
                ranked.append((0 if specialist else 1, load, staff.id, specialist))

            if ranked:
                _, _, staff_id, specialist = min(ranked)
                assignments.append(
                    StaffAssignment(
                        service_id=service_id,
                        staff_id=staff_id,
                        confidence=SPECIALIST_CONFIDENCE if specialist else GENERALIST_CONFIDENCE,
                    )
                )
            cursor = cursor + timedelta(minutes=service.duration_minutes)

        return assignments
