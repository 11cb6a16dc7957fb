"""Interface AvailabilityService - Puerto de consulta de disponibilidad."""

from abc import ABC, abstractmethod
from datetime import date, datetime

from salon_booking.application.dtos.booking_dto import StaffAssignment, TimeSlot


class AvailabilityService(ABC):
    @abstractmethod
    async def check_staff_availability(
        self,
        staff_id: str,
        start: datetime,
        duration_minutes: int,
        exclude_booking_id: str | None = None,
    ) -> bool:
        """True si el profesional está libre en [start, start + duration)."""
        raise NotImplementedError

    @abstractmethod
    async def get_available_time_slots(
        self,
        branch_id: str,
        day: date,
        duration_minutes: int,
        exclude_booking_id: str | None = None,
    ) -> list[TimeSlot]:
        """Horarios libres del día para al menos un profesional, ordenados."""
        raise NotImplementedError

    @abstractmethod
    async def find_optimal_staff_assignment(
        self,
        service_ids: list[str],
        start: datetime,
        branch_id: str,
    ) -> list[StaffAssignment]:
        raise NotImplementedError
