"""Interface ScheduleRepo - turnos y ausencias del personal."""

from abc import ABC, abstractmethod
from datetime import date

from salon_booking.domain.value_objects.time_range import TimeRange


class ScheduleRepo(ABC):
    """
    Fuente de horarios de trabajo del personal.

    Sustituye al feed real de disponibilidad: todo lo que el cálculo de
    horarios necesita saber sobre un profesional llega por aquí.
    """

    @abstractmethod
    async def get_working_interval(self, staff_id: str, day: date) -> TimeRange | None:
        """Turno del profesional en la fecha, o None si no trabaja."""
        raise NotImplementedError

    @abstractmethod
    async def get_time_off(self, staff_id: str, day: date) -> list[TimeRange]:
        """Ausencias (vacaciones, citas médicas, ...) que tocan la fecha."""
        raise NotImplementedError
