"""Cálculo determinista de horarios reservables."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable

from salon_booking.domain.constants import SLOT_GRANULARITY_MINUTES
from salon_booking.domain.entities.branch import Branch
from salon_booking.domain.value_objects.time_range import TimeRange


def overlaps_any(candidate: TimeRange, busy: Iterable[TimeRange]) -> bool:
    return any(candidate.overlaps_with(other) for other in busy)


@dataclass(frozen=True)
class SlotCalculator:
    """
    Genera horarios candidatos cada `granularity_minutes` dentro del horario
    de la sucursal y conserva los que caben en el turno del profesional sin
    solaparse con sus ocupaciones.

    Para las mismas entradas siempre produce la misma salida.
    """

    granularity_minutes: int = SLOT_GRANULARITY_MINUTES

    def __post_init__(self) -> None:
        if self.granularity_minutes <= 0:
            raise ValueError(f"granularity_minutes debe ser positivo: {self.granularity_minutes}")

    def candidate_slots(self, branch: Branch, day: date, duration_minutes: int) -> list[TimeRange]:
        """Horarios [inicio, inicio + duración) que caben en el horario del día."""
        hours = branch.hours_for(day)
        window = hours.interval_on(day, branch.tz)
        if window is None or duration_minutes <= 0:
            return []

        step = timedelta(minutes=self.granularity_minutes)
        length = timedelta(minutes=duration_minutes)
        breaks = hours.breaks_on(day, branch.tz)

        slots: list[TimeRange] = []
        cursor = window.start
        while cursor + length <= window.end:
            slot = TimeRange(start=cursor, end=cursor + length)
            if not overlaps_any(slot, breaks):
                slots.append(slot)
            cursor += step
        return slots

    def available_slots(
        self,
        branch: Branch,
        day: date,
        duration_minutes: int,
        working_interval: TimeRange | None,
        busy: Iterable[TimeRange] = (),
        not_before: datetime | None = None,
        not_after: datetime | None = None,
    ) -> list[TimeRange]:
        """
        Filtra los candidatos del día para un profesional.

        Args:
            working_interval: Turno del profesional; sin turno no hay horarios.
            busy: Reservas existentes y ausencias del profesional.
            not_before: Descarta horarios que empiezan antes (anticipación mínima).
            not_after: Descarta horarios que empiezan después (horizonte máximo).
        """
        if working_interval is None:
            return []
        busy = list(busy)
        result = []
        for slot in self.candidate_slots(branch, day, duration_minutes):
            if not working_interval.contains(slot):
                continue
            if overlaps_any(slot, busy):
                continue
            if not_before is not None and slot.start < not_before:
                continue
            if not_after is not None and slot.start > not_after:
                continue
            result.append(slot)
        return result
