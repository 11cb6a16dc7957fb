"""Entidad Branch - sucursal física del salón."""

from dataclasses import dataclass, field
from datetime import date, datetime
from zoneinfo import ZoneInfo

from salon_booking.domain.value_objects.operating_hours import DayHours, OperatingHours


@dataclass(frozen=True)
class BranchSettings:
    """Reglas de reserva propias de la sucursal."""

    # None: se usa default_min_booking_notice_hours de Settings
    min_booking_notice_hours: float | None = None
    max_advance_booking_days: int | None = None
    allow_walk_ins: bool = True


@dataclass(frozen=True)
class Branch:
    """
    Sucursal con su horario semanal.

    El horario se interpreta en la zona horaria de la sucursal.
    """

    id: str
    name: str
    operating_hours: OperatingHours
    timezone: str = "UTC"
    settings: BranchSettings = field(default_factory=BranchSettings)
    is_active: bool = True

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    def to_local(self, moment: datetime) -> datetime:
        """Convierte a hora local; un datetime naive se asume ya en hora local."""
        if moment.tzinfo is None:
            return moment.replace(tzinfo=self.tz)
        return moment.astimezone(self.tz)

    def hours_for(self, day: date) -> DayHours:
        return self.operating_hours.for_date(day)

    def is_within_operating_hours(self, moment: datetime) -> bool:
        """La hora local debe cumplir open <= t < close, fuera de pausas."""
        if not self.is_active:
            return False
        local = self.to_local(moment)
        return self.hours_for(local.date()).admits(local.time())
