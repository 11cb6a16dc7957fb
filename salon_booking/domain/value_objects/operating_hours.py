"""Value Objects de horario de atención: DayHours y OperatingHours."""

from dataclasses import dataclass, field
from datetime import date, datetime, time, tzinfo

from salon_booking.domain.errors import InvalidOperatingHoursError
from salon_booking.domain.value_objects.time_range import TimeRange

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


def parse_hhmm(value: str) -> time:
    """Convierte 'HH:MM' a time."""
    try:
        hours, minutes = value.split(":")
        return time(hour=int(hours), minute=int(minutes))
    except (AttributeError, ValueError) as exc:
        raise InvalidOperatingHoursError(f"Hora inválida, se esperaba HH:MM: {value!r}") from exc


@dataclass(frozen=True)
class DayHours:
    """
    Horario de un día de la semana.

    Attributes:
        open: Hora de apertura (incluida).
        close: Hora de cierre (excluida).
        closed: True si la sucursal no abre ese día.
        breaks: Pausas (inicio, fin) durante las que no se agenda.
    """

    open: time = time(9, 0)
    close: time = time(18, 0)
    closed: bool = False
    breaks: tuple[tuple[time, time], ...] = ()

    def __post_init__(self) -> None:
        if not self.closed and self.open >= self.close:
            raise InvalidOperatingHoursError(
                f"La apertura debe ser anterior al cierre: {self.open} >= {self.close}"
            )
        for start, end in self.breaks:
            if start >= end:
                raise InvalidOperatingHoursError(f"Pausa inválida: {start} >= {end}")

    def admits(self, moment: time) -> bool:
        """Verifica si una hora local cae dentro del horario y fuera de las pausas."""
        if self.closed:
            return False
        if not (self.open <= moment < self.close):
            return False
        return not any(start <= moment < end for start, end in self.breaks)

    def interval_on(self, day: date, tz: tzinfo) -> TimeRange | None:
        """Retorna el intervalo de atención de una fecha concreta, o None si cierra."""
        if self.closed:
            return None
        return TimeRange(
            start=datetime.combine(day, self.open, tzinfo=tz),
            end=datetime.combine(day, self.close, tzinfo=tz),
        )

    def breaks_on(self, day: date, tz: tzinfo) -> list[TimeRange]:
        return [
            TimeRange(
                start=datetime.combine(day, start, tzinfo=tz),
                end=datetime.combine(day, end, tzinfo=tz),
            )
            for start, end in self.breaks
        ]

    @classmethod
    def from_strings(
        cls, open_at: str, close_at: str, breaks: list[tuple[str, str]] | None = None
    ) -> "DayHours":
        return cls(
            open=parse_hhmm(open_at),
            close=parse_hhmm(close_at),
            breaks=tuple((parse_hhmm(s), parse_hhmm(e)) for s, e in (breaks or [])),
        )

    @classmethod
    def closed_day(cls) -> "DayHours":
        return cls(closed=True)


@dataclass(frozen=True)
class OperatingHours:
    """
    Horario semanal de una sucursal.

    `days` se indexa con date.weekday() (0 = lunes). Un día ausente se
    considera cerrado.
    """

    days: dict[int, DayHours] = field(default_factory=dict, hash=False)

    def for_weekday(self, weekday: int) -> DayHours:
        return self.days.get(weekday, DayHours.closed_day())

    def for_date(self, day: date) -> DayHours:
        return self.for_weekday(day.weekday())

    @classmethod
    def from_mapping(cls, mapping: dict[str, DayHours]) -> "OperatingHours":
        """Crea desde un dict {'monday': DayHours, ...}."""
        days: dict[int, DayHours] = {}
        for name, hours in mapping.items():
            key = name.lower()
            if key not in WEEKDAYS:
                raise InvalidOperatingHoursError(f"Día de la semana desconocido: {name!r}")
            days[WEEKDAYS.index(key)] = hours
        return cls(days=days)

    @classmethod
    def weekday_weekend(
        cls,
        weekday: DayHours,
        weekend: DayHours,
    ) -> "OperatingHours":
        """Mismo horario de lunes a viernes y otro para sábado y domingo."""
        return cls(days={i: (weekday if i < 5 else weekend) for i in range(7)})
