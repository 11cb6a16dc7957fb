"""Value Object TimeRange - intervalo semiabierto [start, end)."""

from dataclasses import dataclass
from datetime import datetime, timedelta

from salon_booking.domain.errors import InvalidTimeRangeError


def intervals_overlap(start: datetime, end: datetime, other_start: datetime, other_end: datetime) -> bool:
    """
    Único predicado de solapamiento del sistema.

    Intervalos que sólo se tocan (end == other_start) no se solapan.
    """
    return start < other_end and end > other_start


@dataclass(frozen=True)
class TimeRange:
    """
    Value Object inmutable que representa un intervalo [start, end).

    Attributes:
        start: Inicio (incluido).
        end: Fin (excluido).
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start >= self.end:
            raise InvalidTimeRangeError(
                f"start debe ser anterior a end: {self.start.isoformat()} >= {self.end.isoformat()}"
            )

    @property
    def duration(self) -> timedelta:
        """Retorna la duración del rango."""
        return self.end - self.start

    @property
    def duration_minutes(self) -> int:
        return int(self.duration.total_seconds() // 60)

    def overlaps_with(self, other: "TimeRange") -> bool:
        """Verifica si este rango se superpone con otro."""
        return intervals_overlap(self.start, self.end, other.start, other.end)

    def contains(self, other: "TimeRange") -> bool:
        """Verifica si otro rango cabe completo dentro de éste."""
        return self.start <= other.start and other.end <= self.end

    def contains_instant(self, dt: datetime) -> bool:
        return self.start <= dt < self.end

    def shift(self, delta: timedelta) -> "TimeRange":
        return TimeRange(start=self.start + delta, end=self.end + delta)

    def __str__(self) -> str:
        return f"{self.start.isoformat()} -> {self.end.isoformat()}"

    @classmethod
    def from_duration(cls, start: datetime, minutes: int) -> "TimeRange":
        """Factory method para crear desde un inicio y una duración en minutos."""
        return cls(start=start, end=start + timedelta(minutes=minutes))
