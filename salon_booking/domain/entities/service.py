"""Entidad Service - servicio del catálogo del salón."""

from dataclasses import dataclass

from salon_booking.domain.errors import InvalidDurationError, MissingDepositError
from salon_booking.domain.value_objects.money import Money


@dataclass(frozen=True)
class Service:
    """
    Servicio ofrecido (corte, color, manicure, ...).

    Attributes:
        duration_minutes: Duración del servicio (> 0).
        buffer_minutes: Tiempo extra no reservable tras el servicio.
        deposit_amount: Obligatorio cuando requires_deposit es True.
    """

    id: str
    name: str
    category: str
    duration_minutes: int
    price: Money
    is_active: bool = True
    buffer_minutes: int = 0
    requires_deposit: bool = False
    deposit_amount: Money | None = None
    description: str | None = None

    def __post_init__(self) -> None:
        if self.duration_minutes <= 0:
            raise InvalidDurationError(self.duration_minutes)
        if self.buffer_minutes < 0:
            raise InvalidDurationError(self.buffer_minutes)
        if self.requires_deposit and self.deposit_amount is None:
            raise MissingDepositError(self.id)

    @property
    def blocked_minutes(self) -> int:
        """Minutos que el servicio ocupa en la agenda, incluido el buffer."""
        return self.duration_minutes + self.buffer_minutes
