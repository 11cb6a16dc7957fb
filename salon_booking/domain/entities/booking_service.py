"""Entidad BookingService - un servicio concreto dentro de una reserva."""

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from enum import Enum

from salon_booking.domain.errors import (
    InvalidDiscountError,
    InvalidDurationError,
    InvalidStatusTransitionError,
)
from salon_booking.domain.value_objects.money import Money
from salon_booking.domain.value_objects.time_range import TimeRange


class ServiceStatus(str, Enum):
    """Estados de una línea de servicio."""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


@dataclass(frozen=True)
class BookingService:
    """
    Línea de servicio de una reserva: horario, precio y profesional asignado.

    No tiene ciclo de vida propio fuera de su Booking. Todas las operaciones
    retornan una nueva instancia.
    """

    id: str
    booking_id: str
    service_id: str
    start_time: datetime
    duration_minutes: int
    price: Money
    staff_id: str | None = None
    discount: Money | None = None
    status: ServiceStatus = ServiceStatus.PENDING

    def __post_init__(self) -> None:
        if self.duration_minutes <= 0:
            raise InvalidDurationError(self.duration_minutes)
        if self.discount is None:
            object.__setattr__(self, "discount", Money.zero(self.price.currency_code))
        elif self.discount.is_greater_than(self.price):
            raise InvalidDiscountError(str(self.discount), str(self.price))

    # === Propiedades calculadas ===

    @property
    def end_time(self) -> datetime:
        return self.start_time + timedelta(minutes=self.duration_minutes)

    @property
    def time_range(self) -> TimeRange:
        return TimeRange(start=self.start_time, end=self.end_time)

    @property
    def final_price(self) -> Money:
        return self.price.subtract(self.discount)

    def get_end_time(self) -> datetime:
        return self.end_time

    def get_final_price(self) -> Money:
        return self.final_price

    # === Métodos de negocio ===

    def assign_staff(self, staff_id: str | None) -> "BookingService":
        return replace(self, staff_id=staff_id or None)

    def apply_discount(self, discount: Money) -> "BookingService":
        """Aplica un descuento; falla con INVALID_DISCOUNT si supera el precio."""
        if discount.is_greater_than(self.price):
            raise InvalidDiscountError(str(discount), str(self.price))
        return replace(self, discount=discount)

    def move_to(self, start_time: datetime) -> "BookingService":
        return replace(self, start_time=start_time)

    def start(self) -> "BookingService":
        if self.status != ServiceStatus.PENDING:
            raise InvalidStatusTransitionError(self.status.value, ServiceStatus.PENDING.value, "iniciar el servicio")
        return replace(self, status=ServiceStatus.IN_PROGRESS)

    def complete(self) -> "BookingService":
        if self.status != ServiceStatus.IN_PROGRESS:
            raise InvalidStatusTransitionError(
                self.status.value, ServiceStatus.IN_PROGRESS.value, "completar el servicio"
            )
        return replace(self, status=ServiceStatus.COMPLETED)

    def cancel(self) -> "BookingService":
        if self.status == ServiceStatus.COMPLETED:
            raise InvalidStatusTransitionError(
                self.status.value,
                [ServiceStatus.PENDING.value, ServiceStatus.IN_PROGRESS.value, ServiceStatus.CANCELLED.value],
                "cancelar el servicio",
            )
        return replace(self, status=ServiceStatus.CANCELLED)
