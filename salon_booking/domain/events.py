"""Eventos de dominio emitidos por el agregado Booking.

Los métodos del agregado retornan los eventos junto con el nuevo estado;
el llamador los reenvía a auditoría y notificaciones.
"""

from dataclasses import dataclass
from datetime import datetime

from salon_booking.domain.value_objects.money import Money


@dataclass(frozen=True)
class BookingCreated:
    booking_id: str
    branch_id: str
    customer_id: str
    scheduled_at: datetime
    total_amount: Money
    occurred_at: datetime


@dataclass(frozen=True)
class BookingConfirmed:
    booking_id: str
    branch_id: str
    scheduled_at: datetime
    occurred_at: datetime


@dataclass(frozen=True)
class BookingCancelled:
    booking_id: str
    branch_id: str
    reason: str | None
    occurred_at: datetime


@dataclass(frozen=True)
class BookingRescheduled:
    booking_id: str
    branch_id: str
    previous_scheduled_at: datetime
    scheduled_at: datetime
    occurred_at: datetime


@dataclass(frozen=True)
class BookingMarkedNoShow:
    booking_id: str
    branch_id: str
    scheduled_at: datetime
    occurred_at: datetime


DomainEvent = BookingCreated | BookingConfirmed | BookingCancelled | BookingRescheduled | BookingMarkedNoShow
