"""DTOs y comandos para reservas."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, constr

from salon_booking.domain.entities.booking import Booking, BookingSource
from salon_booking.domain.events import DomainEvent
from salon_booking.domain.value_objects.money import Balance, Money


class RequestedService(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    service_id: constr(strip_whitespace=True, min_length=1)
    staff_id: constr(strip_whitespace=True, min_length=1) | None = None


class CreateBookingCommand(BaseModel):
    """Comando para crear una reserva; los servicios se agendan en el orden recibido."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    branch_id: constr(strip_whitespace=True, min_length=1)
    customer_id: constr(strip_whitespace=True, min_length=1)
    scheduled_at: AwareDatetime
    services: list[RequestedService] = Field(min_length=1)
    source: BookingSource = BookingSource.WEB
    booking_id: str | None = None
    notes: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


@dataclass(frozen=True)
class TimeSlot:
    """Intervalo [start, end) ofrecido para reservar."""

    start: datetime
    end: datetime
    staff_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class StaffAssignment:
    service_id: str
    staff_id: str
    confidence: float


@dataclass(frozen=True)
class BookingConflict:
    booking_id: str
    conflict_type: str
    start_time: datetime
    end_time: datetime
    customer_id: str


@dataclass(frozen=True)
class ServicePricing:
    service_id: str
    name: str
    price: Money
    deposit_required: bool
    deposit_amount: Money | None = None


@dataclass(frozen=True)
class BookingPricing:
    subtotal: Money
    discount_amount: Money
    total: Money
    deposit_required: Money
    remaining_balance: Balance
    services: list[ServicePricing] = field(default_factory=list)


@dataclass(frozen=True)
class BookingOutcome:
    """Resultado de una operación: estado persistido y eventos a reenviar."""

    booking: Booking
    events: list[DomainEvent] = field(default_factory=list)
