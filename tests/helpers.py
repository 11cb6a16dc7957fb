"""Constantes y constructores compartidos por los tests."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from salon_booking.application.dtos.booking_dto import CreateBookingCommand, RequestedService
from salon_booking.domain.entities.booking import Booking
from salon_booking.domain.entities.booking_service import BookingService
from salon_booking.domain.value_objects.money import Money

UTC = timezone.utc

# Lunes 2 de junio de 2025, 08:00 UTC
NOW = datetime(2025, 6, 2, 8, 0, tzinfo=UTC)
# Martes siguiente
TUESDAY = NOW.date() + timedelta(days=1)

BRANCH_ID = "BR-1"


def at(hour: int, minute: int = 0, day=TUESDAY) -> datetime:
    """Fecha/hora UTC en el día de prueba."""
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=UTC)


def usd(amount: str | int) -> Money:
    return Money(Decimal(str(amount)), "USD")


def make_command(
    scheduled_at: datetime,
    *items: tuple[str, str | None],
    customer_id: str = "CU-1",
    branch_id: str = BRANCH_ID,
    booking_id: str | None = None,
) -> CreateBookingCommand:
    """Comando de creación; cada item es (service_id, staff_id)."""
    return CreateBookingCommand(
        booking_id=booking_id,
        branch_id=branch_id,
        customer_id=customer_id,
        scheduled_at=scheduled_at,
        services=[RequestedService(service_id=sid, staff_id=staff) for sid, staff in items],
    )


def make_booking(
    booking_id: str,
    staff_id: str | None,
    start: datetime,
    minutes: int = 60,
    service_id: str = "SV-CUT",
    price: str | int = 100,
    confirm: bool = True,
    branch_id: str = BRANCH_ID,
) -> Booking:
    """Reserva de una sola línea, confirmada por defecto."""
    item = BookingService(
        id=f"{booking_id}-L1",
        booking_id=booking_id,
        service_id=service_id,
        start_time=start,
        duration_minutes=minutes,
        price=usd(price),
        staff_id=staff_id,
    )
    booking, _ = Booking.create(
        id=booking_id,
        branch_id=branch_id,
        customer_id="CU-9",
        scheduled_at=start,
        now=NOW,
        services=[item],
    )
    if confirm:
        booking, _ = booking.confirm(NOW)
    return booking
