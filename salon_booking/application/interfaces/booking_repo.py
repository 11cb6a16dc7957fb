"""Interface BookingRepo - Puerto de persistencia del agregado Booking."""

from abc import ABC, abstractmethod
from datetime import date, datetime, time, timedelta, timezone, tzinfo

from salon_booking.domain.entities.booking import Booking


class StaffSlotConflictError(Exception):
    """
    La escritura atómica detectó que el profesional ya tiene ocupado el intervalo.

    La lanza el repositorio dentro de la misma transacción que persiste la
    reserva; el servicio de dominio la traduce a STAFF_NOT_AVAILABLE.
    `booking_id` es la reserva que ocupa el intervalo, si se conoce.
    """

    def __init__(self, staff_id: str, booking_id: str | None = None):
        super().__init__(
            f"Staff {staff_id} already booked for an overlapping interval (booking {booking_id or 'unknown'})"
        )
        self.staff_id = staff_id
        self.booking_id = booking_id


def day_window(day: date, tz: tzinfo = timezone.utc) -> tuple[datetime, datetime]:
    """Retorna [00:00, 00:00 del día siguiente) en la zona indicada."""
    start = datetime.combine(day, time.min, tzinfo=tz)
    return start, start + timedelta(days=1)


class BookingRepo(ABC):
    @abstractmethod
    async def add(self, booking: Booking) -> Booking:
        """
        Inserta una reserva nueva con sus líneas; nunca sobrescribe.

        Raises:
            BookingAlreadyExistsError: ya hay una reserva con ese id.
            StaffSlotConflictError: otra reserva activa ocupa al mismo profesional.
        """
        raise NotImplementedError

    @abstractmethod
    async def save(self, booking: Booking) -> Booking:
        """
        Inserta o actualiza la reserva con sus líneas.

        Retorna la reserva persistida: en una actualización lock_version
        se incrementa en uno.

        Raises:
            OptimisticLockError: lock_version no coincide con el almacenado.
            StaffSlotConflictError: otra reserva activa ocupa al mismo profesional.
        """
        raise NotImplementedError

    @abstractmethod
    async def find_by_id(self, booking_id: str) -> Booking | None:
        raise NotImplementedError

    @abstractmethod
    async def find_by_branch_and_date(
        self, branch_id: str, day: date, tz: tzinfo = timezone.utc
    ) -> list[Booking]:
        """Reservas de la sucursal cuyo horario toca el día indicado, ordenadas por hora."""
        raise NotImplementedError

    @abstractmethod
    async def find_by_customer_and_date_range(
        self, customer_id: str, start: datetime, end: datetime
    ) -> list[Booking]:
        raise NotImplementedError

    @abstractmethod
    async def find_by_staff_and_date(
        self, staff_id: str, day: date, tz: tzinfo = timezone.utc
    ) -> list[Booking]:
        """Reservas con al menos una línea asignada al profesional ese día."""
        raise NotImplementedError
