"""Entidad Booking - Agregado raíz del dominio de reservas."""

from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Iterable

from salon_booking.domain.constants import (
    CANCELLATION_MIN_NOTICE,
    DEFAULT_CURRENCY,
    RESCHEDULE_MIN_NOTICE,
)
from salon_booking.domain.entities.booking_service import BookingService, ServiceStatus
from salon_booking.domain.errors import (
    BookingLockedError,
    InvalidScheduleTimeError,
    InvalidStatusTransitionError,
    NoServicesError,
    NoShowNotAllowedError,
)
from salon_booking.domain.events import (
    BookingCancelled,
    BookingConfirmed,
    BookingCreated,
    BookingMarkedNoShow,
    BookingRescheduled,
    DomainEvent,
)
from salon_booking.domain.value_objects.money import Balance, Money
from salon_booking.domain.value_objects.time_range import TimeRange


class BookingStatus(str, Enum):
    """Estados posibles de una reserva."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    NO_SHOW = "NO_SHOW"


TERMINAL_STATUSES = (BookingStatus.COMPLETED, BookingStatus.CANCELLED, BookingStatus.NO_SHOW)
STAFF_ASSIGNABLE_STATUSES = (BookingStatus.PENDING, BookingStatus.CONFIRMED)


class BookingSource(str, Enum):
    """Canal por el que se hizo la reserva."""

    WEB = "WEB"
    MOBILE = "MOBILE"
    PHONE = "PHONE"
    WALK_IN = "WALK_IN"
    ADMIN = "ADMIN"


Transition = tuple["Booking", list[DomainEvent]]


@dataclass(frozen=True)
class Booking:
    """
    Agregado raíz - reserva de uno o más servicios para un cliente.

    Es inmutable: cada operación retorna (nuevo estado, eventos emitidos).
    `duration_minutes` y `total_amount` no se pueden asignar; se recalculan
    a partir de `services` cada vez que se construye una instancia.
    Las líneas de servicio conservan el orden de inserción.
    """

    id: str
    branch_id: str
    customer_id: str
    scheduled_at: datetime
    currency_code: str = DEFAULT_CURRENCY
    source: BookingSource = BookingSource.WEB
    status: BookingStatus = BookingStatus.PENDING
    services: tuple[BookingService, ...] = ()
    deposit_paid: Money | None = None
    notes: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict, hash=False)
    created_at: datetime | None = None
    confirmed_at: datetime | None = None
    completed_at: datetime | None = None
    cancelled_at: datetime | None = None
    cancellation_reason: str | None = None
    no_show_at: datetime | None = None

    # Control de concurrencia
    lock_version: int = 0

    # Derivados
    duration_minutes: int = field(init=False)
    total_amount: Money = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "services", tuple(self.services))
        if self.deposit_paid is None:
            object.__setattr__(self, "deposit_paid", Money.zero(self.currency_code))
        self._recalculate_totals()

    def _recalculate_totals(self) -> None:
        total = Money.zero(self.currency_code)
        duration = 0
        for item in self.services:
            total = total.add(item.price)
            duration += item.duration_minutes
        object.__setattr__(self, "total_amount", total)
        object.__setattr__(self, "duration_minutes", duration)

    # === Creación ===

    @classmethod
    def create(
        cls,
        *,
        id: str,
        branch_id: str,
        customer_id: str,
        scheduled_at: datetime,
        now: datetime,
        currency_code: str = DEFAULT_CURRENCY,
        source: BookingSource = BookingSource.WEB,
        services: Iterable[BookingService] = (),
        notes: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Transition:
        """Crea una reserva PENDING; la fecha debe ser estrictamente futura."""
        if scheduled_at <= now:
            raise InvalidScheduleTimeError(scheduled_at)

        booking = cls(
            id=id,
            branch_id=branch_id,
            customer_id=customer_id,
            scheduled_at=scheduled_at,
            currency_code=currency_code,
            source=source,
            notes=notes,
            metadata=dict(metadata or {}),
            created_at=now,
        )
        for item in services:
            booking, _ = booking.add_service(item)

        event = BookingCreated(
            booking_id=booking.id,
            branch_id=booking.branch_id,
            customer_id=booking.customer_id,
            scheduled_at=booking.scheduled_at,
            total_amount=booking.total_amount,
            occurred_at=now,
        )
        return booking, [event]

    # === Propiedades calculadas ===

    @property
    def end_time(self) -> datetime:
        return self.scheduled_at + timedelta(minutes=self.duration_minutes)

    @property
    def time_range(self) -> TimeRange | None:
        if self.duration_minutes <= 0:
            return None
        return TimeRange(start=self.scheduled_at, end=self.end_time)

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def holds_staff_time(self) -> bool:
        """False cuando la reserva ya no ocupa agenda (cancelada o no-show)."""
        return self.status not in (BookingStatus.CANCELLED, BookingStatus.NO_SHOW)

    def staff_intervals(self) -> list[tuple[str, TimeRange]]:
        """(staff_id, intervalo) de cada línea asignada y no cancelada."""
        if not self.holds_staff_time:
            return []
        return [
            (item.staff_id, item.time_range)
            for item in self.services
            if item.staff_id is not None and item.status != ServiceStatus.CANCELLED
        ]

    def get_service(self, item_id: str) -> BookingService | None:
        for item in self.services:
            if item.id == item_id:
                return item
        return None

    # === Líneas de servicio ===

    def _ensure_editable(self) -> None:
        if self.status != BookingStatus.PENDING:
            raise BookingLockedError(self.id, self.status.value)

    def ensure_staff_assignable(self) -> None:
        if self.status not in STAFF_ASSIGNABLE_STATUSES:
            raise InvalidStatusTransitionError(
                self.status.value,
                [status.value for status in STAFF_ASSIGNABLE_STATUSES],
                "asignar profesional",
            )

    def _ensure_not_terminal(self, operation: str) -> None:
        if self.is_terminal:
            raise InvalidStatusTransitionError(
                self.status.value,
                [BookingStatus.PENDING.value, BookingStatus.CONFIRMED.value, BookingStatus.IN_PROGRESS.value],
                operation,
            )

    def add_service(self, item: BookingService) -> Transition:
        self._ensure_editable()
        if item.booking_id != self.id:
            item = replace(item, booking_id=self.id)
        services = tuple(s for s in self.services if s.id != item.id) + (item,)
        return replace(self, services=services), []

    def remove_service(self, item_id: str) -> Transition:
        self._ensure_editable()
        return replace(self, services=tuple(s for s in self.services if s.id != item_id)), []

    def _replace_service(self, item: BookingService) -> "Booking":
        return replace(
            self,
            services=tuple(item if s.id == item.id else s for s in self.services),
        )

    def assign_staff(self, item_id: str, staff_id: str | None) -> Transition:
        """Asigna profesional a una línea; no valida disponibilidad."""
        self.ensure_staff_assignable()
        item = self.get_service(item_id)
        if item is None:
            return self, []
        return self._replace_service(item.assign_staff(staff_id)), []

    def apply_discount(self, item_id: str, discount: Money) -> Transition:
        self._ensure_editable()
        item = self.get_service(item_id)
        if item is None:
            return self, []
        return self._replace_service(item.apply_discount(discount)), []

    # === Máquina de estados ===

    def confirm(self, now: datetime) -> Transition:
        if self.status != BookingStatus.PENDING:
            raise InvalidStatusTransitionError(self.status.value, BookingStatus.PENDING.value, "confirmar")
        if not self.services:
            raise NoServicesError(self.id)

        booking = replace(self, status=BookingStatus.CONFIRMED, confirmed_at=now)
        event = BookingConfirmed(
            booking_id=self.id,
            branch_id=self.branch_id,
            scheduled_at=self.scheduled_at,
            occurred_at=now,
        )
        return booking, [event]

    def start(self, now: datetime) -> Transition:
        if self.status != BookingStatus.CONFIRMED:
            raise InvalidStatusTransitionError(self.status.value, BookingStatus.CONFIRMED.value, "iniciar")
        return replace(self, status=BookingStatus.IN_PROGRESS), []

    def complete(self, now: datetime) -> Transition:
        if self.status != BookingStatus.IN_PROGRESS:
            raise InvalidStatusTransitionError(self.status.value, BookingStatus.IN_PROGRESS.value, "completar")
        return replace(self, status=BookingStatus.COMPLETED, completed_at=now), []

    def cancel(self, now: datetime, reason: str | None = None) -> Transition:
        self._ensure_not_terminal("cancelar")
        booking = replace(
            self,
            status=BookingStatus.CANCELLED,
            cancelled_at=now,
            cancellation_reason=reason,
        )
        event = BookingCancelled(
            booking_id=self.id,
            branch_id=self.branch_id,
            reason=reason,
            occurred_at=now,
        )
        return booking, [event]

    def reschedule(self, new_time: datetime, now: datetime) -> Transition:
        """
        Mueve la reserva a `new_time`.

        Las líneas se recolocan una tras otra desde la nueva hora, en su
        orden, conservando el profesional asignado. No valida
        disponibilidad: eso lo hace el servicio de dominio antes de llamar.
        """
        if self.status != BookingStatus.CONFIRMED:
            raise InvalidStatusTransitionError(self.status.value, BookingStatus.CONFIRMED.value, "reprogramar")
        if new_time <= now:
            raise InvalidScheduleTimeError(new_time)

        cursor = new_time
        moved: list[BookingService] = []
        for item in self.services:
            moved.append(item.move_to(cursor))
            cursor = cursor + timedelta(minutes=item.duration_minutes)

        booking = replace(self, scheduled_at=new_time, services=tuple(moved))
        event = BookingRescheduled(
            booking_id=self.id,
            branch_id=self.branch_id,
            previous_scheduled_at=self.scheduled_at,
            scheduled_at=new_time,
            occurred_at=now,
        )
        return booking, [event]

    def mark_no_show(self, now: datetime) -> Transition:
        """Sólo desde CONFIRMED y una vez alcanzada la hora de la cita."""
        if self.status != BookingStatus.CONFIRMED or now < self.scheduled_at:
            raise NoShowNotAllowedError(self.id, self.status.value)
        booking = replace(self, status=BookingStatus.NO_SHOW, no_show_at=now)
        event = BookingMarkedNoShow(
            booking_id=self.id,
            branch_id=self.branch_id,
            scheduled_at=self.scheduled_at,
            occurred_at=now,
        )
        return booking, [event]

    def pay_deposit(self, amount: Money) -> Transition:
        """Acumula un depósito. No se limita al total de la reserva."""
        self._ensure_not_terminal("registrar depósito")
        return replace(self, deposit_paid=self.deposit_paid.add(amount)), []

    # === Reglas de consulta ===

    def can_reschedule(self, now: datetime, min_notice: timedelta = RESCHEDULE_MIN_NOTICE) -> bool:
        return self.status == BookingStatus.CONFIRMED and self.scheduled_at - now >= min_notice

    def can_cancel(self, now: datetime, min_notice: timedelta = CANCELLATION_MIN_NOTICE) -> bool:
        return (
            self.status not in (BookingStatus.COMPLETED, BookingStatus.CANCELLED)
            and self.scheduled_at - now >= min_notice
        )

    def calculate_remaining_balance(self) -> Balance:
        """total_amount - deposit_paid; negativo si hubo sobrepago."""
        return self.total_amount.difference(self.deposit_paid)
