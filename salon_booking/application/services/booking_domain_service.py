"""BookingDomainService - orquestación de reservas sobre los puertos de la aplicación."""

import logging
from collections.abc import Callable
from datetime import date, datetime, timedelta

from salon_booking.application.dtos.booking_dto import (
    BookingConflict,
    BookingOutcome,
    BookingPricing,
    CreateBookingCommand,
    ServicePricing,
    TimeSlot,
)
from salon_booking.application.interfaces.availability_service import AvailabilityService
from salon_booking.application.interfaces.booking_repo import BookingRepo, StaffSlotConflictError
from salon_booking.application.interfaces.catalog_repo import BranchRepo, ServiceRepo, StaffRepo
from salon_booking.application.interfaces.clock import Clock
from salon_booking.application.interfaces.id_generator import IdGenerator
from salon_booking.application.interfaces.transaction_manager import TransactionManager
from salon_booking.application.services.discounts import DiscountStrategy, NoDiscount
from salon_booking.domain.constants import (
    CANCELLATION_MIN_NOTICE,
    DEFAULT_CURRENCY,
    DEFAULT_MIN_BOOKING_NOTICE_HOURS,
    RESCHEDULE_MIN_NOTICE,
)
from salon_booking.domain.entities.booking import Booking, BookingStatus, Transition
from salon_booking.domain.entities.booking_service import BookingService, ServiceStatus
from salon_booking.domain.entities.branch import Branch
from salon_booking.domain.entities.service import Service
from salon_booking.domain.errors import (
    BookingAlreadyExistsError,
    BookingNotFoundError,
    BranchNotAvailableError,
    CancellationNotAllowedError,
    InsufficientNoticeError,
    InvalidAssignmentError,
    InvalidServicesError,
    InvalidStaffAssignmentError,
    OutsideOperatingHoursError,
    RescheduleNotAllowedError,
    StaffNotAvailableError,
    TimeSlotUnavailableError,
)
from salon_booking.domain.value_objects.money import Money
from salon_booking.domain.value_objects.time_range import intervals_overlap

TIME_OVERLAP = "TIME_OVERLAP"


class BookingDomainService:
    """
    Orquesta la creación y el ciclo de vida de las reservas.

    Cada operación es una unidad atómica dentro de `transaction_manager`.
    Los errores de dominio se propagan sin modificar; la única traducción es
    StaffSlotConflictError (conflicto detectado al escribir) a
    STAFF_NOT_AVAILABLE.
    """

    def __init__(
        self,
        booking_repo: BookingRepo,
        service_repo: ServiceRepo,
        staff_repo: StaffRepo,
        branch_repo: BranchRepo,
        availability_service: AvailabilityService,
        transaction_manager: TransactionManager,
        clock: Clock,
        id_generator: IdGenerator,
        discount_strategy: DiscountStrategy | None = None,
        reschedule_min_notice: timedelta = RESCHEDULE_MIN_NOTICE,
        cancellation_min_notice: timedelta = CANCELLATION_MIN_NOTICE,
        default_min_booking_notice_hours: float = DEFAULT_MIN_BOOKING_NOTICE_HOURS,
        default_currency: str = DEFAULT_CURRENCY,
    ) -> None:
        self._booking_repo = booking_repo
        self._service_repo = service_repo
        self._staff_repo = staff_repo
        self._branch_repo = branch_repo
        self._availability = availability_service
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._id_generator = id_generator
        self._discount_strategy = discount_strategy or NoDiscount()
        self._reschedule_min_notice = reschedule_min_notice
        self._cancellation_min_notice = cancellation_min_notice
        self._default_min_booking_notice_hours = default_min_booking_notice_hours
        self._default_currency = default_currency
        self._logger = logging.getLogger(__name__)

    # === Creación ===

    async def create_booking(self, command: CreateBookingCommand) -> BookingOutcome:
        now = self._clock.now()

        async with self._transaction_manager.start():
            branch = await self._load_active_branch(command.branch_id)

            services: list[Service] = []
            invalid: list[str] = []
            for requested in command.services:
                service = await self._service_repo.find_by_id(requested.service_id)
                if service is None or not service.is_active:
                    invalid.append(requested.service_id)
                else:
                    services.append(service)
            if invalid:
                raise InvalidServicesError(invalid)

            if not branch.is_within_operating_hours(command.scheduled_at):
                raise OutsideOperatingHoursError(branch.id, command.scheduled_at)

            min_notice_hours = branch.settings.min_booking_notice_hours
            if min_notice_hours is None:
                min_notice_hours = self._default_min_booking_notice_hours
            if command.scheduled_at - now < timedelta(hours=min_notice_hours):
                error = InsufficientNoticeError(min_notice_hours)
                self._logger.warning(
                    "Booking rejected for insufficient notice",
                    extra={
                        "branch_id": branch.id,
                        "scheduled_at": command.scheduled_at.isoformat(),
                        "code": error.code,
                    },
                )
                raise error

            booking_id = command.booking_id or self._id_generator.new_booking_id()
            currency_code = services[0].price.currency_code

            # Servicios consecutivos en el orden recibido
            items: list[BookingService] = []
            cursor = command.scheduled_at
            for requested, service in zip(command.services, services):
                items.append(
                    BookingService(
                        id=self._id_generator.new_line_item_id(),
                        booking_id=booking_id,
                        service_id=service.id,
                        start_time=cursor,
                        duration_minutes=service.duration_minutes,
                        price=service.price,
                        staff_id=requested.staff_id,
                    )
                )
                cursor = cursor + timedelta(minutes=service.duration_minutes)

            booking, events = Booking.create(
                id=booking_id,
                branch_id=branch.id,
                customer_id=command.customer_id,
                scheduled_at=command.scheduled_at,
                now=now,
                currency_code=currency_code,
                source=command.source,
                services=items,
                notes=command.notes,
                metadata=command.metadata,
            )

            await self._validate_staff_assignments(booking.services)
            saved = await self._save(booking, is_new=True)

        self._logger.info(
            "Booking created",
            extra={
                "booking_id": saved.id,
                "branch_id": saved.branch_id,
                "customer_id": saved.customer_id,
                "scheduled_at": saved.scheduled_at.isoformat(),
                "total_amount": str(saved.total_amount),
            },
        )
        return BookingOutcome(booking=saved, events=events)

    # === Ciclo de vida ===

    async def reschedule_booking(self, booking_id: str, new_time: datetime) -> BookingOutcome:
        now = self._clock.now()

        async with self._transaction_manager.start():
            booking = await self._load_booking(booking_id)
            if not booking.can_reschedule(now, self._reschedule_min_notice):
                error = RescheduleNotAllowedError(booking_id)
                self._logger.warning(
                    "Reschedule rejected",
                    extra={"booking_id": booking_id, "status": booking.status.value, "code": error.code},
                )
                raise error

            branch = await self._load_active_branch(booking.branch_id)
            day = branch.to_local(new_time).date()
            slots = await self._availability.get_available_time_slots(
                branch.id, day, booking.duration_minutes, exclude_booking_id=booking.id
            )
            if not any(slot.start == new_time for slot in slots):
                error = TimeSlotUnavailableError(new_time)
                self._logger.warning(
                    "Requested slot is not available",
                    extra={"booking_id": booking_id, "new_time": new_time.isoformat(), "code": error.code},
                )
                raise error

            rescheduled, events = booking.reschedule(new_time, now)
            await self._validate_staff_assignments(rescheduled.services, exclude_booking_id=booking.id)
            saved = await self._save(rescheduled)

        self._logger.info(
            "Booking rescheduled",
            extra={
                "booking_id": booking_id,
                "previous_scheduled_at": booking.scheduled_at.isoformat(),
                "scheduled_at": new_time.isoformat(),
            },
        )
        return BookingOutcome(booking=saved, events=events)

    async def cancel_booking(self, booking_id: str, reason: str | None = None) -> BookingOutcome:
        now = self._clock.now()

        async with self._transaction_manager.start():
            booking = await self._load_booking(booking_id)
            if not booking.can_cancel(now, self._cancellation_min_notice):
                error = CancellationNotAllowedError(booking_id)
                self._logger.warning(
                    "Cancellation rejected",
                    extra={"booking_id": booking_id, "status": booking.status.value, "code": error.code},
                )
                raise error
            cancelled, events = booking.cancel(now, reason)
            saved = await self._save(cancelled)

        self._logger.info("Booking cancelled", extra={"booking_id": booking_id, "reason": reason})
        return BookingOutcome(booking=saved, events=events)

    async def confirm_booking(self, booking_id: str) -> BookingOutcome:
        return await self._transition(booking_id, "confirmed", lambda b, now: b.confirm(now))

    async def start_booking(self, booking_id: str) -> BookingOutcome:
        return await self._transition(booking_id, "started", lambda b, now: b.start(now))

    async def complete_booking(self, booking_id: str) -> BookingOutcome:
        return await self._transition(booking_id, "completed", lambda b, now: b.complete(now))

    async def mark_no_show(self, booking_id: str) -> BookingOutcome:
        return await self._transition(booking_id, "marked as no-show", lambda b, now: b.mark_no_show(now))

    async def pay_deposit(self, booking_id: str, amount: Money) -> BookingOutcome:
        return await self._transition(booking_id, "deposit recorded", lambda b, now: b.pay_deposit(amount))

    async def _transition(
        self,
        booking_id: str,
        label: str,
        operation: Callable[[Booking, datetime], Transition],
    ) -> BookingOutcome:
        now = self._clock.now()
        async with self._transaction_manager.start():
            booking = await self._load_booking(booking_id)
            updated, events = operation(booking, now)
            saved = await self._save(updated)

        self._logger.info(
            f"Booking {label}",
            extra={"booking_id": booking_id, "status": saved.status.value},
        )
        return BookingOutcome(booking=saved, events=events)

    # === Personal ===

    async def auto_assign_staff(self, booking_id: str) -> BookingOutcome:
        """
        Asigna profesional a las líneas que no tienen uno.

        Las líneas ya asignadas se conservan. Si para un servicio no hay
        nadie disponible, la línea queda sin asignar.
        """
        async with self._transaction_manager.start():
            booking = await self._load_booking(booking_id)
            booking.ensure_staff_assignable()
            assignments = await self._availability.find_optimal_staff_assignment(
                [item.service_id for item in booking.services],
                booking.scheduled_at,
                booking.branch_id,
            )

            updated = booking
            taken: set[str] = set()
            for assignment in assignments:
                item = next(
                    (
                        s
                        for s in updated.services
                        if s.service_id == assignment.service_id and s.staff_id is None and s.id not in taken
                    ),
                    None,
                )
                if item is None:
                    continue
                taken.add(item.id)
                updated, _ = updated.assign_staff(item.id, assignment.staff_id)

            changed = [updated.get_service(item_id) for item_id in taken]
            await self._validate_staff_assignments(changed, exclude_booking_id=booking.id)
            saved = await self._save(updated) if changed else booking

        self._logger.info(
            "Staff auto-assigned",
            extra={"booking_id": booking_id, "assigned_lines": len(taken)},
        )
        return BookingOutcome(booking=saved, events=[])

    async def _validate_staff_assignments(
        self,
        items,
        exclude_booking_id: str | None = None,
    ) -> None:
        for item in items:
            if item.staff_id is None or item.status == ServiceStatus.CANCELLED:
                continue

            staff = await self._staff_repo.find_by_id(item.staff_id)
            service = await self._service_repo.find_by_id(item.service_id)
            if staff is None or service is None:
                raise InvalidAssignmentError(item.staff_id, item.service_id)

            available = await self._availability.check_staff_availability(
                item.staff_id, item.start_time, item.duration_minutes, exclude_booking_id
            )
            if not available:
                error = StaffNotAvailableError(item.staff_id, item.start_time)
                self._logger.warning(
                    "Staff not available",
                    extra={"staff_id": item.staff_id, "start_time": item.start_time.isoformat(), "code": error.code},
                )
                raise error

            if not staff.can_perform_service(service.category):
                raise InvalidStaffAssignmentError(staff.id, service.category)

    # === Consultas ===

    async def check_booking_conflicts(
        self,
        branch_id: str,
        scheduled_at: datetime,
        duration_minutes: int,
        exclude_booking_id: str | None = None,
    ) -> list[BookingConflict]:
        """Reservas activas de la sucursal que se solapan con [scheduled_at, +duración)."""
        branch = await self._branch_repo.find_by_id(branch_id)
        tz = branch.tz if branch is not None else scheduled_at.tzinfo
        day = scheduled_at.astimezone(tz).date()
        end = scheduled_at + timedelta(minutes=duration_minutes)

        conflicts: list[BookingConflict] = []
        for existing in await self._booking_repo.find_by_branch_and_date(branch_id, day, tz):
            if existing.id == exclude_booking_id:
                continue
            if existing.status in (BookingStatus.CANCELLED, BookingStatus.NO_SHOW):
                continue
            if intervals_overlap(scheduled_at, end, existing.scheduled_at, existing.end_time):
                conflicts.append(
                    BookingConflict(
                        booking_id=existing.id,
                        conflict_type=TIME_OVERLAP,
                        start_time=existing.scheduled_at,
                        end_time=existing.end_time,
                        customer_id=existing.customer_id,
                    )
                )
        return conflicts

    async def calculate_booking_price(
        self,
        service_ids: list[str],
        customer_id: str,
        discount_codes: list[str] | None = None,
    ) -> BookingPricing:
        services: list[Service] = []
        missing: list[str] = []
        for service_id in service_ids:
            service = await self._service_repo.find_by_id(service_id)
            if service is None:
                missing.append(service_id)
            else:
                services.append(service)
        if missing:
            raise InvalidServicesError(missing)

        currency_code = services[0].price.currency_code if services else self._default_currency
        subtotal = Money.zero(currency_code)
        deposit_required = Money.zero(currency_code)
        lines: list[ServicePricing] = []
        for service in services:
            subtotal = subtotal.add(service.price)
            if service.requires_deposit:
                deposit_required = deposit_required.add(service.deposit_amount)
            lines.append(
                ServicePricing(
                    service_id=service.id,
                    name=service.name,
                    price=service.price,
                    deposit_required=service.requires_deposit,
                    deposit_amount=service.deposit_amount,
                )
            )

        discount = self._discount_strategy.calculate(subtotal, services, customer_id, discount_codes or [])
        total = subtotal.subtract(discount)
        return BookingPricing(
            subtotal=subtotal,
            discount_amount=discount,
            total=total,
            deposit_required=deposit_required,
            remaining_balance=total.difference(deposit_required),
            services=lines,
        )

    async def get_available_slots(
        self, branch_id: str, day: date, duration_minutes: int
    ) -> list[TimeSlot]:
        return await self._availability.get_available_time_slots(branch_id, day, duration_minutes)

    async def get_available_slots_for_service(
        self, branch_id: str, day: date, service_id: str
    ) -> list[TimeSlot]:
        """Horarios para un servicio, reservando también su buffer."""
        service = await self._service_repo.find_by_id(service_id)
        if service is None or not service.is_active:
            raise InvalidServicesError([service_id])
        return await self._availability.get_available_time_slots(branch_id, day, service.blocked_minutes)

    async def suggest_alternative_slots(
        self,
        branch_id: str,
        preferred_start: datetime,
        duration_minutes: int,
        days: int = 7,
        per_day: int = 3,
        limit: int = 10,
    ) -> list[TimeSlot]:
        """
        Primeros horarios libres a partir de `preferred_start`.

        Recorre hasta `days` días, toma como mucho `per_day` por día y se
        detiene al llegar a `limit`.
        """
        branch = await self._load_active_branch(branch_id)
        first_day = branch.to_local(preferred_start).date()

        suggestions: list[TimeSlot] = []
        for offset in range(days):
            day = first_day + timedelta(days=offset)
            slots = await self._availability.get_available_time_slots(branch_id, day, duration_minutes)
            upcoming = [slot for slot in slots if slot.start >= preferred_start]
            suggestions.extend(upcoming[:per_day])
            if len(suggestions) >= limit:
                break
        return suggestions[:limit]

    # === Auxiliares ===

    async def _load_active_branch(self, branch_id: str) -> Branch:
        branch = await self._branch_repo.find_by_id(branch_id)
        if branch is None or not branch.is_active:
            raise BranchNotAvailableError(branch_id)
        return branch

    async def _load_booking(self, booking_id: str) -> Booking:
        booking = await self._booking_repo.find_by_id(booking_id)
        if booking is None:
            raise BookingNotFoundError(booking_id)
        return booking

    async def _save(self, booking: Booking, is_new: bool = False) -> Booking:
        try:
            if is_new:
                return await self._booking_repo.add(booking)
            return await self._booking_repo.save(booking)
        except BookingAlreadyExistsError as error:
            self._logger.warning(
                "Booking id already in use",
                extra={"booking_id": booking.id, "code": error.code},
            )
            raise
        except StaffSlotConflictError as exc:
            error = StaffNotAvailableError(exc.staff_id)
            self._logger.warning(
                "Concurrent booking claimed the same staff interval",
                extra={
                    "booking_id": booking.id,
                    "staff_id": exc.staff_id,
                    "conflicting_booking_id": exc.booking_id,
                    "code": error.code,
                },
            )
            raise error from exc
