"""Composición de dependencias del motor de reservas."""

import logging
from dataclasses import dataclass
from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from salon_booking.application.interfaces.catalog_repo import BranchRepo, ServiceRepo, StaffRepo
from salon_booking.application.interfaces.clock import Clock, SystemClock
from salon_booking.application.interfaces.id_generator import IdGenerator, UUIDIdGenerator
from salon_booking.application.interfaces.schedule_repo import ScheduleRepo
from salon_booking.application.services.availability_service import ScheduleAvailabilityService
from salon_booking.application.services.booking_domain_service import BookingDomainService
from salon_booking.application.services.slot_calculator import SlotCalculator
from salon_booking.config import Settings, get_settings
from salon_booking.domain.value_objects.operating_hours import DayHours, OperatingHours
from salon_booking.infrastructure.db.repositories.booking_repo_sql import BookingRepoSQL
from salon_booking.infrastructure.db.transaction_manager import SQLAlchemyTransactionManager
from salon_booking.infrastructure.in_memory import (
    InMemoryBookingRepo,
    InMemoryBranchRepo,
    InMemoryScheduleRepo,
    InMemoryServiceRepo,
    InMemoryStaffRepo,
    LockingTransactionManager,
)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)


def default_operating_hours(settings: Settings | None = None) -> OperatingHours:
    """Horario de lunes a viernes y de fin de semana tomado de la configuración."""
    settings = settings or get_settings()
    return OperatingHours.weekday_weekend(
        weekday=DayHours.from_strings(settings.weekday_open, settings.weekday_close),
        weekend=DayHours.from_strings(settings.weekend_open, settings.weekend_close),
    )


@dataclass
class InMemoryBundle:
    booking_repo: InMemoryBookingRepo
    service_repo: InMemoryServiceRepo
    staff_repo: InMemoryStaffRepo
    branch_repo: InMemoryBranchRepo
    schedule_repo: InMemoryScheduleRepo
    availability_service: ScheduleAvailabilityService
    booking_service: BookingDomainService


def _build_booking_service(
    settings: Settings,
    booking_repo,
    service_repo: ServiceRepo,
    staff_repo: StaffRepo,
    branch_repo: BranchRepo,
    schedule_repo: ScheduleRepo,
    transaction_manager,
    clock: Clock,
    id_generator: IdGenerator,
) -> tuple[ScheduleAvailabilityService, BookingDomainService]:
    availability = ScheduleAvailabilityService(
        branch_repo=branch_repo,
        staff_repo=staff_repo,
        service_repo=service_repo,
        schedule_repo=schedule_repo,
        booking_repo=booking_repo,
        slot_calculator=SlotCalculator(settings.slot_granularity_minutes),
        clock=clock,
    )
    booking_service = BookingDomainService(
        booking_repo=booking_repo,
        service_repo=service_repo,
        staff_repo=staff_repo,
        branch_repo=branch_repo,
        availability_service=availability,
        transaction_manager=transaction_manager,
        clock=clock,
        id_generator=id_generator,
        reschedule_min_notice=timedelta(hours=settings.reschedule_min_hours),
        cancellation_min_notice=timedelta(hours=settings.cancellation_min_hours),
        default_min_booking_notice_hours=settings.default_min_booking_notice_hours,
        default_currency=settings.default_currency,
    )
    return availability, booking_service


def build_in_memory_bundle(
    settings: Settings | None = None,
    clock: Clock | None = None,
    id_generator: IdGenerator | None = None,
) -> InMemoryBundle:
    settings = settings or get_settings()
    booking_repo = InMemoryBookingRepo()
    service_repo = InMemoryServiceRepo()
    branch_repo = InMemoryBranchRepo()
    schedule_repo = InMemoryScheduleRepo()
    staff_repo = InMemoryStaffRepo(schedule_repo=schedule_repo, branch_repo=branch_repo)

    availability, booking_service = _build_booking_service(
        settings,
        booking_repo=booking_repo,
        service_repo=service_repo,
        staff_repo=staff_repo,
        branch_repo=branch_repo,
        schedule_repo=schedule_repo,
        transaction_manager=LockingTransactionManager(),
        clock=clock or SystemClock(),
        id_generator=id_generator or UUIDIdGenerator(),
    )
    return InMemoryBundle(
        booking_repo=booking_repo,
        service_repo=service_repo,
        staff_repo=staff_repo,
        branch_repo=branch_repo,
        schedule_repo=schedule_repo,
        availability_service=availability,
        booking_service=booking_service,
    )


def build_sql_booking_service(
    session: AsyncSession,
    service_repo: ServiceRepo,
    staff_repo: StaffRepo,
    branch_repo: BranchRepo,
    schedule_repo: ScheduleRepo,
    settings: Settings | None = None,
    clock: Clock | None = None,
    id_generator: IdGenerator | None = None,
) -> BookingDomainService:
    """Servicio de reservas persistido en la sesión dada; el catálogo llega inyectado."""
    settings = settings or get_settings()
    _, booking_service = _build_booking_service(
        settings,
        booking_repo=BookingRepoSQL(session),
        service_repo=service_repo,
        staff_repo=staff_repo,
        branch_repo=branch_repo,
        schedule_repo=schedule_repo,
        transaction_manager=SQLAlchemyTransactionManager(session),
        clock=clock or SystemClock(),
        id_generator=id_generator or UUIDIdGenerator(),
    )
    return booking_service
