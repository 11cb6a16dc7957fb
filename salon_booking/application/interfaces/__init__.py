"""Interfaces (Puertos) de la capa de aplicación."""

from salon_booking.application.interfaces.availability_service import AvailabilityService
from salon_booking.application.interfaces.booking_repo import (
    BookingRepo,
    StaffSlotConflictError,
    day_window,
)
from salon_booking.application.interfaces.catalog_repo import BranchRepo, ServiceRepo, StaffRepo
from salon_booking.application.interfaces.clock import Clock, FakeClock, SystemClock
from salon_booking.application.interfaces.id_generator import (
    FakeIdGenerator,
    IdGenerator,
    UUIDIdGenerator,
)
from salon_booking.application.interfaces.schedule_repo import ScheduleRepo
from salon_booking.application.interfaces.transaction_manager import TransactionManager

__all__ = [
    # Repositories
    "BookingRepo",
    "BranchRepo",
    "ScheduleRepo",
    "ServiceRepo",
    "StaffRepo",
    "StaffSlotConflictError",
    "day_window",
    # Services
    "AvailabilityService",
    # Infrastructure
    "TransactionManager",
    # Utilities
    "Clock",
    "SystemClock",
    "FakeClock",
    "IdGenerator",
    "UUIDIdGenerator",
    "FakeIdGenerator",
]
