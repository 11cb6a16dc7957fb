"""Implementaciones in-memory para testing."""

from salon_booking.infrastructure.in_memory.booking_repo import InMemoryBookingRepo
from salon_booking.infrastructure.in_memory.catalog_repo import (
    InMemoryBranchRepo,
    InMemoryServiceRepo,
    InMemoryStaffRepo,
)
from salon_booking.infrastructure.in_memory.schedule_repo import InMemoryScheduleRepo
from salon_booking.infrastructure.in_memory.transaction_manager import (
    LockingTransactionManager,
    NoopTransactionManager,
)

InMemoryTransactionManager = LockingTransactionManager

__all__ = [
    # Repositories
    "InMemoryBookingRepo",
    "InMemoryBranchRepo",
    "InMemoryScheduleRepo",
    "InMemoryServiceRepo",
    "InMemoryStaffRepo",
    # Infrastructure
    "InMemoryTransactionManager",
    "LockingTransactionManager",
    "NoopTransactionManager",
]
