"""Entidades del dominio de reservas."""

from salon_booking.domain.entities.booking import (
    TERMINAL_STATUSES,
    Booking,
    BookingSource,
    BookingStatus,
)
from salon_booking.domain.entities.booking_service import BookingService, ServiceStatus
from salon_booking.domain.entities.branch import Branch, BranchSettings
from salon_booking.domain.entities.customer import Customer, Gender
from salon_booking.domain.entities.service import Service
from salon_booking.domain.entities.staff import Staff, StaffRole

__all__ = [
    # Booking
    "Booking",
    "BookingStatus",
    "BookingSource",
    "TERMINAL_STATUSES",
    # BookingService
    "BookingService",
    "ServiceStatus",
    # Catálogo
    "Branch",
    "BranchSettings",
    "Service",
    # Personas
    "Staff",
    "StaffRole",
    "Customer",
    "Gender",
]
