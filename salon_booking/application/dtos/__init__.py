"""DTOs de la capa de aplicación."""

from salon_booking.application.dtos.booking_dto import (
    BookingConflict,
    BookingOutcome,
    BookingPricing,
    CreateBookingCommand,
    RequestedService,
    ServicePricing,
    StaffAssignment,
    TimeSlot,
)

__all__ = [
    "BookingConflict",
    "BookingOutcome",
    "BookingPricing",
    "CreateBookingCommand",
    "RequestedService",
    "ServicePricing",
    "StaffAssignment",
    "TimeSlot",
]
