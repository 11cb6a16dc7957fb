"""Servicios de aplicación: cálculo de horarios, disponibilidad y orquestación de reservas."""

from salon_booking.application.services.availability_service import ScheduleAvailabilityService
from salon_booking.application.services.booking_domain_service import BookingDomainService
from salon_booking.application.services.discounts import (
    DiscountStrategy,
    NoDiscount,
    PercentageCodeDiscount,
)
from salon_booking.application.services.slot_calculator import SlotCalculator

__all__ = [
    "BookingDomainService",
    "DiscountStrategy",
    "NoDiscount",
    "PercentageCodeDiscount",
    "ScheduleAvailabilityService",
    "SlotCalculator",
]
