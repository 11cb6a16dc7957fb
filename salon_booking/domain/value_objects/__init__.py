"""Value Objects del dominio de reservas."""

from salon_booking.domain.value_objects.contact import Email, PhoneNumber
from salon_booking.domain.value_objects.money import Balance, Money
from salon_booking.domain.value_objects.operating_hours import DayHours, OperatingHours, parse_hhmm
from salon_booking.domain.value_objects.time_range import TimeRange, intervals_overlap

__all__ = [
    "Balance",
    "DayHours",
    "Email",
    "Money",
    "OperatingHours",
    "PhoneNumber",
    "TimeRange",
    "intervals_overlap",
    "parse_hhmm",
]
