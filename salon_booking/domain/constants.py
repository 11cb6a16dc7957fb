"""Constantes del dominio de reservas."""

from datetime import timedelta

# Ventanas de negocio
RESCHEDULE_MIN_NOTICE = timedelta(hours=24)
CANCELLATION_MIN_NOTICE = timedelta(hours=2)
DEFAULT_MIN_BOOKING_NOTICE_HOURS = 2.0

# Granularidad de la agenda
SLOT_GRANULARITY_MINUTES = 30

DEFAULT_CURRENCY = "USD"
