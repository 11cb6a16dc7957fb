"""
Capa de Dominio - Motor de reservas y disponibilidad.

Esta capa contiene la lógica de negocio pura, sin dependencias de frameworks.

Estructura:
- entities/: Agregado Booking, líneas de servicio, personal, clientes, sucursales
- value_objects/: Objetos de valor inmutables (Money, TimeRange, OperatingHours, ...)
- events.py: Eventos de dominio retornados por el agregado
- errors.py: Excepciones específicas del dominio
- constants.py: Constantes del dominio
"""

from salon_booking.domain.entities import (
    Booking,
    BookingService,
    BookingSource,
    BookingStatus,
    Branch,
    BranchSettings,
    Customer,
    Service,
    ServiceStatus,
    Staff,
    StaffRole,
)
from salon_booking.domain.errors import DomainError
from salon_booking.domain.events import (
    BookingCancelled,
    BookingConfirmed,
    BookingCreated,
    BookingMarkedNoShow,
    BookingRescheduled,
    DomainEvent,
)
from salon_booking.domain.value_objects import (
    Balance,
    DayHours,
    Email,
    Money,
    OperatingHours,
    PhoneNumber,
    TimeRange,
)

__all__ = [
    # Entities
    "Booking",
    "BookingService",
    "BookingSource",
    "BookingStatus",
    "Branch",
    "BranchSettings",
    "Customer",
    "Service",
    "ServiceStatus",
    "Staff",
    "StaffRole",
    # Events
    "BookingCancelled",
    "BookingConfirmed",
    "BookingCreated",
    "BookingMarkedNoShow",
    "BookingRescheduled",
    "DomainEvent",
    # Value Objects
    "Balance",
    "DayHours",
    "Email",
    "Money",
    "OperatingHours",
    "PhoneNumber",
    "TimeRange",
    # Errors
    "DomainError",
]
