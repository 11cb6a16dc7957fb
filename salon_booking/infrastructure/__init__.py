"""
Capa de Infraestructura - Motor de reservas.

Implementaciones concretas de los puertos de la aplicación.

Estructura:
- db/: Tablas SQLAlchemy, engine, transacciones y repositorio SQL de reservas
- in_memory/: Repositorios en memoria para desarrollo y testing
"""

from salon_booking.infrastructure.db.repositories.booking_repo_sql import BookingRepoSQL
from salon_booking.infrastructure.db.transaction_manager import SQLAlchemyTransactionManager
from salon_booking.infrastructure.in_memory import (
    InMemoryBookingRepo,
    InMemoryBranchRepo,
    InMemoryScheduleRepo,
    InMemoryServiceRepo,
    InMemoryStaffRepo,
    InMemoryTransactionManager,
)

__all__ = [
    # Database
    "BookingRepoSQL",
    "SQLAlchemyTransactionManager",
    # In-Memory Implementations
    "InMemoryBookingRepo",
    "InMemoryBranchRepo",
    "InMemoryScheduleRepo",
    "InMemoryServiceRepo",
    "InMemoryStaffRepo",
    "InMemoryTransactionManager",
]
