"""Interfaces de catálogo: servicios, personal y sucursales."""

from abc import ABC, abstractmethod
from datetime import datetime

from salon_booking.domain.entities.branch import Branch
from salon_booking.domain.entities.service import Service
from salon_booking.domain.entities.staff import Staff


class ServiceRepo(ABC):
    @abstractmethod
    async def find_by_id(self, service_id: str) -> Service | None:
        raise NotImplementedError


class StaffRepo(ABC):
    @abstractmethod
    async def find_by_id(self, staff_id: str) -> Staff | None:
        raise NotImplementedError

    @abstractmethod
    async def find_by_branch(self, branch_id: str) -> list[Staff]:
        """Personal activo de la sucursal, ordenado por id."""
        raise NotImplementedError

    @abstractmethod
    async def find_available_staff(
        self, branch_id: str, start: datetime, duration_minutes: int
    ) -> list[Staff]:
        raise NotImplementedError


class BranchRepo(ABC):
    @abstractmethod
    async def find_by_id(self, branch_id: str) -> Branch | None:
        raise NotImplementedError
