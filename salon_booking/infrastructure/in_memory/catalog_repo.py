from datetime import datetime

from salon_booking.application.interfaces.catalog_repo import BranchRepo, ServiceRepo, StaffRepo
from salon_booking.application.interfaces.schedule_repo import ScheduleRepo
from salon_booking.domain.entities.branch import Branch
from salon_booking.domain.entities.service import Service
from salon_booking.domain.entities.staff import Staff
from salon_booking.domain.value_objects.time_range import TimeRange


class InMemoryServiceRepo(ServiceRepo):
    def __init__(self, services: list[Service] | None = None) -> None:
        self.services: dict[str, Service] = {s.id: s for s in services or []}

    def add(self, service: Service) -> None:
        self.services[service.id] = service

    async def find_by_id(self, service_id: str) -> Service | None:
        return self.services.get(service_id)


class InMemoryBranchRepo(BranchRepo):
    def __init__(self, branches: list[Branch] | None = None) -> None:
        self.branches: dict[str, Branch] = {b.id: b for b in branches or []}

    def add(self, branch: Branch) -> None:
        self.branches[branch.id] = branch

    async def find_by_id(self, branch_id: str) -> Branch | None:
        return self.branches.get(branch_id)


class InMemoryStaffRepo(StaffRepo):
    """
    Personal en memoria.

    Con `schedule_repo`, find_available_staff sólo retorna a quien tiene
    turno cubriendo el intervalo; sin él, a todo el personal activo. El día
    del turno se calcula en la zona horaria de la sucursal cuando
    `branch_repo` la conoce.
    """

    def __init__(
        self,
        staff: list[Staff] | None = None,
        schedule_repo: ScheduleRepo | None = None,
        branch_repo: BranchRepo | None = None,
    ) -> None:
        self.staff: dict[str, Staff] = {s.id: s for s in staff or []}
        self._schedule_repo = schedule_repo
        self._branch_repo = branch_repo

    def add(self, staff: Staff) -> None:
        self.staff[staff.id] = staff

    async def find_by_id(self, staff_id: str) -> Staff | None:
        return self.staff.get(staff_id)

    async def find_by_branch(self, branch_id: str) -> list[Staff]:
        return sorted(
            (s for s in self.staff.values() if s.branch_id == branch_id and s.is_active),
            key=lambda s: s.id,
        )

    async def find_available_staff(
        self, branch_id: str, start: datetime, duration_minutes: int
    ) -> list[Staff]:
        members = await self.find_by_branch(branch_id)
        if self._schedule_repo is None:
            return members

        day = start.date()
        if self._branch_repo is not None:
            branch = await self._branch_repo.find_by_id(branch_id)
            if branch is not None:
                day = branch.to_local(start).date()

        wanted = TimeRange.from_duration(start, duration_minutes)
        available = []
        for member in members:
            working = await self._schedule_repo.get_working_interval(member.id, day)
            if working is not None and working.contains(wanted):
                available.append(member)
        return available
