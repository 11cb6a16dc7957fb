"""
Configuración de pytest y fixtures compartidas.

Provee:
- Reloj y generador de ids deterministas
- Catálogo de prueba (sucursal, personal, servicios, turnos)
- El motor de reservas armado sobre repositorios en memoria
"""

import pytest

from salon_booking.application.interfaces.clock import FakeClock
from salon_booking.application.interfaces.id_generator import FakeIdGenerator
from salon_booking.bootstrap import InMemoryBundle, build_in_memory_bundle, default_operating_hours
from salon_booking.config import Settings
from salon_booking.domain.entities.branch import Branch
from salon_booking.domain.entities.service import Service
from salon_booking.domain.entities.staff import Staff, StaffRole
from tests.helpers import BRANCH_ID, NOW, usd


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(NOW)


@pytest.fixture
def id_generator() -> FakeIdGenerator:
    return FakeIdGenerator()


@pytest.fixture
def branch(settings: Settings) -> Branch:
    return Branch(id=BRANCH_ID, name="Centro", operating_hours=default_operating_hours(settings))


@pytest.fixture
def staff_members() -> list[Staff]:
    return [
        Staff(id="ST-1", branch_id=BRANCH_ID, name="Ana", specialties=frozenset({"hair"})),
        Staff(id="ST-2", branch_id=BRANCH_ID, name="Beto", specialties=frozenset({"nails"})),
        Staff(id="ST-3", branch_id=BRANCH_ID, name="Carla", role=StaffRole.MANAGER),
    ]


@pytest.fixture
def services() -> list[Service]:
    return [
        Service(id="SV-CUT", name="Corte", category="hair", duration_minutes=60, price=usd(100)),
        Service(id="SV-MANI", name="Manicure", category="nails", duration_minutes=30, price=usd(40)),
        Service(
            id="SV-COLOR",
            name="Color",
            category="hair",
            duration_minutes=90,
            price=usd(150),
            buffer_minutes=30,
            requires_deposit=True,
            deposit_amount=usd(50),
        ),
        Service(
            id="SV-OLD",
            name="Servicio retirado",
            category="hair",
            duration_minutes=30,
            price=usd(20),
            is_active=False,
        ),
    ]


@pytest.fixture
def bundle(settings, clock, id_generator, branch, staff_members, services) -> InMemoryBundle:
    """Motor en memoria con catálogo cargado y turnos iguales al horario de la sucursal."""
    bundle = build_in_memory_bundle(settings=settings, clock=clock, id_generator=id_generator)
    bundle.branch_repo.add(branch)
    for service in services:
        bundle.service_repo.add(service)
    for member in staff_members:
        bundle.staff_repo.add(member)
        bundle.schedule_repo.set_weekly_shift(member.id, branch.operating_hours, branch.timezone)
    return bundle


@pytest.fixture
def booking_service(bundle: InMemoryBundle):
    return bundle.booking_service
