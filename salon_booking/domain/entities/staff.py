"""Entidad Staff - profesional de una sucursal y sus capacidades."""

from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum

from salon_booking.domain.errors import InvalidCommissionRateError
from salon_booking.domain.value_objects.contact import Email, PhoneNumber
from salon_booking.domain.value_objects.money import Money


class StaffRole(str, Enum):
    """Roles del personal."""

    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    STYLIST = "STYLIST"
    RECEPTIONIST = "RECEPTIONIST"
    ASSISTANT = "ASSISTANT"


ELEVATED_ROLES = (StaffRole.ADMIN, StaffRole.MANAGER)


def _check_commission_rate(rate: float) -> None:
    if rate < 0 or rate > 100:
        raise InvalidCommissionRateError(rate)


@dataclass(frozen=True)
class Staff:
    """
    Profesional que atiende servicios en una sucursal.

    `specialties` son etiquetas de categoría de servicio (ej: "hair", "nails").
    ADMIN y MANAGER pueden realizar cualquier categoría.
    """

    id: str
    branch_id: str
    name: str
    email: Email | None = None
    phone: PhoneNumber | None = None
    role: StaffRole = StaffRole.STYLIST
    specialties: frozenset[str] = frozenset()
    commission_rate: float = 0.0
    is_active: bool = True

    def __post_init__(self) -> None:
        _check_commission_rate(self.commission_rate)
        if not isinstance(self.specialties, frozenset):
            object.__setattr__(self, "specialties", frozenset(self.specialties))

    @property
    def is_elevated(self) -> bool:
        return self.role in ELEVATED_ROLES

    def can_perform_service(self, category: str) -> bool:
        if not self.is_active:
            return False
        if self.is_elevated:
            return True
        return category in self.specialties

    def is_specialist_in(self, category: str) -> bool:
        return self.is_active and category in self.specialties

    def calculate_commission(self, amount: Money) -> Money:
        return amount.multiply(Decimal(str(self.commission_rate)) / 100)

    def update_commission_rate(self, rate: float) -> "Staff":
        _check_commission_rate(rate)
        return replace(self, commission_rate=rate)

    def add_specialty(self, specialty: str) -> "Staff":
        return replace(self, specialties=self.specialties | {specialty})

    def remove_specialty(self, specialty: str) -> "Staff":
        return replace(self, specialties=self.specialties - {specialty})

    def activate(self) -> "Staff":
        return replace(self, is_active=True)

    def deactivate(self) -> "Staff":
        return replace(self, is_active=False)
