"""Entidad Customer - identidad y preferencias del cliente."""

from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Any

from salon_booking.domain.value_objects.contact import Email, PhoneNumber


class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"
    PREFER_NOT_TO_SAY = "PREFER_NOT_TO_SAY"


@dataclass(frozen=True)
class Customer:
    """
    Cliente del salón.

    Independiente del ciclo de vida de las reservas: una reserva sólo
    guarda su customer_id.
    """

    id: str
    email: Email
    name: str
    phone: PhoneNumber
    date_of_birth: date | None = None
    gender: Gender | None = None
    preferences: dict[str, Any] = field(default_factory=dict, hash=False)
    notes: str | None = None
    tags: tuple[str, ...] = ()
    is_vip: bool = False

    def update_contact_info(self, email: Email | None = None, phone: PhoneNumber | None = None) -> "Customer":
        return replace(self, email=email or self.email, phone=phone or self.phone)

    def update_preferences(self, preferences: dict[str, Any]) -> "Customer":
        """Combina las preferencias nuevas con las existentes."""
        return replace(self, preferences={**self.preferences, **preferences})

    def add_tag(self, tag: str) -> "Customer":
        if tag in self.tags:
            return self
        return replace(self, tags=self.tags + (tag,))

    def remove_tag(self, tag: str) -> "Customer":
        return replace(self, tags=tuple(t for t in self.tags if t != tag))

    def promote_to_vip(self) -> "Customer":
        return replace(self, is_vip=True)

    def update_notes(self, notes: str) -> "Customer":
        return replace(self, notes=notes)

    def age(self, on: date) -> int | None:
        if self.date_of_birth is None:
            return None
        born = self.date_of_birth
        years = on.year - born.year
        if (on.month, on.day) < (born.month, born.day):
            years -= 1
        return years
