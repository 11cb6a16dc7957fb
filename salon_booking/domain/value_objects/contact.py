"""Value Objects de contacto: Email y PhoneNumber."""

import re
from dataclasses import dataclass

from salon_booking.domain.errors import InvalidEmailError, InvalidPhoneError

EMAIL_REGEX = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_REGEX = re.compile(r"^\+?[\d\s\-()]{10,15}$")
PHONE_SEPARATORS = re.compile(r"[\s\-()]")


@dataclass(frozen=True)
class Email:
    """Email normalizado a minúsculas."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not EMAIL_REGEX.match(self.value):
            raise InvalidEmailError(self.value)
        object.__setattr__(self, "value", self.value.lower())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PhoneNumber:
    """
    Teléfono sin separadores.

    Acepta entre 10 y 15 caracteres (dígitos, espacios, guiones, paréntesis)
    con un '+' inicial opcional.
    """

    value: str
    country: str | None = None

    def __post_init__(self) -> None:
        if not self.value or not PHONE_REGEX.match(self.value):
            raise InvalidPhoneError(self.value)
        object.__setattr__(self, "value", PHONE_SEPARATORS.sub("", self.value))

    def __str__(self) -> str:
        return self.value
