"""Value Object Money - representa un valor monetario con su moneda."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from salon_booking.domain.constants import DEFAULT_CURRENCY
from salon_booking.domain.errors import (
    CurrencyMismatchError,
    DivisionByZeroError,
    InvalidCurrencyError,
    InvalidMoneyError,
)

CENTS = Decimal("0.01")


def _quantize(amount: Decimal) -> Decimal:
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Money:
    """
    Value Object inmutable que representa un monto monetario.

    Attributes:
        amount: Monto decimal, redondeado a 2 decimales y nunca negativo.
        currency_code: Código ISO 4217 de la moneda (ej: USD, MXN, EUR).
    """

    amount: Decimal
    currency_code: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        amount = self.amount
        if not isinstance(amount, Decimal):
            amount = Decimal(str(amount))
        object.__setattr__(self, "amount", _quantize(amount))

        if not isinstance(self.currency_code, str) or len(self.currency_code) != 3 or not self.currency_code.isalpha():
            raise InvalidCurrencyError(str(self.currency_code))
        object.__setattr__(self, "currency_code", self.currency_code.upper())

        if self.amount < 0:
            raise InvalidMoneyError(f"amount no puede ser negativo: {self.amount}")

    def _ensure_same_currency(self, other: "Money") -> None:
        if not isinstance(other, Money):
            raise TypeError(f"Se esperaba Money, se recibió {type(other)}")
        if self.currency_code != other.currency_code:
            raise CurrencyMismatchError(self.currency_code, other.currency_code)

    def add(self, other: "Money") -> "Money":
        self._ensure_same_currency(other)
        return Money(amount=self.amount + other.amount, currency_code=self.currency_code)

    def subtract(self, other: "Money") -> "Money":
        """Resta otro monto; falla con INVALID_AMOUNT si el resultado es negativo."""
        self._ensure_same_currency(other)
        return Money(amount=self.amount - other.amount, currency_code=self.currency_code)

    def multiply(self, factor: Decimal | int | float) -> "Money":
        return Money(amount=self.amount * Decimal(str(factor)), currency_code=self.currency_code)

    def divide(self, divisor: Decimal | int | float) -> "Money":
        divisor = Decimal(str(divisor))
        if divisor == 0:
            raise DivisionByZeroError()
        return Money(amount=self.amount / divisor, currency_code=self.currency_code)

    def difference(self, other: "Money") -> "Balance":
        """Resta con signo: el resultado puede ser negativo."""
        self._ensure_same_currency(other)
        return Balance(amount=self.amount - other.amount, currency_code=self.currency_code)

    def is_greater_than(self, other: "Money") -> bool:
        self._ensure_same_currency(other)
        return self.amount > other.amount

    def is_less_than(self, other: "Money") -> bool:
        self._ensure_same_currency(other)
        return self.amount < other.amount

    def is_zero(self) -> bool:
        return self.amount == Decimal("0")

    __add__ = add
    __sub__ = subtract

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency_code}"

    @classmethod
    def zero(cls, currency_code: str = DEFAULT_CURRENCY) -> "Money":
        """Crea un Money con valor cero."""
        return cls(amount=Decimal("0"), currency_code=currency_code)

    @classmethod
    def from_cents(cls, cents: int, currency_code: str) -> "Money":
        return cls(amount=Decimal(cents) / 100, currency_code=currency_code)

    def to_cents(self) -> int:
        return int(self.amount * 100)


@dataclass(frozen=True)
class Balance:
    """
    Saldo con signo en una moneda.

    A diferencia de Money puede ser negativo (ej: depósito mayor al total).
    """

    amount: Decimal
    currency_code: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", _quantize(Decimal(str(self.amount))))

    @property
    def is_overpaid(self) -> bool:
        return self.amount < 0

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency_code}"
