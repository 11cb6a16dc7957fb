"""Estrategias de descuento para el cálculo de precios."""

from abc import ABC, abstractmethod
from decimal import Decimal

from salon_booking.domain.entities.service import Service
from salon_booking.domain.value_objects.money import Money


class DiscountStrategy(ABC):
    """Puerto para reglas de descuento; el resultado nunca supera el subtotal."""

    @abstractmethod
    def calculate(
        self,
        subtotal: Money,
        services: list[Service],
        customer_id: str,
        discount_codes: list[str],
    ) -> Money:
        raise NotImplementedError


class NoDiscount(DiscountStrategy):
    def calculate(
        self,
        subtotal: Money,
        services: list[Service],
        customer_id: str,
        discount_codes: list[str],
    ) -> Money:
        return Money.zero(subtotal.currency_code)


class PercentageCodeDiscount(DiscountStrategy):
    """
    Descuento porcentual por código.

    Los códigos desconocidos se ignoran; los porcentajes se suman y el total
    se limita al subtotal.
    """

    def __init__(self, percentages: dict[str, Decimal | int | float]) -> None:
        self._percentages = {code.upper(): Decimal(str(pct)) for code, pct in percentages.items()}

    def calculate(
        self,
        subtotal: Money,
        services: list[Service],
        customer_id: str,
        discount_codes: list[str],
    ) -> Money:
        percent = sum(
            (self._percentages.get(code.upper(), Decimal("0")) for code in discount_codes),
            Decimal("0"),
        )
        percent = min(percent, Decimal("100"))
        return subtotal.multiply(percent / Decimal("100"))
