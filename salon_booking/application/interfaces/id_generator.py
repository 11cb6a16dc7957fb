"""Interface IdGenerator - Puerto para generación de identificadores únicos."""

import uuid
from abc import ABC, abstractmethod


class IdGenerator(ABC):
    """
    Puerto para generación de identificadores.

    Permite inyectar implementaciones fake para testing determinista.
    """

    @abstractmethod
    def new_booking_id(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def new_line_item_id(self) -> str:
        """Identificador de una línea de servicio (BookingService)."""
        raise NotImplementedError


class UUIDIdGenerator(IdGenerator):
    """Implementación real basada en UUID v4."""

    def new_booking_id(self) -> str:
        return str(uuid.uuid4())

    def new_line_item_id(self) -> str:
        return str(uuid.uuid4())


class FakeIdGenerator(IdGenerator):
    """
    Implementación fake para testing.

    Genera valores predecibles: BK-0001, BK-0002, ... y LI-0001, ...
    """

    def __init__(self, booking_prefix: str = "BK", line_prefix: str = "LI"):
        self._booking_prefix = booking_prefix
        self._line_prefix = line_prefix
        self._booking_counter = 0
        self._line_counter = 0

    def new_booking_id(self) -> str:
        self._booking_counter += 1
        return f"{self._booking_prefix}-{self._booking_counter:04d}"

    def new_line_item_id(self) -> str:
        self._line_counter += 1
        return f"{self._line_prefix}-{self._line_counter:04d}"

    def reset(self) -> None:
        """Reinicia todos los contadores."""
        self._booking_counter = 0
        self._line_counter = 0
