import asyncio
from contextlib import asynccontextmanager

from salon_booking.application.interfaces.transaction_manager import TransactionManager


class NoopTransactionManager(TransactionManager):
    @asynccontextmanager
    async def start(self):
        yield


class LockingTransactionManager(TransactionManager):
    """Serializa las unidades de trabajo; no hace rollback."""

    def __init__(self) -> None:
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def start(self):
        async with self._lock:
            yield
