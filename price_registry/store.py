"""
In-memory price table guarded by an asyncio reader/writer lock.

Notes
-----
* All accesses happen on the event loop, so the lock only has to order
  coroutines, not OS threads.
* Readers (list/get) share the lock. Writers (insert/replace/remove) hold
  it exclusively. A waiting writer stops new readers from entering.
* Nothing is persisted: the table lives and dies with the app instance.
"""

import asyncio
import contextlib
import logging
from typing import Dict, List, Optional
from uuid import UUID

logger = logging.getLogger("price_registry.store")


class ReadWriteLock:
    """Many readers or one writer, built on a single ``asyncio.Condition``."""

    def __init__(self):
        self._cond = asyncio.Condition()
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @property
    def readers(self) -> int:
        return self._readers

    @property
    def writer_active(self) -> bool:
        return self._writer

    @contextlib.asynccontextmanager
    async def read(self):
        async with self._cond:
            await self._cond.wait_for(
                lambda: not self._writer and not self._writers_waiting
            )
            self._readers += 1
        try:
            yield
        finally:
            # count drops before any await so a cancelled release cannot leak it
            self._readers -= 1
            if not self._readers:
                await asyncio.shield(self._wake_waiters())

    @contextlib.asynccontextmanager
    async def write(self):
        async with self._cond:
            self._writers_waiting += 1
            try:
                await self._cond.wait_for(
                    lambda: not self._writer and not self._readers
                )
            finally:
                self._writers_waiting -= 1
                # readers parked behind this writer must re-check if it gave up
                self._cond.notify_all()
            self._writer = True
        try:
            yield
        finally:
            self._writer = False
            await asyncio.shield(self._wake_waiters())

    async def _wake_waiters(self):
        async with self._cond:
            self._cond.notify_all()


class PriceTable:
    """
    Mapping of identifier -> price shared by every request.

    Each public coroutine takes the lock exactly once, so one call is one
    atomic step against the table.
    """

    _prices: Dict[UUID, int]

    def __init__(self, prices: Optional[Dict[UUID, int]] = None):
        self._prices = dict(prices or {})
        self._lock = ReadWriteLock()

    @property
    def lock(self) -> ReadWriteLock:
        return self._lock

    def __len__(self) -> int:
        return len(self._prices)

    # ------------------------------------------------------------------ #
    # readers                                                            #
    # ------------------------------------------------------------------ #
    async def values(self) -> List[int]:
        async with self._lock.read():
            return list(self._prices.values())

    async def get(self, price_id: UUID) -> Optional[int]:
        async with self._lock.read():
            return self._prices.get(price_id)

    # ------------------------------------------------------------------ #
    # writers                                                            #
    # ------------------------------------------------------------------ #
    async def insert(self, price_id: UUID, price: int) -> None:
        async with self._lock.write():
            self._prices[price_id] = price
            logger.debug(f"Inserted {price_id}; table size={len(self._prices)}")

    async def replace(self, price_id: UUID, price: int) -> bool:
        """Overwrite an existing entry. Returns False if *price_id* is absent."""
        async with self._lock.write():
            if price_id not in self._prices:
                return False
            self._prices[price_id] = price
            return True

    async def remove(self, price_id: UUID) -> bool:
        """Erase an entry. Returns False if *price_id* is absent."""
        async with self._lock.write():
            if self._prices.pop(price_id, None) is None:
                return False
            logger.debug(f"Removed {price_id}; table size={len(self._prices)}")
            return True
