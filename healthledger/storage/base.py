"""
Store abstraction shared by every ledger backend.

Providers only know how to load a single entry and how to commit a batch of
entries. Atomicity of an operation comes from ``StoreBase.transaction``: one
caller at a time holds the lock, writes are staged on the transaction, and
the batch is committed only when the block exits cleanly.
"""

import asyncio
import copy
import logging
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional, Union

from .keys import StoreKey

logger = logging.getLogger(__name__)

KeyLike = Union[StoreKey, str]


class StoreTransaction:
    """Read-your-writes view over a store with buffered writes."""

    def __init__(self, store: "StoreBase"):
        self._store = store
        self.writes: Dict[str, Any] = {}

    async def get(self, key: KeyLike) -> Optional[Any]:
        name = str(key)
        if name in self.writes:
            return copy.deepcopy(self.writes[name])
        return await self._store._load(name)

    def set(self, key: KeyLike, value: Any) -> None:
        self.writes[str(key)] = copy.deepcopy(value)


class StoreBase(ABC):
    """Abstract base class for key-value stores holding ledger state."""

    def __init__(self) -> None:
        self._lock = asyncio.Lock()

    @abstractmethod
    async def _load(self, key: str) -> Optional[Any]:
        """Return the stored value for key, or None when absent."""
        pass

    @abstractmethod
    async def _commit(self, writes: Dict[str, Any]) -> None:
        """Persist a batch of entries as one unit."""
        pass

    async def _begin(self) -> None:
        """Called under the lock before a transaction's first read."""

    def _end(self) -> None:
        """Called under the lock once a transaction commits or aborts."""

    async def initialize(self) -> None:
        """Prepare backing resources. Safe to call more than once."""

    async def close(self) -> None:
        """Release backing resources."""

    async def get(self, key: KeyLike) -> Optional[Any]:
        return await self._load(str(key))

    async def set(self, key: KeyLike, value: Any) -> None:
        async with self.transaction() as txn:
            txn.set(key, value)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[StoreTransaction]:
        async with self._lock:
            await self._begin()
            try:
                txn = StoreTransaction(self)
                yield txn
                if txn.writes:
                    await self._commit(txn.writes)
                    logger.debug("Committed %d entries: %s", len(txn.writes), sorted(txn.writes))
            finally:
                self._end()
