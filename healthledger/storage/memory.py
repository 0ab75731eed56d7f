"""
In-process store backed by a dictionary.
"""

import copy
from typing import Any, Dict, Optional

from .base import StoreBase


class InMemoryStore(StoreBase):
    """Dictionary store; state lives as long as the instance."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        super().__init__()
        self._entries: Dict[str, Any] = copy.deepcopy(initial) if initial else {}

    async def _load(self, key: str) -> Optional[Any]:
        return copy.deepcopy(self._entries.get(key))

    async def _commit(self, writes: Dict[str, Any]) -> None:
        self._entries.update(copy.deepcopy(writes))

    def snapshot(self) -> Dict[str, Any]:
        """Copy of every stored entry, keyed by its string key."""
        return copy.deepcopy(self._entries)
