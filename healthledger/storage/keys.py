"""
Typed keys addressing the ledger's entries in a store.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class KeyNamespace(str, Enum):
    ALL_DATA = "ALL_DATA"  # Aggregate counters
    COUNT_DATA = "C_DATA"  # Raw record sequence counter
    DATA = "Data"
    ADMIN_CONTROL = "AdminControl"


@dataclass(frozen=True)
class StoreKey:
    namespace: KeyNamespace
    record_id: Optional[int] = None

    def __str__(self) -> str:
        if self.record_id is None:
            return self.namespace.value
        return f"{self.namespace.value}:{self.record_id}"


ALL_DATA = StoreKey(KeyNamespace.ALL_DATA)
COUNT_DATA = StoreKey(KeyNamespace.COUNT_DATA)


def data_key(record_id: int) -> StoreKey:
    return StoreKey(KeyNamespace.DATA, record_id)


def admin_control_key(record_id: int) -> StoreKey:
    return StoreKey(KeyNamespace.ADMIN_CONTROL, record_id)
