"""
Key-value stores holding ledger state.

This module provides:
- Typed keys for counters, health records and admin-control entries
- Transactional access with buffered, all-or-nothing commits
- In-memory, JSON-file and SQL backends
"""

from .base import StoreBase, StoreTransaction
from .keys import ALL_DATA, COUNT_DATA, KeyNamespace, StoreKey, admin_control_key, data_key
from .memory import InMemoryStore
from .filesystem import FilesystemStore
from .sql import SQLStore

__all__ = [
    "StoreBase",
    "StoreTransaction",
    "StoreKey",
    "KeyNamespace",
    "ALL_DATA",
    "COUNT_DATA",
    "data_key",
    "admin_control_key",
    "InMemoryStore",
    "FilesystemStore",
    "SQLStore",
]
