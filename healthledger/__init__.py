"""
Healthcare data ledger.

Patients register opaque references to healthcare data, providers request
access, patients revoke it; aggregate counters track every transition.
"""

__version__ = "1.0.0"

from .clock import ManualClock, SystemClock
from .config import LedgerConfig, StoreProviderKind
from .errors import (
    AlreadyGrantedError,
    AlreadyRevokedOrNotFoundError,
    InvalidStateError,
    LedgerError,
)
from .ledger import HealthcareDataService
from .main import build_service, build_store, configure_logging
from .models import AccessGrant, CounterConsistency, DataAccessStatus, HealthRecord

__all__ = [
    "HealthcareDataService",
    "HealthRecord",
    "AccessGrant",
    "DataAccessStatus",
    "CounterConsistency",
    "LedgerError",
    "InvalidStateError",
    "AlreadyRevokedOrNotFoundError",
    "AlreadyGrantedError",
    "LedgerConfig",
    "StoreProviderKind",
    "SystemClock",
    "ManualClock",
    "build_service",
    "build_store",
    "configure_logging",
]
