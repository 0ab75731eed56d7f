"""
Access-control state machine for the healthcare data ledger.
"""

from .access import AccessController
from .counters import AggregateCounters
from .records import RecordLedger
from .service import HealthcareDataService

__all__ = [
    "AccessController",
    "AggregateCounters",
    "RecordLedger",
    "HealthcareDataService",
]
