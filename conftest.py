import pytest

from healthledger.audit.service import AuditService
from healthledger.clock import ManualClock
from healthledger.ledger.service import HealthcareDataService
from healthledger.storage import InMemoryStore


@pytest.fixture
def clock():
    return ManualClock(start=1_700_000_000)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def audit_service():
    return AuditService()


@pytest.fixture
def service(store, clock, audit_service):
    return HealthcareDataService(store=store, clock=clock, audit_service=audit_service)
