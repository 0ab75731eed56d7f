import pytest

from healthledger.errors import AlreadyGrantedError, AlreadyRevokedOrNotFoundError
from healthledger.ledger.service import HealthcareDataService
from healthledger.models import DataAccessStatus


@pytest.fixture
def strict_service(store, clock, audit_service):
    return HealthcareDataService(
        store=store, clock=clock, audit_service=audit_service, strict_transitions=True
    )


@pytest.mark.asyncio
async def test_grant_on_missing_record_is_rejected(strict_service, store):
    with pytest.raises(AlreadyRevokedOrNotFoundError):
        await strict_service.request_access(3)
    assert store.snapshot() == {}


@pytest.mark.asyncio
async def test_grant_on_revoked_record_is_rejected(strict_service):
    record_id = await strict_service.create_data("p1", "hash1")
    await strict_service.revoke_access(record_id)

    with pytest.raises(AlreadyRevokedOrNotFoundError):
        await strict_service.request_access(record_id)

    assert (await strict_service.view_admin_control(record_id)).access_granted is False
    assert await strict_service.view_all_data_status() == DataAccessStatus(
        granted=0, pending=1, revoked=1, total=1
    )


@pytest.mark.asyncio
async def test_grant_then_revoke_still_allowed(strict_service):
    record_id = await strict_service.create_data("p1", "hash1")
    await strict_service.request_access(record_id)
    await strict_service.revoke_access(record_id)

    # grant entry stays as it was
    assert (await strict_service.view_admin_control(record_id)).access_granted is True
    with pytest.raises(AlreadyGrantedError):
        await strict_service.request_access(record_id)
