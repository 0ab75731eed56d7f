"""
Behaviour of the public ledger operations against the in-memory store.
"""

import pytest

from healthledger.errors import (
    AlreadyGrantedError,
    AlreadyRevokedOrNotFoundError,
    InvalidStateError,
)
from healthledger.models import AccessGrant, DataAccessStatus, HealthRecord
from healthledger.storage import COUNT_DATA, data_key


class TestViews:
    @pytest.mark.asyncio
    async def test_missing_record_returns_sentinel(self, service):
        record = await service.view_data(42)
        assert record == HealthRecord(
            record_id=0,
            patient_id="Not Found",
            data_hash="Not Found",
            timestamp=0,
            is_revoked=True,
        )

    @pytest.mark.asyncio
    async def test_missing_grant_returns_default(self, service):
        grant = await service.view_admin_control(7)
        assert grant == AccessGrant(record_id=0, access_granted=False)

    @pytest.mark.asyncio
    async def test_uninitialized_counters_are_zero(self, service):
        assert await service.view_all_data_status() == DataAccessStatus(
            granted=0, pending=0, revoked=0, total=0
        )

    @pytest.mark.asyncio
    async def test_views_are_idempotent(self, service):
        record_id = await service.create_data("p1", "hash1")
        await service.request_access(record_id)

        first = (
            await service.view_data(record_id),
            await service.view_admin_control(record_id),
            await service.view_all_data_status(),
        )
        second = (
            await service.view_data(record_id),
            await service.view_admin_control(record_id),
            await service.view_all_data_status(),
        )
        assert first == second

    @pytest.mark.asyncio
    async def test_views_do_not_write(self, service, store):
        await service.view_data(1)
        await service.view_admin_control(1)
        await service.view_all_data_status()
        assert store.snapshot() == {}


class TestCreateData:
    @pytest.mark.asyncio
    async def test_create_stores_record_and_counts_it(self, service, clock):
        clock.set(1_700_000_123)
        record_id = await service.create_data("p1", "hash1")

        assert record_id == 1
        record = await service.view_data(record_id)
        assert record.patient_id == "p1"
        assert record.data_hash == "hash1"
        assert record.timestamp == 1_700_000_123
        assert record.is_revoked is False

        status = await service.view_all_data_status()
        assert status.total == 1
        assert status.pending == 1

    @pytest.mark.asyncio
    async def test_ids_are_sequential(self, service, store):
        ids = [await service.create_data(f"p{i}", f"h{i}") for i in range(3)]
        assert ids == [1, 2, 3]
        assert await store.get(COUNT_DATA) == 3

    @pytest.mark.asyncio
    async def test_create_after_revoke_keeps_counting(self, service):
        await service.create_data("p1", "h1")
        await service.revoke_access(1)
        assert await service.create_data("p2", "h2") == 2

    @pytest.mark.asyncio
    async def test_active_record_in_next_slot_blocks_create(self, service, store):
        active = HealthRecord(
            record_id=1, patient_id="p0", data_hash="h0", timestamp=5, is_revoked=False
        )
        await store.set(data_key(1), active.model_dump())

        with pytest.raises(InvalidStateError) as exc_info:
            await service.create_data("p1", "h1")

        assert exc_info.value.code == "invalid_state"
        assert await service.view_data(1) == active
        assert await service.view_all_data_status() == DataAccessStatus()
        assert await store.get(COUNT_DATA) is None

    @pytest.mark.asyncio
    async def test_revoked_record_in_next_slot_allows_create(self, service, store):
        stale = HealthRecord(
            record_id=1, patient_id="p0", data_hash="h0", timestamp=5, is_revoked=True
        )
        await store.set(data_key(1), stale.model_dump())

        assert await service.create_data("p1", "h1") == 1
        assert (await service.view_data(1)).patient_id == "p1"

    @pytest.mark.asyncio
    async def test_rejects_non_string_patient_id(self, service):
        with pytest.raises(ValueError):
            await service.create_data(123, "h1")


class TestRevokeAccess:
    @pytest.mark.asyncio
    async def test_revoke_marks_record_and_counts(self, service):
        record_id = await service.create_data("p1", "hash1")
        await service.revoke_access(record_id)

        assert (await service.view_data(record_id)).is_revoked is True
        status = await service.view_all_data_status()
        assert status.revoked == 1
        # pending is left as is on revoke
        assert status.pending == 1

    @pytest.mark.asyncio
    async def test_second_revoke_fails_without_changes(self, service, store):
        record_id = await service.create_data("p1", "hash1")
        await service.revoke_access(record_id)
        before = store.snapshot()

        with pytest.raises(AlreadyRevokedOrNotFoundError):
            await service.revoke_access(record_id)

        assert store.snapshot() == before

    @pytest.mark.asyncio
    async def test_revoke_unknown_record_fails(self, service, store):
        with pytest.raises(AlreadyRevokedOrNotFoundError) as exc_info:
            await service.revoke_access(999)
        assert exc_info.value.record_id == 999
        assert store.snapshot() == {}

    @pytest.mark.asyncio
    async def test_rejects_negative_record_id(self, service):
        with pytest.raises(ValueError):
            await service.revoke_access(-1)


class TestRequestAccess:
    @pytest.mark.asyncio
    async def test_grant_moves_pending_to_granted(self, service):
        record_id = await service.create_data("p1", "hash1")
        await service.request_access(record_id)

        grant = await service.view_admin_control(record_id)
        assert grant == AccessGrant(record_id=record_id, access_granted=True)
        status = await service.view_all_data_status()
        assert status.granted == 1
        assert status.pending == 0

    @pytest.mark.asyncio
    async def test_second_grant_fails_without_changes(self, service, store):
        record_id = await service.create_data("p1", "hash1")
        await service.request_access(record_id)
        before = store.snapshot()

        with pytest.raises(AlreadyGrantedError) as exc_info:
            await service.request_access(record_id)

        assert exc_info.value.code == "already_granted"
        assert store.snapshot() == before

    @pytest.mark.asyncio
    async def test_grant_without_pending_goes_negative(self, service):
        await service.request_access(5)

        status = await service.view_all_data_status()
        assert status.granted == 1
        assert status.pending == -1

        report = await service.check_consistency()
        assert report.negative_counters == ["pending"]
        assert not report.is_consistent


class TestScenarios:
    @pytest.mark.asyncio
    async def test_create_grant_revoke(self, service):
        record_id = await service.create_data("p1", "hash1")
        assert record_id == 1
        status = await service.view_all_data_status()
        assert (status.total, status.pending) == (1, 1)

        await service.request_access(1)
        status = await service.view_all_data_status()
        assert (status.granted, status.pending) == (1, 0)

        await service.revoke_access(1)
        status = await service.view_all_data_status()
        assert status == DataAccessStatus(granted=1, pending=0, revoked=1, total=1)

        with pytest.raises(AlreadyRevokedOrNotFoundError):
            await service.revoke_access(1)

    @pytest.mark.asyncio
    async def test_revoke_before_grant_drifts_counters(self, service):
        await service.create_data("p1", "hash1")
        await service.revoke_access(1)

        report = await service.check_consistency()
        assert report.status == DataAccessStatus(granted=0, pending=1, revoked=1, total=1)
        assert report.drift == -1
        assert not report.is_consistent

    @pytest.mark.asyncio
    async def test_balanced_counters_are_consistent(self, service):
        await service.create_data("p1", "hash1")
        await service.create_data("p2", "hash2")
        await service.request_access(1)

        report = await service.check_consistency()
        assert report.drift == 0
        assert report.is_consistent
