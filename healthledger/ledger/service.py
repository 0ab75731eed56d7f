"""
Healthcare data ledger service: the public operation surface.
"""

import logging
from typing import Any, Dict, Optional

from ..audit.service import AuditCategory, AuditLevel, AuditService
from ..clock import Clock, SystemClock
from ..errors import LedgerError
from ..models import (
    AccessGrant,
    CounterConsistency,
    CreateDataRequest,
    DataAccessStatus,
    HealthRecord,
    RecordRef,
)
from ..storage import StoreBase
from .access import AccessController
from .counters import AggregateCounters
from .records import RecordLedger

logger = logging.getLogger(__name__)


class HealthcareDataService:
    """
    Patients register data references, providers request access, patients
    revoke it.

    Each mutating call runs inside one store transaction: every read happens
    first, a rejected transition raises before anything is staged, and the
    record/grant write commits together with the counter update. Views read
    the store directly and fall back to default values for missing keys.
    """

    def __init__(
        self,
        store: StoreBase,
        clock: Optional[Clock] = None,
        audit_service: Optional[AuditService] = None,
        strict_transitions: bool = False,
    ):
        self.store = store
        self.clock = clock or SystemClock()
        self.audit_service = audit_service or AuditService()
        self.counters = AggregateCounters()
        self.records = RecordLedger(self.counters)
        self.access = AccessController(
            self.counters, self.records, strict_transitions=strict_transitions
        )

    async def _audit(
        self,
        event_type: str,
        category: AuditCategory,
        action: str,
        record_id: int,
        error: Optional[LedgerError] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        payload = dict(details or {})
        if error is not None:
            payload["error"] = error.code
        await self.audit_service.log_event(
            event_type=event_type,
            category=category,
            action=action,
            result="failure" if error else "success",
            description=str(error) if error else f"{action} record {record_id}",
            resource_type="health_record",
            resource_id=str(record_id),
            level=AuditLevel.DETAILED if error else AuditLevel.STANDARD,
            phi_involved=True,
            details=payload,
        )

    async def create_data(self, patient_id: str, data_hash: str) -> int:
        """Register a data reference for a patient and return its record id.

        Raises:
            InvalidStateError: the next sequence slot holds an active record
        """
        request = CreateDataRequest(patient_id=patient_id, data_hash=data_hash)
        timestamp = self.clock.now()
        try:
            async with self.store.transaction() as txn:
                record = await self.records.create(
                    txn, request.patient_id, request.data_hash, timestamp
                )
        except LedgerError as exc:
            logger.warning("Rejected create_data: %s", exc)
            await self._audit(
                "record_created", AuditCategory.RECORD, "create_data", exc.record_id, error=exc
            )
            raise

        await self._audit(
            "record_created",
            AuditCategory.RECORD,
            "create_data",
            record.record_id,
            details={"patient_id": record.patient_id, "timestamp": timestamp},
        )
        logger.info("Healthcare data created with record id %d", record.record_id)
        return record.record_id

    async def revoke_access(self, record_id: int) -> None:
        """Revoke a record.

        Raises:
            AlreadyRevokedOrNotFoundError: revoked already, or never created
        """
        ref = RecordRef(record_id=record_id)
        try:
            async with self.store.transaction() as txn:
                await self.records.revoke(txn, ref.record_id)
        except LedgerError as exc:
            logger.warning("Rejected revoke_access: %s", exc)
            await self._audit(
                "access_revoked", AuditCategory.RECORD, "revoke_access", ref.record_id, error=exc
            )
            raise

        await self._audit("access_revoked", AuditCategory.RECORD, "revoke_access", ref.record_id)
        logger.info("Access to healthcare data record id %d has been revoked", ref.record_id)

    async def request_access(self, record_id: int) -> None:
        """Grant a provider's access request on a record.

        Raises:
            AlreadyGrantedError: access was granted before
            AlreadyRevokedOrNotFoundError: strict transitions only
        """
        ref = RecordRef(record_id=record_id)
        timestamp = self.clock.now()
        try:
            async with self.store.transaction() as txn:
                await self.access.grant(txn, ref.record_id)
        except LedgerError as exc:
            logger.warning("Rejected request_access: %s", exc)
            await self._audit(
                "access_granted",
                AuditCategory.ACCESS_CONTROL,
                "request_access",
                ref.record_id,
                error=exc,
                details={"timestamp": timestamp},
            )
            raise

        await self._audit(
            "access_granted",
            AuditCategory.ACCESS_CONTROL,
            "request_access",
            ref.record_id,
            details={"timestamp": timestamp},
        )
        logger.info("Access granted to healthcare data record id %d", ref.record_id)

    async def view_all_data_status(self) -> DataAccessStatus:
        return await self.counters.view(self.store)

    async def view_data(self, record_id: int) -> HealthRecord:
        ref = RecordRef(record_id=record_id)
        return await self.records.view(self.store, ref.record_id)

    async def view_admin_control(self, record_id: int) -> AccessGrant:
        ref = RecordRef(record_id=record_id)
        return await self.access.view(self.store, ref.record_id)

    async def check_consistency(self) -> CounterConsistency:
        return await self.counters.check_consistency(self.store)
