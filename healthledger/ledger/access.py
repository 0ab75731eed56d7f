"""
Admin-control repository granting providers access to records.
"""

from typing import Optional, Union

from ..errors import AlreadyGrantedError, AlreadyRevokedOrNotFoundError
from ..models import AccessGrant
from ..storage import StoreBase, StoreTransaction, admin_control_key
from .counters import AggregateCounters
from .records import RecordLedger

Reader = Union[StoreBase, StoreTransaction]


class AccessController:
    """Owns ``AdminControl(record_id)`` entries, created lazily on first grant."""

    def __init__(
        self,
        counters: AggregateCounters,
        records: RecordLedger,
        strict_transitions: bool = False,
    ):
        self.counters = counters
        self.records = records
        self.strict_transitions = strict_transitions

    async def find(self, reader: Reader, record_id: int) -> Optional[AccessGrant]:
        payload = await reader.get(admin_control_key(record_id))
        if payload is None:
            return None
        return AccessGrant(**payload)

    async def view(self, reader: Reader, record_id: int) -> AccessGrant:
        grant = await self.find(reader, record_id)
        return grant if grant is not None else AccessGrant()

    async def grant(self, txn: StoreTransaction, record_id: int) -> AccessGrant:
        grant = await self.view(txn, record_id)
        if grant.access_granted:
            raise AlreadyGrantedError(
                f"Access to record {record_id} already granted",
                record_id=record_id,
            )

        if self.strict_transitions:
            record = await self.records.view(txn, record_id)
            if record.is_revoked:
                raise AlreadyRevokedOrNotFoundError(
                    f"Record {record_id} is revoked or does not exist",
                    record_id=record_id,
                )

        grant.record_id = record_id
        grant.access_granted = True
        await self.counters.apply(txn, granted=1, pending=-1)
        txn.set(admin_control_key(record_id), grant.model_dump())
        return grant
