"""
Health record repository: creation, revocation and id assignment.
"""

import logging
from typing import Optional, Union

from ..errors import AlreadyRevokedOrNotFoundError, InvalidStateError
from ..models import HealthRecord
from ..storage import COUNT_DATA, StoreBase, StoreTransaction, data_key
from .counters import AggregateCounters

logger = logging.getLogger(__name__)

Reader = Union[StoreBase, StoreTransaction]


class RecordLedger:
    """
    Owns ``Data(record_id)`` entries.

    Two counters take part in creation. The raw sequence counter (``C_DATA``)
    picks the slot inspected by the overwrite guard, while the assigned id is
    ``total`` after the increment. They advance together on every create, but
    are stored separately and never substituted for one another.
    """

    def __init__(self, counters: AggregateCounters):
        self.counters = counters

    async def find(self, reader: Reader, record_id: int) -> Optional[HealthRecord]:
        payload = await reader.get(data_key(record_id))
        if payload is None:
            return None
        return HealthRecord(**payload)

    async def view(self, reader: Reader, record_id: int) -> HealthRecord:
        """Stored record, or the "Not Found" sentinel."""
        record = await self.find(reader, record_id)
        return record if record is not None else HealthRecord.not_found()

    async def next_sequence(self, reader: Reader) -> int:
        current = await reader.get(COUNT_DATA)
        return int(current or 0) + 1

    async def create(
        self,
        txn: StoreTransaction,
        patient_id: str,
        data_hash: str,
        timestamp: int,
    ) -> HealthRecord:
        sequence = await self.next_sequence(txn)

        slot = await self.view(txn, sequence)
        if not slot.is_revoked:
            raise InvalidStateError(
                f"Cannot create data, record {sequence} is still active",
                record_id=sequence,
            )

        status = await self.counters.apply(txn, pending=1, total=1)
        record = HealthRecord(
            record_id=status.total,
            patient_id=patient_id,
            data_hash=data_hash,
            timestamp=timestamp,
            is_revoked=False,
        )

        txn.set(data_key(record.record_id), record.model_dump())
        txn.set(COUNT_DATA, sequence)
        return record

    async def revoke(self, txn: StoreTransaction, record_id: int) -> HealthRecord:
        record = await self.view(txn, record_id)
        if record.is_revoked:
            raise AlreadyRevokedOrNotFoundError(
                f"Record {record_id} is already revoked or does not exist",
                record_id=record_id,
            )

        record.is_revoked = True
        await self.counters.apply(txn, revoked=1)
        txn.set(data_key(record.record_id), record.model_dump())
        return record
