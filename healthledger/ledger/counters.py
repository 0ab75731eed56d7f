"""
Aggregate counters shared by every ledger transition.
"""

import logging
from typing import Union

from ..models import CounterConsistency, DataAccessStatus
from ..storage import ALL_DATA, StoreBase, StoreTransaction

logger = logging.getLogger(__name__)

Reader = Union[StoreBase, StoreTransaction]


class AggregateCounters:
    """
    The single ``ALL_DATA`` entry tallying granted, pending, revoked and total.

    Updates are read-modify-write against a transaction so they commit
    together with the entity write they accompany.
    """

    async def view(self, reader: Reader) -> DataAccessStatus:
        payload = await reader.get(ALL_DATA)
        if payload is None:
            return DataAccessStatus()
        return DataAccessStatus(**payload)

    async def apply(
        self,
        txn: StoreTransaction,
        granted: int = 0,
        pending: int = 0,
        revoked: int = 0,
        total: int = 0,
    ) -> DataAccessStatus:
        status = await self.view(txn)
        status.granted += granted
        status.pending += pending
        status.revoked += revoked
        status.total += total

        if status.pending < 0:
            logger.warning("Pending counter dropped below zero: %d", status.pending)

        txn.set(ALL_DATA, status.model_dump())
        return status

    async def check_consistency(self, reader: Reader) -> CounterConsistency:
        """Compare the counters with pending + granted + revoked == total."""
        status = await self.view(reader)
        drift = status.total - (status.pending + status.granted + status.revoked)
        negative = [
            name
            for name in ("granted", "pending", "revoked", "total")
            if getattr(status, name) < 0
        ]
        report = CounterConsistency(status=status, drift=drift, negative_counters=negative)
        if not report.is_consistent:
            logger.warning(
                "Counters out of balance: drift=%d negative=%s status=%s",
                drift,
                negative,
                status.model_dump(),
            )
        return report
