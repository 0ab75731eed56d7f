"""
Ledger data models: health records, access grants and the aggregate counters.
"""

from typing import List

from pydantic import BaseModel, Field, StrictInt, StrictStr

NOT_FOUND = "Not Found"


class HealthRecord(BaseModel):
    """A patient's reference to off-ledger healthcare data."""

    record_id: int = Field(0, ge=0)
    patient_id: str
    data_hash: str  # Opaque content reference, never validated
    timestamp: int = Field(0, ge=0)
    is_revoked: bool = False

    @classmethod
    def not_found(cls) -> "HealthRecord":
        """Sentinel returned by views when no record is stored under an id."""
        return cls(
            record_id=0,
            patient_id=NOT_FOUND,
            data_hash=NOT_FOUND,
            timestamp=0,
            is_revoked=True,
        )


class AccessGrant(BaseModel):
    """Admin-control entry recording whether a provider was granted access."""

    record_id: int = Field(0, ge=0)
    access_granted: bool = False


class DataAccessStatus(BaseModel):
    """Running tally over every record on the ledger."""

    granted: int = Field(0, ge=0)
    # No floor: request_access decrements without checking
    pending: int = 0
    revoked: int = Field(0, ge=0)
    total: int = Field(0, ge=0)


class CounterConsistency(BaseModel):
    """Read-only comparison of the counters against their design invariant."""

    status: DataAccessStatus
    drift: int = 0
    negative_counters: List[str] = Field(default_factory=list)

    @property
    def is_consistent(self) -> bool:
        return self.drift == 0 and not self.negative_counters


class CreateDataRequest(BaseModel):
    patient_id: StrictStr
    data_hash: StrictStr


class RecordRef(BaseModel):
    record_id: StrictInt = Field(..., ge=0)
