"""
Caller-facing errors raised by the ledger operations.

Every error is detected by a precondition check before anything is staged
for writing, so raising one never leaves partial state behind.
"""


class LedgerError(ValueError):
    """Base class for rejected ledger transitions."""

    code = "ledger_error"

    def __init__(self, message: str, record_id: int = 0):
        super().__init__(message)
        self.record_id = record_id


class InvalidStateError(LedgerError):
    """The next sequence slot already holds an active (unrevoked) record."""

    code = "invalid_state"


class AlreadyRevokedOrNotFoundError(LedgerError):
    code = "already_revoked_or_not_found"


class AlreadyGrantedError(LedgerError):
    code = "already_granted"
