"""
Database table holding ledger entries for the SQL store.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import declarative_base, Mapped, mapped_column

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


class LedgerEntry(Base):
    __tablename__ = "ledger_entries"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[dict] = mapped_column(JSON, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )
