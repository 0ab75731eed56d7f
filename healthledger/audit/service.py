"""
Audit logging for ledger transitions.

Emits one structured log line per event and keeps a bounded in-memory
buffer for inspection. Patient identifiers never reach the log: details are
sanitized before they are serialized.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional
import json
import logging

from .models import AuditCategory


class AuditLevel(str, Enum):
    MINIMAL = "minimal"
    STANDARD = "standard"
    DETAILED = "detailed"
    COMPREHENSIVE = "comprehensive"


logger = logging.getLogger(__name__)

_EVENT_BUFFER_LIMIT = 1000


class AuditService:
    SENSITIVE_KEYS = {
        "patient_id",
        "data_hash",
        "mrn",
        "member_id",
        "dob",
        "date_of_birth",
        "ssn",
        "email",
        "phone",
        "phi",
        "pii",
    }

    def __init__(self, enabled: bool = True, buffer_limit: int = _EVENT_BUFFER_LIMIT):
        self.enabled = enabled
        self.buffer_limit = buffer_limit
        self._events: List[dict] = []

    @classmethod
    def _sanitize(cls, data: Any) -> Any:
        """Recursively mask sensitive keys; scalars pass through."""
        if isinstance(data, dict):
            out: Dict[str, Any] = {}
            for k, v in data.items():
                key_l = str(k).lower()
                if key_l in cls.SENSITIVE_KEYS or "patient" in key_l:
                    out[k] = "[REDACTED]"
                else:
                    out[k] = cls._sanitize(v)
            return out
        if isinstance(data, (list, tuple)):
            return [cls._sanitize(x) for x in list(data)[:50]]  # cap length
        if isinstance(data, bytes):
            return "[REDACTED]"
        if isinstance(data, (str, int, float, bool)) or data is None:
            return data
        return "[REDACTED]"

    async def log_event(
        self,
        event_type: str,
        category: AuditCategory,
        action: str,
        result: str,
        description: str,
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        level: AuditLevel = AuditLevel.STANDARD,
        phi_involved: bool = False,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        if not self.enabled:
            return

        payload = {
            "type": event_type,
            "category": category.value if isinstance(category, AuditCategory) else str(category),
            "action": action,
            "result": result,
            "level": level.value,
            "phi_involved": bool(phi_involved),
            "resource_type": resource_type,
            "resource_id": resource_id,
            "description": description,
            "details": self._sanitize(details or {}),
            "ts": datetime.now(tz=timezone.utc).isoformat(),
        }
        logger.info("audit_event=%s", json.dumps(payload, separators=(",", ":")))
        self._events.append(payload)
        if len(self._events) > self.buffer_limit:
            del self._events[: len(self._events) - self.buffer_limit]

    async def list_events(self, limit: int = 100, offset: int = 0) -> dict:
        items = list(self._events)
        items.reverse()
        slice_ = items[offset : offset + limit]
        return {
            "items": slice_,
            "total": len(self._events),
            "limit": limit,
            "offset": offset,
        }
