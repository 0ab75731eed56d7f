from .models import AuditCategory
from .service import AuditLevel, AuditService

__all__ = ["AuditCategory", "AuditLevel", "AuditService"]
