from enum import Enum


class AuditCategory(str, Enum):
    RECORD = "record"
    ACCESS_CONTROL = "access_control"
