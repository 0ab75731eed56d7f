"""
Ledger configuration.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel

from .provider import ConfigProvider, EnvConfigProvider


class StoreProviderKind(str, Enum):
    """Supported store backends."""

    MEMORY = "memory"
    FILESYSTEM = "filesystem"
    SQL = "sql"


class LedgerConfig(BaseModel):
    """Configuration for the healthcare data ledger."""

    store_provider: StoreProviderKind = StoreProviderKind.MEMORY
    filesystem_path: str = "state/ledger.json"
    database_url: Optional[str] = None  # Falls back to healthledger.database defaults

    # Reject request_access on revoked or missing records
    strict_transitions: bool = False
    audit_enabled: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, provider: Optional[ConfigProvider] = None) -> "LedgerConfig":
        """Build configuration from LEDGER_* environment variables."""
        env = provider or EnvConfigProvider()
        return cls(
            store_provider=env.get("LEDGER_STORE", StoreProviderKind.MEMORY.value),
            filesystem_path=env.get("LEDGER_STATE_PATH", "state/ledger.json"),
            database_url=env.get("DATABASE_URL"),
            strict_transitions=env.get_bool("LEDGER_STRICT_TRANSITIONS", False),
            audit_enabled=env.get_bool("LEDGER_AUDIT", True),
            log_level=env.get("LOG_LEVEL", "INFO"),
        )
