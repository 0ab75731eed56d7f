"""
Service wiring: logging setup and construction from configuration.
"""

import logging
import os
from typing import Optional

from .audit.service import AuditService
from .clock import Clock
from .config.models import LedgerConfig, StoreProviderKind
from .ledger.service import HealthcareDataService
from .storage import FilesystemStore, InMemoryStore, SQLStore, StoreBase

logger = logging.getLogger("healthledger")


def configure_logging(level: Optional[str] = None) -> None:
    """Install the log format and set the level of every healthledger logger."""
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # basicConfig is a no-op once the root logger has handlers
    logger.setLevel(level)


def build_store(config: LedgerConfig) -> StoreBase:
    """Instantiate the configured store backend (not yet initialized)."""
    if config.store_provider == StoreProviderKind.FILESYSTEM:
        return FilesystemStore(config.filesystem_path)
    if config.store_provider == StoreProviderKind.SQL:
        return SQLStore(url=config.database_url)
    return InMemoryStore()


async def build_service(
    config: Optional[LedgerConfig] = None,
    clock: Optional[Clock] = None,
    audit_service: Optional[AuditService] = None,
) -> HealthcareDataService:
    config = config or LedgerConfig.from_env()
    configure_logging(config.log_level)
    store = build_store(config)
    await store.initialize()
    logger.info(
        "Ledger ready: store=%s strict_transitions=%s",
        config.store_provider.value,
        config.strict_transitions,
    )
    return HealthcareDataService(
        store=store,
        clock=clock,
        audit_service=audit_service or AuditService(enabled=config.audit_enabled),
        strict_transitions=config.strict_transitions,
    )
