"""
SQL store on top of the async SQLAlchemy engine.
"""

import logging
from typing import Any, Callable, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from ..database import create_engine_for_url, get_engine, get_session_maker, init_models
from .base import StoreBase
from .models import LedgerEntry

logger = logging.getLogger(__name__)


class SQLStore(StoreBase):
    """
    Store persisting each ledger entry as a row of ``ledger_entries``.

    A ledger transaction commits as a single database transaction, so the
    entity write and the counter write land together or not at all.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        engine: Optional[AsyncEngine] = None,
        session_factory: Optional[Callable[[], AsyncSession]] = None,
    ):
        super().__init__()
        self._owns_engine = False
        if engine is None and session_factory is None:
            if url:
                engine = create_engine_for_url(url)
                self._owns_engine = True
            else:
                # Shared process-wide engine from DATABASE_URL
                engine = get_engine()
                session_factory = get_session_maker()
        self.engine = engine
        self._session_factory = session_factory or async_sessionmaker(engine, expire_on_commit=False)

    async def initialize(self) -> None:
        if self.engine is not None:
            await init_models(self.engine)

    async def close(self) -> None:
        if self._owns_engine:
            await self.engine.dispose()

    async def _load(self, key: str) -> Optional[Any]:
        async with self._session_factory() as session:
            entry = await session.get(LedgerEntry, key)
            return None if entry is None else entry.value

    async def _commit(self, writes: Dict[str, Any]) -> None:
        async with self._session_factory() as session:
            async with session.begin():
                for key, value in writes.items():
                    await session.merge(LedgerEntry(key=key, value=value))
        logger.debug("Wrote %d ledger rows", len(writes))
