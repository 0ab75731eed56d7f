"""
Filesystem store keeping the whole ledger in a single JSON document.
"""

import copy
import json
from pathlib import Path
from typing import Any, Dict, Optional

import aiofiles
import aiofiles.os

from .base import StoreBase


class FilesystemStore(StoreBase):
    """
    JSON-document store.

    The document is read once when a transaction begins and dropped when it
    ends, so nothing is cached between operations. Reads outside a
    transaction go to disk. Commits write a temporary sibling file and swap
    it into place, so a reader never observes a half-written document.
    """

    def __init__(self, path: str):
        super().__init__()
        self.path = Path(path)
        self.tmp_suffix = ".tmp"
        self._document: Optional[Dict[str, Any]] = None

    async def initialize(self) -> None:
        await aiofiles.os.makedirs(self.path.parent, exist_ok=True)

    async def _read_document(self) -> Dict[str, Any]:
        if not await aiofiles.os.path.exists(self.path):
            return {}
        async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
            raw = await f.read()
        if not raw.strip():
            return {}
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError(f"Ledger document {self.path} is not a JSON object")
        return data

    async def _begin(self) -> None:
        self._document = await self._read_document()

    def _end(self) -> None:
        self._document = None

    async def _load(self, key: str) -> Optional[Any]:
        document = self._document if self._document is not None else await self._read_document()
        return copy.deepcopy(document.get(key))

    async def _commit(self, writes: Dict[str, Any]) -> None:
        document = dict(self._document) if self._document is not None else await self._read_document()
        document.update(writes)

        await aiofiles.os.makedirs(self.path.parent, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + self.tmp_suffix)
        async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
            await f.write(json.dumps(document, indent=2, sort_keys=True))
        await aiofiles.os.replace(tmp_path, self.path)
