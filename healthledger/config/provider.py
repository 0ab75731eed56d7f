from __future__ import annotations
import os
from typing import Any, Mapping, Optional, Protocol


class ConfigProvider(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...
    def get_bool(self, key: str, default: bool = False) -> bool: ...


class EnvConfigProvider:
    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        self.environ = os.environ if environ is None else environ

    def get(self, key: str, default: Any = None) -> Any:
        v = self.environ.get(key)
        return default if v is None or v == "" else v

    def get_bool(self, key: str, default: bool = False) -> bool:
        v = self.environ.get(key)
        return default if v is None else v.strip().lower() in ("1", "true", "yes", "on")


class InMemoryConfigProvider:
    def __init__(self, data: Optional[dict[str, Any]] = None) -> None:
        self.data = data or {}

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def get_bool(self, key: str, default: bool = False) -> bool:
        v = self.data.get(key, None)
        if v is None:
            return default
        if isinstance(v, str):
            return v.strip().lower() in ("1", "true", "yes", "on")
        return bool(v)
