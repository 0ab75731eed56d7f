from .models import LedgerConfig, StoreProviderKind
from .provider import ConfigProvider, EnvConfigProvider, InMemoryConfigProvider

__all__ = [
    "LedgerConfig",
    "StoreProviderKind",
    "ConfigProvider",
    "EnvConfigProvider",
    "InMemoryConfigProvider",
]
