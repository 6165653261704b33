from .keys import name_to_key
from .errors import (
    ConfigKeyNotFoundError,
    ConfigStoreError,
    ExtensionGroupNotFoundError,
    GooseConfigError,
)
from .settings import ExtensionSettings, get_settings
from .store import ConfigStore, MemoryConfigStore, YamlConfigStore
from .manager import (
    ExtensionManager,
    get_extension_manager,
    reset_extension_manager,
    set_extension_manager,
)

__all__ = [
    "name_to_key",
    "ConfigKeyNotFoundError",
    "ConfigStoreError",
    "ExtensionGroupNotFoundError",
    "GooseConfigError",
    "ExtensionSettings",
    "get_settings",
    "ConfigStore",
    "MemoryConfigStore",
    "YamlConfigStore",
    "ExtensionManager",
    "get_extension_manager",
    "reset_extension_manager",
    "set_extension_manager",
]
