from .base import ConfigStore
from .memory import MemoryConfigStore
from .yaml_store import YamlConfigStore

__all__ = ["ConfigStore", "MemoryConfigStore", "YamlConfigStore"]
