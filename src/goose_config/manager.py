from dataclasses import dataclass, field
from typing import Optional

from goose_config.extensions import ExtensionGroupRegistry, ExtensionRegistry, GroupStateAggregator
from goose_config.settings import ExtensionSettings, get_settings
from goose_config.store import ConfigStore, YamlConfigStore


@dataclass(frozen=True)
class ExtensionManager:
    """
    把同一个 ConfigStore 上的三个组件打包在一起。
    组件本身都显式接收 store，这里只是方便运行时 / CLI 统一拿取。
    """
    store: ConfigStore
    settings: ExtensionSettings = field(default_factory=get_settings)
    extensions: ExtensionRegistry = field(init=False)
    groups: ExtensionGroupRegistry = field(init=False)
    aggregator: GroupStateAggregator = field(init=False)

    def __post_init__(self):
        # frozen dataclass 只能通过 object.__setattr__ 初始化派生字段
        extensions = ExtensionRegistry(self.store, storage_key=self.settings.extensions_key)
        groups = ExtensionGroupRegistry(self.store, storage_key=self.settings.extension_groups_key)
        object.__setattr__(self, "extensions", extensions)
        object.__setattr__(self, "groups", groups)
        object.__setattr__(self, "aggregator", GroupStateAggregator(extensions, groups))

    @classmethod
    def from_settings(cls, settings: ExtensionSettings) -> "ExtensionManager":
        store = YamlConfigStore(settings.config_path, env_override=settings.env_override)
        return cls(store=store, settings=settings)


# --- 全局单例 ---
_GLOBAL_MANAGER: Optional[ExtensionManager] = None


def get_extension_manager() -> ExtensionManager:
    global _GLOBAL_MANAGER
    if _GLOBAL_MANAGER is None:
        _GLOBAL_MANAGER = ExtensionManager.from_settings(get_settings())
    return _GLOBAL_MANAGER


def set_extension_manager(manager: ExtensionManager):
    """替换全局实例 (测试、嵌入式运行时)"""
    global _GLOBAL_MANAGER
    _GLOBAL_MANAGER = manager


def reset_extension_manager():
    global _GLOBAL_MANAGER
    _GLOBAL_MANAGER = None
