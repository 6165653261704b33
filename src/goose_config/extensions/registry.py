import logging
from typing import Any, Dict, List, Mapping, Optional

from goose_config.settings import EXTENSIONS_CONFIG_KEY
from goose_config.store import ConfigStore
from .codec import parse_each, read_object, write_object
from .platform import PLATFORM_EXTENSIONS, PlatformExtensionDef
from .types import (
    DEFAULT_EXTENSION_DESCRIPTION,
    ExtensionConfig,
    ExtensionEntry,
    PlatformExtensionConfig,
)

logger = logging.getLogger("goose_config.extensions.registry")


def _fill_description(value: Any) -> Any:
    # 老版本保存的条目没有 description 字段，补一个空串再解析
    if isinstance(value, dict) and value.get("description") is None:
        value = {**value, "description": DEFAULT_EXTENSION_DESCRIPTION}
    return value


class ExtensionRegistry:
    """
    扩展开关表的读写入口。

    没有任何进程内缓存：每个操作都是 load -> 内存中修改 -> save，
    两个并发的修改者会互相覆盖 (后写者胜出)，需要更强一致性的调用方请自行串行化。
    """

    def __init__(
        self,
        store: ConfigStore,
        platform_extensions: Optional[Mapping[str, PlatformExtensionDef]] = None,
        storage_key: str = EXTENSIONS_CONFIG_KEY,
    ):
        self.store = store
        self.platform_extensions = PLATFORM_EXTENSIONS if platform_extensions is None else platform_extensions
        self.storage_key = storage_key

    # --- 底层读写 ---

    def load(self) -> Dict[str, ExtensionEntry]:
        raw = read_object(self.store, self.storage_key)
        extensions = parse_each(raw, ExtensionEntry, "extension", prepare=_fill_description)

        # 注意：只有扩展表非空时才补平台扩展，全新的空配置不会自动获得它们
        if extensions:
            for key, definition in self.platform_extensions.items():
                if key not in extensions:
                    extensions[key] = ExtensionEntry(
                        enabled=True,
                        config=PlatformExtensionConfig(
                            name=definition.name,
                            description=definition.description,
                            bundled=True,
                            available_tools=[],
                        ),
                    )
        return extensions

    def save(self, extensions: Mapping[str, ExtensionEntry]) -> bool:
        """返回 True 表示已写入存储，False 表示写入被丢弃 (只记 debug 日志)"""
        return write_object(self.store, self.storage_key, extensions, "extensions")

    # --- 查询 ---

    def get_by_name(self, name: str) -> Optional[ExtensionConfig]:
        for entry in self.load().values():
            if entry.config.name == name:
                return entry.config
        return None

    def list_all(self) -> List[ExtensionEntry]:
        return list(self.load().values())

    def list_all_keys(self) -> List[str]:
        return list(self.load().keys())

    def is_enabled(self, key: str) -> bool:
        entry = self.load().get(key)
        return entry.enabled if entry else False

    def list_enabled_configs(self) -> List[ExtensionConfig]:
        return [entry.config for entry in self.load().values() if entry.enabled]

    # --- 修改 ---

    def set(self, entry: ExtensionEntry) -> bool:
        extensions = self.load()
        key = entry.config.key()
        extensions[key] = entry
        logger.debug(f"✅ Set extension: {key} (enabled={entry.enabled})")
        return self.save(extensions)

    def remove(self, key: str) -> bool:
        # Key 不存在也照样保存
        extensions = self.load()
        extensions.pop(key, None)
        return self.save(extensions)

    def set_enabled(self, key: str, enabled: bool) -> bool:
        extensions = self.load()
        entry = extensions.get(key)
        if entry is None:
            return False
        entry.enabled = enabled
        return self.save(extensions)
