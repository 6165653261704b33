import logging
from typing import Dict, List, Mapping, Optional

from goose_config.errors import ExtensionGroupNotFoundError
from goose_config.keys import name_to_key
from goose_config.settings import EXTENSION_GROUPS_CONFIG_KEY
from goose_config.store import ConfigStore
from .codec import parse_each, read_object, write_object
from .registry import ExtensionRegistry
from .types import ExtensionEntry, ExtensionGroup, ExtensionGroupState

logger = logging.getLogger("goose_config.extensions.groups")


class ExtensionGroupRegistry:
    """
    扩展组表的读写入口。与 ExtensionRegistry 同样的容错策略，
    但没有 description 补全，也没有平台扩展合并。
    """

    def __init__(self, store: ConfigStore, storage_key: str = EXTENSION_GROUPS_CONFIG_KEY):
        self.store = store
        self.storage_key = storage_key

    def load(self) -> Dict[str, ExtensionGroup]:
        raw = read_object(self.store, self.storage_key)
        return parse_each(raw, ExtensionGroup, "extension group")

    def save(self, groups: Mapping[str, ExtensionGroup]) -> bool:
        return write_object(self.store, self.storage_key, groups, "extension groups")

    def get_by_name(self, name: str) -> Optional[ExtensionGroup]:
        return self.load().get(name_to_key(name))

    def list_all(self) -> List[ExtensionGroup]:
        return list(self.load().values())

    def list_all_keys(self) -> List[str]:
        return list(self.load().keys())

    def set(self, group: ExtensionGroup) -> bool:
        groups = self.load()
        groups[group.key()] = group
        logger.debug(f"✅ Set extension group: {group.key()} ({len(group.extension_keys)} members)")
        return self.save(groups)

    def remove(self, key: str) -> bool:
        groups = self.load()
        groups.pop(key, None)
        return self.save(groups)


class GroupStateAggregator:
    """
    组级别的状态查询与批量启停。
    组成员引用的扩展如果不存在，批量操作会直接跳过它。
    """

    def __init__(self, extensions: ExtensionRegistry, groups: ExtensionGroupRegistry):
        self.extensions = extensions
        self.groups = groups

    def state_of(self, group_name: str) -> Optional[ExtensionGroupState]:
        group = self.groups.get_by_name(group_name)
        if group is None:
            return None
        if not group.extension_keys:
            return ExtensionGroupState.DISABLED

        extensions = self.extensions.load()
        # 不存在的成员按"未启用"计数
        enabled_count = sum(
            1 for key in group.extension_keys
            if key in extensions and extensions[key].enabled
        )
        total = len(group.extension_keys)

        if enabled_count == 0:
            return ExtensionGroupState.DISABLED
        if enabled_count == total:
            return ExtensionGroupState.ENABLED
        return ExtensionGroupState.MIXED

    def enable_group(self, group_name: str) -> bool:
        """
        启用组内所有已存在的扩展。
        组不存在时抛 ExtensionGroupNotFoundError；返回值表示是否发生了写入
        (全部已启用时不会写存储)。
        """
        return self._toggle_by_name(group_name, True)

    def disable_group(self, group_name: str) -> bool:
        return self._toggle_by_name(group_name, False)

    def set_group_enabled(self, key: str, enabled: bool) -> bool:
        """按 Key 直接查找 (调用时不做规范化)；组不存在时静默返回 False"""
        group = self.groups.load().get(key)
        if group is None:
            return False
        return self._apply(group, enabled)

    def is_group_enabled(self, key: str) -> bool:
        """
        所有成员都存在且都启用才返回 True。
        比 state_of 更严格：缺失的成员直接让结果为 False。
        空组没有任何成员不满足条件，因此返回 True。
        """
        group = self.groups.load().get(key)
        if group is None:
            return False
        extensions = self.extensions.load()
        return all(
            member in extensions and extensions[member].enabled
            for member in group.extension_keys
        )

    def _toggle_by_name(self, group_name: str, enabled: bool) -> bool:
        group = self.groups.get_by_name(group_name)
        if group is None:
            raise ExtensionGroupNotFoundError(group_name)
        return self._apply(group, enabled)

    def _apply(self, group: ExtensionGroup, enabled: bool) -> bool:
        extensions = self.extensions.load()
        if not _set_members(extensions, group.extension_keys, enabled):
            return False

        saved = self.extensions.save(extensions)
        if saved:
            action = "Enabled" if enabled else "Disabled"
            logger.info(f"🔁 {action} extension group '{group.name}'")
        return saved


def _set_members(extensions: Dict[str, ExtensionEntry], keys: List[str], enabled: bool) -> bool:
    modified = False
    for key in keys:
        entry = extensions.get(key)
        if entry is not None and entry.enabled != enabled:
            entry.enabled = enabled
            modified = True
    return modified
