import pytest

from goose_config.extensions import (
    ExtensionEntry,
    ExtensionGroup,
    ExtensionGroupRegistry,
    ExtensionRegistry,
    GroupStateAggregator,
    PlatformExtensionDef,
    StdioExtensionConfig,
)
from goose_config.store import MemoryConfigStore

TEST_PLATFORM = {
    "todo": PlatformExtensionDef(name="todo", display_name="Todo", description="Track tasks"),
    "chatrecall": PlatformExtensionDef(name="chatrecall", display_name="Chat Recall", description="Recall chats"),
}


def stdio_entry(name: str, enabled: bool = True) -> ExtensionEntry:
    return ExtensionEntry(
        enabled=enabled,
        config=StdioExtensionConfig(name=name, description=f"{name} server", cmd="npx", args=[name]),
    )


def raw_stdio(name: str, enabled: bool = True) -> dict:
    return stdio_entry(name, enabled).model_dump(mode="json")


@pytest.fixture
def store():
    return MemoryConfigStore()


@pytest.fixture
def registry(store):
    return ExtensionRegistry(store, platform_extensions=TEST_PLATFORM)


@pytest.fixture
def groups(store):
    return ExtensionGroupRegistry(store)


@pytest.fixture
def aggregator(registry, groups):
    return GroupStateAggregator(registry, groups)


@pytest.fixture
def seeded_store(store):
    """a 启用、b 禁用、c 启用，外加两个组"""
    store.values["extensions"] = {
        "a": raw_stdio("a", True),
        "b": raw_stdio("b", False),
        "c": raw_stdio("c", True),
    }
    store.values["extension_groups"] = {
        "pair": ExtensionGroup(name="Pair", extension_keys=["a", "b"]).model_dump(),
        "both": ExtensionGroup(name="Both", extension_keys=["a", "c"]).model_dump(),
        "ghost": ExtensionGroup(name="Ghost", extension_keys=["a", "missing"]).model_dump(),
        "empty": ExtensionGroup(name="Empty", extension_keys=[]).model_dump(),
    }
    return store
