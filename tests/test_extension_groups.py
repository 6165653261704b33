import logging

import pytest

from conftest import raw_stdio
from goose_config.errors import ExtensionGroupNotFoundError
from goose_config.extensions import ExtensionGroup, ExtensionGroupState


# --- ExtensionGroupRegistry ---

def test_group_key_is_normalized_name():
    assert ExtensionGroup(name="Web Tools", extension_keys=[]).key() == "webtools"


def test_set_and_get_by_name(groups, store):
    groups.set(ExtensionGroup(name="Web Tools", extension_keys=["fetch", "search"]))
    assert "webtools" in store.values["extension_groups"]

    group = groups.get_by_name(" web TOOLS ")
    assert group.name == "Web Tools"
    assert group.extension_keys == ["fetch", "search"]
    assert groups.get_by_name("other") is None


def test_groups_load_tolerates_failures(groups, store, caplog):
    assert groups.load() == {}

    store.values["extension_groups"] = "garbage"
    assert groups.load() == {}

    store.values["extension_groups"] = {
        "ok": {"name": "OK", "extension_keys": ["a"]},
        "broken": {"name": "Broken"},
    }
    with caplog.at_level(logging.WARNING):
        loaded = groups.load()
    assert set(loaded) == {"ok"}
    assert "Skipping malformed extension group 'broken'" in caplog.text


def test_groups_are_not_merged_with_platform_extensions(groups, store):
    store.values["extension_groups"] = {"ok": {"name": "OK", "extension_keys": []}}
    assert list(groups.load()) == ["ok"]


def test_group_remove_saves_unconditionally(groups, store):
    groups.remove("nothing")
    assert store.writes["extension_groups"] == 1
    assert store.values["extension_groups"] == {}


def test_group_list_operations(groups):
    groups.set(ExtensionGroup(name="One", extension_keys=["a"]))
    groups.set(ExtensionGroup(name="Two", extension_keys=["b"]))
    groups.set(ExtensionGroup(name="ONE", extension_keys=["c"]))

    assert set(groups.list_all_keys()) == {"one", "two"}
    by_key = {g.key(): g for g in groups.list_all()}
    assert by_key["one"].extension_keys == ["c"]


# --- GroupStateAggregator: state_of ---

def test_state_of_unknown_group_is_none(aggregator, seeded_store):
    assert aggregator.state_of("nope") is None


def test_state_of_empty_group_is_disabled(aggregator, seeded_store):
    assert aggregator.state_of("Empty") == ExtensionGroupState.DISABLED


def test_state_of_all_enabled(aggregator, seeded_store):
    assert aggregator.state_of("Both") == ExtensionGroupState.ENABLED


def test_state_of_partially_enabled(aggregator, seeded_store):
    assert aggregator.state_of("Pair") == ExtensionGroupState.MIXED


def test_state_of_counts_missing_member_as_not_enabled(aggregator, seeded_store):
    assert aggregator.state_of("Ghost") == ExtensionGroupState.MIXED


def test_state_of_none_enabled(aggregator, registry, seeded_store):
    registry.set_enabled("a", False)
    assert aggregator.state_of("Pair") == ExtensionGroupState.DISABLED


# --- enable_group / disable_group ---

def test_enable_group_flips_disabled_members(aggregator, registry, seeded_store):
    assert aggregator.enable_group("pair") is True
    assert registry.is_enabled("a") and registry.is_enabled("b")
    assert aggregator.state_of("Pair") == ExtensionGroupState.ENABLED


def test_enable_group_already_enabled_does_not_write(aggregator, seeded_store):
    assert aggregator.enable_group("Both") is False
    assert seeded_store.writes["extensions"] == 0


def test_enable_group_ignores_missing_members(aggregator, registry, seeded_store):
    registry.set_enabled("a", False)
    writes_before = seeded_store.writes["extensions"]

    assert aggregator.enable_group("Ghost") is True
    assert registry.is_enabled("a") is True
    assert "missing" not in seeded_store.values["extensions"]
    assert seeded_store.writes["extensions"] == writes_before + 1


def test_enable_missing_group_raises_without_touching_extensions(aggregator, seeded_store):
    with pytest.raises(ExtensionGroupNotFoundError) as exc_info:
        aggregator.enable_group("missing")

    assert str(exc_info.value) == "Extension group 'missing' not found"
    assert exc_info.value.group_name == "missing"
    assert seeded_store.reads["extensions"] == 0
    assert seeded_store.writes["extensions"] == 0


def test_disable_missing_group_raises(aggregator, seeded_store):
    with pytest.raises(ExtensionGroupNotFoundError, match="Extension group 'x y' not found"):
        aggregator.disable_group("x y")


def test_disable_group(aggregator, registry, seeded_store):
    assert aggregator.disable_group("Pair") is True
    assert registry.is_enabled("a") is False
    assert registry.is_enabled("b") is False
    assert registry.is_enabled("c") is True

    # 再次禁用没有任何变化，不写存储
    writes_before = seeded_store.writes["extensions"]
    assert aggregator.disable_group("Pair") is False
    assert seeded_store.writes["extensions"] == writes_before


def test_group_toggle_save_failure_is_silent(aggregator, registry, seeded_store):
    seeded_store.fail_writes = True
    assert aggregator.enable_group("Pair") is False
    seeded_store.fail_writes = False
    assert registry.is_enabled("b") is False


# --- set_group_enabled / is_group_enabled (按 Key) ---

def test_set_group_enabled_by_key(aggregator, registry, seeded_store):
    assert aggregator.set_group_enabled("pair", True) is True
    assert registry.is_enabled("b") is True

    writes_before = seeded_store.writes["extensions"]
    assert aggregator.set_group_enabled("pair", True) is False
    assert seeded_store.writes["extensions"] == writes_before


def test_set_group_enabled_does_not_normalize_key(aggregator, seeded_store):
    assert aggregator.set_group_enabled("Pair", True) is False
    assert seeded_store.writes["extensions"] == 0


def test_set_group_enabled_missing_key_is_noop(aggregator, seeded_store):
    assert aggregator.set_group_enabled("nope", False) is False
    assert seeded_store.reads["extensions"] == 0
    assert seeded_store.writes["extensions"] == 0


def test_is_group_enabled(aggregator, seeded_store):
    assert aggregator.is_group_enabled("both") is True
    assert aggregator.is_group_enabled("pair") is False
    assert aggregator.is_group_enabled("nope") is False
    assert aggregator.is_group_enabled("Both") is False


def test_is_group_enabled_requires_every_member_present(aggregator, registry, seeded_store):
    seeded_store.values["extension_groups"]["solo"] = {"name": "Solo", "extension_keys": ["a", "gone"]}
    assert registry.is_enabled("a") is True
    assert aggregator.is_group_enabled("solo") is False


def test_empty_group_predicates_disagree(aggregator, seeded_store):
    # state_of 把空组视为 Disabled，is_group_enabled 对空组是空真 (True)
    assert aggregator.state_of("Empty") == ExtensionGroupState.DISABLED
    assert aggregator.is_group_enabled("empty") is True


def test_groups_and_extensions_use_separate_storage_keys(aggregator, groups, registry, store):
    store.values["extensions"] = {"a": raw_stdio("a", False)}
    groups.set(ExtensionGroup(name="G", extension_keys=["a"]))
    aggregator.enable_group("G")

    assert set(store.values) == {"extensions", "extension_groups"}
    assert store.values["extension_groups"]["g"]["extension_keys"] == ["a"]
    assert store.values["extensions"]["a"]["enabled"] is True
