import json
import logging
from typing import List

import typer
from pydantic import ValidationError

from goose_config.errors import ExtensionGroupNotFoundError
from goose_config.extensions import ExtensionEntry, ExtensionGroup, default_extension_entry
from goose_config.manager import get_extension_manager
from goose_config.settings import get_settings

app = typer.Typer(help="Manage goose extensions and extension groups")
group_app = typer.Typer(help="Manage extension groups")
app.add_typer(group_app, name="group")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")):
    level = logging.DEBUG if verbose else get_settings().log_level
    logging.basicConfig(level=level, format="%(name)s - %(message)s")


# --- Extensions ---

@app.command("list")
def list_extensions(enabled: bool = typer.Option(False, "--enabled", help="Only show enabled extensions")):
    """
    CLI Command: 列出所有扩展
    """
    registry = get_extension_manager().extensions
    extensions = registry.load()
    for key in sorted(extensions):
        entry = extensions[key]
        if enabled and not entry.enabled:
            continue
        mark = "✅" if entry.enabled else "⛔"
        typer.echo(f"{mark} {key} ({entry.config.type}) {entry.config.description}".rstrip())


@app.command()
def show(name: str):
    """按显示名称查看扩展配置 (JSON)"""
    config = get_extension_manager().extensions.get_by_name(name)
    if config is None:
        typer.echo(f"Extension '{name}' not found", err=True)
        raise typer.Exit(code=1)
    typer.echo(json.dumps(config.model_dump(mode="json"), indent=2, ensure_ascii=False))


@app.command()
def add(
    payload: str = typer.Argument(..., help='Extension config as JSON, e.g. {"type": "stdio", ...}'),
    disabled: bool = typer.Option(False, "--disabled", help="Add the extension in disabled state"),
):
    """新增或替换一个扩展"""
    try:
        data = json.loads(payload)
        if not isinstance(data, dict):
            raise ValueError("payload must be a JSON object")
        data = {**data, "enabled": not disabled}
        entry = ExtensionEntry.model_validate(data)
    except (ValueError, ValidationError) as e:
        typer.echo(f"Invalid extension config: {e}", err=True)
        raise typer.Exit(code=2)

    get_extension_manager().extensions.set(entry)
    typer.echo(f"Saved extension '{entry.config.key()}'")


@app.command()
def remove(key: str):
    """按 Key 删除扩展"""
    get_extension_manager().extensions.remove(key)
    typer.echo(f"Removed extension '{key}'")


@app.command()
def enable(key: str):
    """启用单个扩展"""
    _toggle_extension(key, True)


@app.command()
def disable(key: str):
    """禁用单个扩展"""
    _toggle_extension(key, False)


@app.command()
def init():
    """写入默认的 developer 扩展 (已存在则跳过)"""
    registry = get_extension_manager().extensions
    entry = default_extension_entry()
    if entry.config.key() in registry.list_all_keys():
        typer.echo(f"Extension '{entry.config.key()}' already configured")
        return
    registry.set(entry)
    typer.echo(f"Added default extension '{entry.config.key()}'")


def _toggle_extension(key: str, enabled: bool):
    registry = get_extension_manager().extensions
    if key not in registry.list_all_keys():
        typer.echo(f"Extension '{key}' not found", err=True)
        raise typer.Exit(code=1)
    registry.set_enabled(key, enabled)
    typer.echo(f"{'Enabled' if enabled else 'Disabled'} extension '{key}'")


# --- Groups ---

@group_app.command("list")
def list_groups():
    """列出所有扩展组及其聚合状态"""
    manager = get_extension_manager()
    for group in sorted(manager.groups.list_all(), key=lambda g: g.key()):
        state = manager.aggregator.state_of(group.name)
        label = state.value if state else "?"
        typer.echo(f"{group.key()} [{label}] {group.name}: {', '.join(group.extension_keys)}")


@group_app.command("create")
def create_group(name: str, extension_keys: List[str] = typer.Argument(None)):
    """新增或替换扩展组"""
    group = ExtensionGroup(name=name, extension_keys=extension_keys or [])
    get_extension_manager().groups.set(group)
    typer.echo(f"Saved extension group '{group.key()}'")


@group_app.command("remove")
def remove_group(key: str):
    """按 Key 删除扩展组"""
    get_extension_manager().groups.remove(key)
    typer.echo(f"Removed extension group '{key}'")


@group_app.command("enable")
def enable_group(name: str):
    """启用组内所有扩展"""
    _toggle_group(name, True)


@group_app.command("disable")
def disable_group(name: str):
    """禁用组内所有扩展"""
    _toggle_group(name, False)


@group_app.command("state")
def group_state(name: str):
    """查看组的聚合状态 (Enabled / Disabled / Mixed)"""
    state = get_extension_manager().aggregator.state_of(name)
    if state is None:
        typer.echo(str(ExtensionGroupNotFoundError(name)), err=True)
        raise typer.Exit(code=1)
    typer.echo(state.value)


def _toggle_group(name: str, enabled: bool):
    aggregator = get_extension_manager().aggregator
    try:
        if enabled:
            changed = aggregator.enable_group(name)
        else:
            changed = aggregator.disable_group(name)
    except ExtensionGroupNotFoundError as e:
        typer.echo(e.message, err=True)
        raise typer.Exit(code=1)

    action = "Enabled" if enabled else "Disabled"
    suffix = "" if changed else " (no changes)"
    typer.echo(f"{action} extension group '{name}'{suffix}")


if __name__ == "__main__":
    app()
