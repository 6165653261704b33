import json
import logging
from typing import Any, Callable, Dict, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError

from goose_config.errors import ConfigStoreError
from goose_config.store import ConfigStore

logger = logging.getLogger("goose_config.extensions.codec")

T = TypeVar("T", bound=BaseModel)


def read_object(store: ConfigStore, storage_key: str) -> Dict[str, Any]:
    """
    读取 storage_key 下的原始 JSON 对象。
    读失败或者不是对象时退化为空 dict，只打 warning，从不抛出。
    """
    try:
        raw = store.get_param(storage_key)
    except ConfigStoreError as e:
        logger.warning(f"Failed to load {storage_key}: {e}. Falling back to empty object.")
        raw = {}

    if not isinstance(raw, dict):
        logger.warning(f"Expected object for {storage_key}, got {_dump(raw)}. Using empty map.")
        return {}
    return raw


def parse_each(
    raw: Mapping[str, Any],
    model_cls: Type[T],
    label: str,
    prepare: Optional[Callable[[Any], Any]] = None,
) -> Dict[str, T]:
    """
    逐条解析 raw 里的每个 (key, value)。
    单条失败只跳过这一条并记录 key / 错误 / 原始 JSON，其余照常返回。
    """
    parsed: Dict[str, T] = {}
    for key, value in raw.items():
        if prepare is not None:
            value = prepare(value)
        try:
            parsed[key] = model_cls.model_validate(value)
        except ValidationError as e:
            logger.warning(
                f"Skipping malformed {label} '{key}': {e.error_count()} error(s): {e} | bad_json={_dump(value)}"
            )
    return parsed


def write_object(store: ConfigStore, storage_key: str, items: Mapping[str, BaseModel], label: str) -> bool:
    """
    整体序列化并一次写入 storage_key。
    失败只记 debug 日志；返回值表示是否真正写进了存储。
    """
    try:
        value = {key: item.model_dump(mode="json") for key, item in items.items()}
    except PydanticSerializationError as e:
        logger.debug(f"Failed to serialize {label}: {e}")
        return False

    try:
        store.set_param(storage_key, value)
    except ConfigStoreError as e:
        logger.debug(f"Failed to save {label} config: {e}")
        return False
    return True


def _dump(value: Any) -> str:
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        return f"<failed to serialize malformed value: {e}>"
