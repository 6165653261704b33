import json
from abc import ABC, abstractmethod
from typing import Any, Optional, Type

from pydantic import TypeAdapter, ValidationError

from goose_config.errors import ConfigStoreError


class ConfigStore(ABC):
    """
    [Trait] 进程级 Key-Value 配置存储接口。
    每个 Key 下存放一个 JSON 形态的值 (dict / list / str / number / bool / None)。

    实现类只需要提供 _read / _write，出错时抛 ConfigStoreError
    (Key 不存在时抛 ConfigKeyNotFoundError)。
    """

    @abstractmethod
    def _read(self, key: str) -> Any:
        pass

    @abstractmethod
    def _write(self, key: str, value: Any) -> None:
        pass

    def get_param(self, key: str, type_: Optional[Type] = None) -> Any:
        """
        读取 Key 对应的值。
        传入 type_ 时用 pydantic TypeAdapter 校验并转换，失败抛 ConfigStoreError。
        """
        raw = self._read(key)
        if type_ is None:
            return raw
        try:
            return TypeAdapter(type_).validate_python(raw)
        except ValidationError as e:
            raise ConfigStoreError(f"Config key '{key}' has unexpected shape: {e}") from e

    def set_param(self, key: str, value: Any) -> None:
        """写入 Key，值必须能序列化为 JSON"""
        try:
            json.dumps(value)
        except (TypeError, ValueError) as e:
            raise ConfigStoreError(f"Value for '{key}' is not JSON serializable: {e}") from e
        self._write(key, value)
