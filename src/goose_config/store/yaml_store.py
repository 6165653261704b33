import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from goose_config.errors import ConfigKeyNotFoundError, ConfigStoreError
from .base import ConfigStore

logger = logging.getLogger("goose_config.store.yaml")


class YamlConfigStore(ConfigStore):
    """
    基于 YAML 文件的配置存储 (默认 ~/.config/goose/config.yaml)。

    读取优先级：环境变量 (Key 的大写形式) > 配置文件。
    环境变量的值先按 JSON 解析，解析失败则当作普通字符串。
    每次读都重新加载整个文件，不做缓存。
    """

    def __init__(self, path: Union[str, Path], env_override: bool = True):
        self.path = Path(path)
        self.env_override = env_override

    def _load_document(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            raise ConfigStoreError(f"Failed to read config from {self.path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigStoreError(f"Config file {self.path} does not contain a mapping")
        return data

    def _read(self, key: str) -> Any:
        if self.env_override:
            env_val = os.environ.get(key.upper())
            if env_val is not None:
                try:
                    return json.loads(env_val)
                except ValueError:
                    return env_val

        doc = self._load_document()
        if key not in doc:
            raise ConfigKeyNotFoundError(key)
        return doc[key]

    def _write(self, key: str, value: Any) -> None:
        doc = self._load_document()
        doc[key] = value

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            # 先写临时文件再替换，避免写到一半留下损坏的配置
            fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    yaml.safe_dump(doc, f, allow_unicode=True, sort_keys=False)
                os.replace(tmp_path, self.path)
            except Exception:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except (OSError, yaml.YAMLError) as e:
            raise ConfigStoreError(f"Failed to write config to {self.path}: {e}") from e

        logger.debug(f"💾 Wrote '{key}' to {self.path}")
