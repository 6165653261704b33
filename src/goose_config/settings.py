from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

# 默认配置路径 (~/.config/goose/config.yaml)
DEFAULT_CONFIG_DIR = Path.home() / ".config" / "goose"
DEFAULT_CONFIG_FILE = "config.yaml"

EXTENSIONS_CONFIG_KEY = "extensions"
EXTENSION_GROUPS_CONFIG_KEY = "extension_groups"


class ExtensionSettings(BaseSettings):
    # 存储位置
    config_dir: Path = DEFAULT_CONFIG_DIR
    config_file: str = DEFAULT_CONFIG_FILE

    # 两个约定的存储 Key
    extensions_key: str = EXTENSIONS_CONFIG_KEY
    extension_groups_key: str = EXTENSION_GROUPS_CONFIG_KEY

    # 是否允许环境变量 (EXTENSIONS=...) 覆盖文件里的值
    env_override: bool = True

    log_level: str = "INFO"

    # 自动读取 GOOSE_ 前缀的环境变量和当前目录下的 .env
    model_config = SettingsConfigDict(env_prefix="GOOSE_", env_file=".env", extra="ignore")

    @property
    def config_path(self) -> Path:
        return self.config_dir / self.config_file


_global_settings: Optional[ExtensionSettings] = None


def get_settings() -> ExtensionSettings:
    global _global_settings
    if _global_settings is None:
        _global_settings = ExtensionSettings()
    return _global_settings
