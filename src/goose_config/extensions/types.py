from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, StrictBool, StrictInt, StrictStr, model_serializer, model_validator

from goose_config.keys import name_to_key

DEFAULT_EXTENSION = "developer"
DEFAULT_EXTENSION_TIMEOUT = 300
DEFAULT_EXTENSION_DESCRIPTION = ""
DEFAULT_DISPLAY_NAME = "Developer"


# ==========================================
# 1. ExtensionConfig (按 "type" 字段区分的封闭联合类型)
# ==========================================

class BaseExtensionConfig(BaseModel):
    """
    所有扩展配置的公共字段。
    核心层只关心 name 和 key()，其余字段原样持久化。
    """
    name: StrictStr
    description: StrictStr
    bundled: Optional[StrictBool] = None
    available_tools: List[StrictStr] = Field(default_factory=list)

    def key(self) -> str:
        """存储 Key (规范化后的 name)"""
        return name_to_key(self.name)


class SseExtensionConfig(BaseExtensionConfig):
    type: Literal["sse"] = "sse"
    uri: StrictStr
    envs: Dict[str, StrictStr] = Field(default_factory=dict)
    env_keys: List[StrictStr] = Field(default_factory=list)
    timeout: Optional[StrictInt] = None


class StdioExtensionConfig(BaseExtensionConfig):
    """本地子进程方式启动的 MCP Server"""
    type: Literal["stdio"] = "stdio"
    cmd: StrictStr
    args: List[StrictStr]
    envs: Dict[str, StrictStr] = Field(default_factory=dict)
    env_keys: List[StrictStr] = Field(default_factory=list)
    timeout: Optional[StrictInt] = None


class BuiltinExtensionConfig(BaseExtensionConfig):
    type: Literal["builtin"] = "builtin"
    display_name: Optional[StrictStr] = None
    timeout: Optional[StrictInt] = None


class PlatformExtensionConfig(BaseExtensionConfig):
    """运行时内置的平台扩展，没有额外字段"""
    type: Literal["platform"] = "platform"


class StreamableHttpExtensionConfig(BaseExtensionConfig):
    type: Literal["streamable_http"] = "streamable_http"
    uri: StrictStr
    envs: Dict[str, StrictStr] = Field(default_factory=dict)
    env_keys: List[StrictStr] = Field(default_factory=list)
    headers: Dict[str, StrictStr] = Field(default_factory=dict)
    timeout: Optional[StrictInt] = None


class FrontendExtensionConfig(BaseExtensionConfig):
    """工具由前端提供和执行"""
    type: Literal["frontend"] = "frontend"
    tools: List[Dict[str, Any]]
    instructions: Optional[StrictStr] = None


class InlinePythonExtensionConfig(BaseExtensionConfig):
    type: Literal["inline_python"] = "inline_python"
    code: StrictStr
    timeout: Optional[StrictInt] = None
    dependencies: Optional[List[StrictStr]] = None


ExtensionConfig = Annotated[
    Union[
        SseExtensionConfig,
        StdioExtensionConfig,
        BuiltinExtensionConfig,
        PlatformExtensionConfig,
        StreamableHttpExtensionConfig,
        FrontendExtensionConfig,
        InlinePythonExtensionConfig,
    ],
    Field(discriminator="type"),
]


# ==========================================
# 2. ExtensionEntry (持久化时 config 字段被拍平)
# ==========================================

class ExtensionEntry(BaseModel):
    """
    一条扩展记录：enabled 开关 + 配置。
    存储形态是扁平的：{"enabled": true, "type": "stdio", "name": ..., ...}
    """
    enabled: bool = Field(strict=True)
    config: ExtensionConfig

    @model_validator(mode="before")
    @classmethod
    def unflatten_config(cls, data: Any) -> Any:
        # 扁平的存储形态 -> {"enabled": ..., "config": {...}}
        # config 已是模型实例 = 直接构造；其余 dict 一律按扁平形态处理
        if isinstance(data, dict) and not isinstance(data.get("config"), BaseExtensionConfig):
            config = dict(data)
            nested: Dict[str, Any] = {"config": config}
            if "enabled" in config:
                nested["enabled"] = config.pop("enabled")
            return nested
        return data

    @model_serializer(mode="wrap")
    def flatten_config(self, handler) -> Dict[str, Any]:
        data = handler(self)
        return {"enabled": data["enabled"], **data["config"]}


def default_extension_entry() -> ExtensionEntry:
    """默认启用的 developer 扩展"""
    return ExtensionEntry(
        enabled=True,
        config=BuiltinExtensionConfig(
            name=DEFAULT_EXTENSION,
            display_name=DEFAULT_DISPLAY_NAME,
            description=DEFAULT_EXTENSION_DESCRIPTION,
            timeout=DEFAULT_EXTENSION_TIMEOUT,
            bundled=True,
        ),
    )


# ==========================================
# 3. 扩展组
# ==========================================

class ExtensionGroupState(str, Enum):
    """组的聚合状态，只在查询时推导，不落盘"""
    ENABLED = "Enabled"
    DISABLED = "Disabled"
    MIXED = "Mixed"


class ExtensionGroup(BaseModel):
    """
    一组扩展 Key 的有序集合，用于批量启停。
    extension_keys 可以引用当前并不存在的扩展，这种引用会被忽略而不是报错。
    """
    name: str
    extension_keys: List[str]

    def key(self) -> str:
        return name_to_key(self.name)
