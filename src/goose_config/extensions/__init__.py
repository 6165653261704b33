from .types import (
    DEFAULT_DISPLAY_NAME,
    DEFAULT_EXTENSION,
    DEFAULT_EXTENSION_DESCRIPTION,
    DEFAULT_EXTENSION_TIMEOUT,
    BuiltinExtensionConfig,
    ExtensionConfig,
    ExtensionEntry,
    ExtensionGroup,
    ExtensionGroupState,
    FrontendExtensionConfig,
    InlinePythonExtensionConfig,
    PlatformExtensionConfig,
    SseExtensionConfig,
    StdioExtensionConfig,
    StreamableHttpExtensionConfig,
    default_extension_entry,
)
from .platform import PLATFORM_EXTENSIONS, PlatformExtensionDef
from .registry import ExtensionRegistry
from .groups import ExtensionGroupRegistry, GroupStateAggregator

__all__ = [
    "DEFAULT_DISPLAY_NAME",
    "DEFAULT_EXTENSION",
    "DEFAULT_EXTENSION_DESCRIPTION",
    "DEFAULT_EXTENSION_TIMEOUT",
    "BuiltinExtensionConfig",
    "ExtensionConfig",
    "ExtensionEntry",
    "ExtensionGroup",
    "ExtensionGroupState",
    "FrontendExtensionConfig",
    "InlinePythonExtensionConfig",
    "PlatformExtensionConfig",
    "SseExtensionConfig",
    "StdioExtensionConfig",
    "StreamableHttpExtensionConfig",
    "default_extension_entry",
    "PLATFORM_EXTENSIONS",
    "PlatformExtensionDef",
    "ExtensionRegistry",
    "ExtensionGroupRegistry",
    "GroupStateAggregator",
]
