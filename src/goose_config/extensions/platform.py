from typing import Dict

from pydantic import BaseModel


class PlatformExtensionDef(BaseModel):
    """内置平台扩展的静态定义"""
    name: str
    display_name: str
    description: str


# Key -> 定义。只要扩展表非空，加载时会把缺失的平台扩展补进去。
PLATFORM_EXTENSIONS: Dict[str, PlatformExtensionDef] = {
    "todo": PlatformExtensionDef(
        name="todo",
        display_name="Todo",
        description="Enable a todo list for goose so it can keep track of what it is doing",
    ),
    "chatrecall": PlatformExtensionDef(
        name="chatrecall",
        display_name="Chat Recall",
        description="Search past conversations and load session summaries for contextual memory",
    ),
    "extensionmanager": PlatformExtensionDef(
        name="extensionmanager",
        display_name="Extension Manager",
        description="Enable extension management tools for discovering, enabling, and disabling extensions",
    ),
    "skills": PlatformExtensionDef(
        name="skills",
        display_name="Skills",
        description="Load and use skills from relevant directories",
    ),
}
