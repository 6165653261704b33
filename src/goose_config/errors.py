class GooseConfigError(Exception):
    """
    goose_config 所有异常的基类。
    """
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message


class ConfigStoreError(GooseConfigError):
    """
    配置存储读写失败（文件损坏、IO 错误、值无法序列化等）。
    Registry 层会把它降级为 warning / debug 日志，不向调用方抛出。
    """
    pass


class ConfigKeyNotFoundError(ConfigStoreError):
    """存储中不存在该 Key"""
    def __init__(self, key: str):
        super().__init__(f"Config key '{key}' not found")
        self.key = key


class ExtensionGroupNotFoundError(GooseConfigError):
    """
    按名称找不到扩展组。
    这是唯一会传播给调用方的领域错误 (enable_group / disable_group)。
    """
    def __init__(self, group_name: str):
        super().__init__(f"Extension group '{group_name}' not found")
        self.group_name = group_name
