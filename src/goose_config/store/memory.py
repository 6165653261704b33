import copy
from collections import Counter
from typing import Any, Dict, Optional

from goose_config.errors import ConfigKeyNotFoundError, ConfigStoreError
from .base import ConfigStore


class MemoryConfigStore(ConfigStore):
    """
    纯内存实现，主要给测试和嵌入式场景用。
    - 读写都做 deepcopy，调用方拿到的永远是值语义的副本
    - reads / writes 按 Key 计数，方便断言 "这次操作没有写存储"
    - fail_reads / fail_writes 打开后模拟存储故障
    """

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self.values: Dict[str, Any] = copy.deepcopy(initial) if initial else {}
        self.reads: Counter = Counter()
        self.writes: Counter = Counter()
        self.fail_reads = False
        self.fail_writes = False

    def _read(self, key: str) -> Any:
        self.reads[key] += 1
        if self.fail_reads:
            raise ConfigStoreError(f"Simulated read failure for '{key}'")
        if key not in self.values:
            raise ConfigKeyNotFoundError(key)
        return copy.deepcopy(self.values[key])

    def _write(self, key: str, value: Any) -> None:
        if self.fail_writes:
            raise ConfigStoreError(f"Simulated write failure for '{key}'")
        self.writes[key] += 1
        self.values[key] = copy.deepcopy(value)
