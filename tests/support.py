"""测试辅助：固定 Key、指标读取、KeyValueStore 的失败/阻塞/抖动变体"""

import asyncio

from prometheus_client import REGISTRY

from todolist.store import MemoryStore

KEY = "todo:test"


def metric(name: str, **labels: str) -> float:
    """读取 Prometheus 指标当前值，未出现过的标签组合视为 0"""
    return REGISTRY.get_sample_value(name, labels) or 0.0


class FailingStore(MemoryStore):
    """读写都失败"""

    def __init__(self, initial: dict[str, str] | None = None):
        super().__init__(initial)
        self.set_calls = 0

    async def get(self, key: str) -> str | None:
        raise ConnectionError("store unavailable")

    async def set(self, key: str, value: str) -> None:
        self.set_calls += 1
        raise ConnectionError("store unavailable")

    async def ping(self) -> bool:
        raise ConnectionError("store unavailable")


class FlakyStore(MemoryStore):
    """前 failures 次写入失败，之后成功"""

    def __init__(self, failures: int):
        super().__init__()
        self.failures = failures
        self.set_calls = 0

    async def set(self, key: str, value: str) -> None:
        self.set_calls += 1
        if self.set_calls <= self.failures:
            raise ConnectionError("transient failure")
        await super().set(key, value)


class GatedStore(MemoryStore):
    """get / set 在 gate 打开前挂起，用于观察在途状态"""

    def __init__(self, initial: dict[str, str] | None = None):
        super().__init__(initial)
        self.gate = asyncio.Event()
        self.get_calls = 0
        self.written: list[str] = []

    async def get(self, key: str) -> str | None:
        self.get_calls += 1
        await self.gate.wait()
        return await super().get(key)

    async def set(self, key: str, value: str) -> None:
        self.written.append(value)
        await self.gate.wait()
        await super().set(key, value)
