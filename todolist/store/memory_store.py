"""
内存存储：进程内 dict，STORE_BACKEND=memory 或测试时使用
"""


class MemoryStore:
    """进程内 KeyValueStore，重启即丢失"""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def ping(self) -> bool:
        return True

    async def aclose(self) -> None:
        return None
