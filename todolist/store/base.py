"""
存储适配器协议 + Key 统一管理
"""

from typing import Protocol

from todolist.config import DEFAULT_TODO_LIST_KEY


class KeyValueStore(Protocol):
    """异步 Key-Value 存储协议，值统一为字符串"""

    async def get(self, key: str) -> str | None:
        """读取 key 对应的值，从未写入过时返回 None"""
        ...

    async def set(self, key: str, value: str) -> None:
        """覆盖写入 key"""
        ...

    async def ping(self) -> bool:
        """健康检查"""
        ...

    async def aclose(self) -> None:
        """释放连接"""
        ...


class RedisKeys:
    """
    Key 统一管理，避免散弹式硬编码
    命名规范：{业务域}:{资源类型}
    """

    # ── Todo 列表（整表一个 String） ──
    @staticmethod
    def todo_list() -> str:
        """Todo 列表序列化后的 JSON 字符串（无 TTL，长期保存）"""
        return DEFAULT_TODO_LIST_KEY
