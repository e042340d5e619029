"""
Todo 模块：进程级唯一的 Todo 列表

提供 TodoListContainer（内存快照 + 写穿持久化）、PersistedBlob 编解码
以及异常体系，供 API 层通过依赖注入使用。
"""

from todolist.todo.codec import decode_items, encode_items
from todolist.todo.container import ContainerState, TodoListContainer
from todolist.todo.errors import (
    InvalidItem,
    InvalidPosition,
    PersistenceReadFailure,
    PersistenceWriteFailure,
    TodoListError,
    TodoListNotReady,
)

__all__ = [
    "ContainerState",
    "InvalidItem",
    "InvalidPosition",
    "PersistenceReadFailure",
    "PersistenceWriteFailure",
    "TodoListContainer",
    "TodoListError",
    "TodoListNotReady",
    "decode_items",
    "encode_items",
]
