"""Root conftest：共享测试配置与 fixture"""

import os

# 测试不依赖真实 Redis；Settings 必填项给一个占位值
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/15")

import pytest

from todolist.store import MemoryStore
from todolist.todo import TodoListContainer

from tests.support import KEY


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
async def todo_list(store):
    """已完成加载（READY）的空列表，用例结束时等待在途写入"""
    container = TodoListContainer(store, key=KEY)
    await container.hydrate()
    yield container
    await container.flush()
