"""
PersistedBlob 编解码：字符串数组 <-> JSON 文本
"""

import json
from collections.abc import Sequence

from pydantic import TypeAdapter, ValidationError

from todolist.todo.errors import PersistenceReadFailure

_items_adapter = TypeAdapter(list[str])


def encode_items(items: Sequence[str]) -> str:
    """序列化为 JSON 数组，中文原样保留"""
    return json.dumps(list(items), ensure_ascii=False)


def decode_items(raw: str) -> list[str]:
    """反序列化；内容不是字符串数组时抛 PersistenceReadFailure"""
    try:
        # strict：不允许把数字等其它类型悄悄转成字符串
        return _items_adapter.validate_json(raw, strict=True)
    except ValidationError as e:
        raise PersistenceReadFailure(f"持久化数据格式错误: {e}", cause=e) from e
