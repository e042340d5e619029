"""
Todo 列表异常体系

- InvalidPosition / InvalidItem / TodoListNotReady：调用方错误，直接抛给调用方
- PersistenceReadFailure / PersistenceWriteFailure：存储边界错误，
  由容器内部捕获并记录日志，永远不会传到展示层
"""


class TodoListError(Exception):
    """Todo 列表的应用级异常基类"""

    code = "todo_list_error"

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


class InvalidPosition(TodoListError, IndexError):
    """删除位置越界（或不是合法的非负整数）"""

    code = "invalid_position"

    def __init__(self, position: object, length: int):
        super().__init__(f"位置 {position!r} 越界，当前列表长度为 {length}")
        self.position = position
        self.length = length


class InvalidItem(TodoListError, TypeError):
    """追加的条目不是字符串"""

    code = "invalid_item"

    def __init__(self, item: object):
        super().__init__(f"条目必须是字符串，实际为 {type(item).__name__}")
        self.item = item


class TodoListNotReady(TodoListError):
    """列表尚未完成加载，或调用方不在事件循环中，拒绝变更"""

    code = "not_ready"


class PersistenceReadFailure(TodoListError):
    """启动加载时读取或解析持久化数据失败"""

    code = "persistence_read_failure"


class PersistenceWriteFailure(TodoListError):
    """变更后的写回失败"""

    code = "persistence_write_failure"
