"""
TodoListContainer：内存中唯一的 Todo 列表 + 写穿（write-through）持久化

生命周期：UNINITIALIZED → HYDRATING → READY
- hydrate() 只执行一次：从存储读取 JSON，读取/解析失败降级为空列表
- append / remove_at 同步替换内存快照并通知订阅者，然后后台写回存储

写回策略（发后即忘）：
- 每次变更生成一个递增序号，后台任务按调用顺序逐个写入
- 排队时已被更新的变更覆盖的写入直接跳过（新快照已包含完整列表）
- 写入失败记录日志并按配置重试，不回滚内存，也不抛给调用方
"""

import asyncio
import enum
from collections.abc import Callable

import structlog

from todolist.observability.metrics import (
    HYDRATION_TOTAL,
    ITEM_COUNT,
    MUTATION_TOTAL,
    PERSIST_WRITE_TOTAL,
)
from todolist.store.base import KeyValueStore, RedisKeys
from todolist.todo.codec import decode_items, encode_items
from todolist.todo.errors import (
    InvalidItem,
    InvalidPosition,
    PersistenceReadFailure,
    PersistenceWriteFailure,
    TodoListNotReady,
)

log = structlog.get_logger()

Snapshot = tuple[str, ...]
Listener = Callable[[Snapshot], None]


class ContainerState(str, enum.Enum):
    UNINITIALIZED = "uninitialized"
    HYDRATING = "hydrating"
    READY = "ready"


class TodoListContainer:
    """Todo 列表的唯一持有者，展示层只读快照、只调两个变更入口"""

    def __init__(
        self,
        store: KeyValueStore,
        key: str | None = None,
        max_retries: int = 0,
        retry_delay: float = 0.0,
    ):
        self._store = store
        self._key = key if key is not None else RedisKeys.todo_list()
        if not self._key:
            raise ValueError("key 不能为空字符串")
        self._max_retries = max_retries
        self._retry_delay = retry_delay

        self._items: Snapshot = ()
        self._state = ContainerState.UNINITIALIZED
        self._listeners: list[Listener] = []

        # 写回相关
        self._write_seq = 0
        self._write_lock = asyncio.Lock()
        self._pending: set[asyncio.Task] = set()

    # ── 只读访问 ──

    @property
    def snapshot(self) -> Snapshot:
        """当前完整列表（不可变 tuple）"""
        return self._items

    @property
    def is_empty(self) -> bool:
        return not self._items

    @property
    def state(self) -> ContainerState:
        return self._state

    @property
    def key(self) -> str:
        return self._key

    @property
    def pending_writes(self) -> int:
        return len(self._pending)

    def __len__(self) -> int:
        return len(self._items)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        订阅快照变化，返回取消订阅函数。
        listener 在快照替换后同步调用，参数为新快照。
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ── 启动加载 ──

    async def hydrate(self) -> None:
        """从存储加载列表，整个生命周期只执行一次"""
        if self._state is not ContainerState.UNINITIALIZED:
            log.warning("重复调用 hydrate，已忽略", state=self._state.value, key=self._key)
            return

        self._state = ContainerState.HYDRATING
        try:
            raw = await self._store.get(self._key)
            if raw is None:
                HYDRATION_TOTAL.labels(outcome="empty").inc()
                log.info("存储中无历史数据，使用空列表", key=self._key)
                return
            items = decode_items(raw)
            self._replace(tuple(items))
            HYDRATION_TOTAL.labels(outcome="loaded").inc()
            log.info("列表加载完成", key=self._key, count=len(items))
        except Exception as e:
            # 可用性优先：存储不可读或数据损坏时以空列表启动
            failure = e if isinstance(e, PersistenceReadFailure) else PersistenceReadFailure(
                f"读取持久化数据失败: {e}", cause=e
            )
            HYDRATION_TOTAL.labels(outcome="failed").inc()
            log.error(
                "列表加载失败，降级为空列表",
                key=self._key,
                code=failure.code,
                error=str(failure),
            )
        finally:
            self._state = ContainerState.READY

    # ── 变更 ──

    def append(self, item: str) -> None:
        """在末尾追加一条，非字符串抛 InvalidItem"""
        loop = self._ensure_ready()
        if not isinstance(item, str):
            raise InvalidItem(item)
        self._replace((*self._items, item))
        MUTATION_TOTAL.labels(operation="append").inc()
        self._persist(loop)

    def remove_at(self, position: int) -> None:
        """删除指定位置（0 起始）的条目，越界抛 InvalidPosition"""
        loop = self._ensure_ready()
        # bool 是 int 的子类，这里显式排除；负数不按 Python 习惯倒序解释
        if (
            not isinstance(position, int)
            or isinstance(position, bool)
            or not 0 <= position < len(self._items)
        ):
            raise InvalidPosition(position, len(self._items))
        self._replace(self._items[:position] + self._items[position + 1:])
        MUTATION_TOTAL.labels(operation="remove_at").inc()
        self._persist(loop)

    async def flush(self) -> None:
        """等待所有在途写入结束（关闭前 / 测试中使用）"""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    # ── 内部实现 ──

    def _ensure_ready(self) -> asyncio.AbstractEventLoop:
        """变更前置检查：已加载完成，且处于事件循环中（写回任务要挂到循环上）"""
        if self._state is not ContainerState.READY:
            raise TodoListNotReady(f"列表尚未加载完成，当前状态: {self._state.value}")
        try:
            return asyncio.get_running_loop()
        except RuntimeError as e:
            raise TodoListNotReady("变更必须在运行中的事件循环内调用", cause=e) from e

    def _replace(self, items: Snapshot) -> None:
        """单步替换快照，然后通知订阅者"""
        self._items = items
        ITEM_COUNT.set(len(items))
        for listener in list(self._listeners):
            try:
                listener(items)
            except Exception as e:
                # 订阅者出错不影响变更本身和其它订阅者
                log.error("快照订阅者回调异常", error=str(e), exc_info=True)

    def _persist(self, loop: asyncio.AbstractEventLoop) -> None:
        """序列化当前快照并在后台写回（发后即忘）"""
        self._write_seq += 1
        seq = self._write_seq
        blob = encode_items(self._items)

        task = loop.create_task(self._safe_write(seq, blob))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _safe_write(self, seq: int, blob: str) -> None:
        # asyncio.Lock 按等待顺序唤醒，保证写入顺序与变更顺序一致
        async with self._write_lock:
            attempt = 0
            while True:
                if seq != self._write_seq:
                    PERSIST_WRITE_TOTAL.labels(outcome="superseded").inc()
                    log.debug("写入已被更新的变更覆盖，跳过", seq=seq, latest=self._write_seq)
                    return
                try:
                    await self._store.set(self._key, blob)
                    PERSIST_WRITE_TOTAL.labels(outcome="ok").inc()
                    return
                except Exception as e:
                    failure = PersistenceWriteFailure(f"写回存储失败: {e}", cause=e)
                    if attempt >= self._max_retries:
                        PERSIST_WRITE_TOTAL.labels(outcome="failed").inc()
                        log.error(
                            "列表写回失败，内存与存储可能不一致",
                            key=self._key,
                            seq=seq,
                            attempts=attempt + 1,
                            code=failure.code,
                            error=str(failure),
                        )
                        return
                    attempt += 1
                    PERSIST_WRITE_TOTAL.labels(outcome="retry").inc()
                    log.warning("列表写回失败，准备重试", key=self._key, seq=seq, attempt=attempt, error=str(e))
                    await asyncio.sleep(self._retry_delay * attempt)
