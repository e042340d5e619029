"""
Prometheus 指标定义

所有指标统一在此文件定义，容器和中间件按需引用。
"""

from prometheus_client import Counter, Gauge, Histogram

# ── 请求级指标 ──

REQUEST_TOTAL = Counter(
    "todolist_request_total",
    "HTTP 请求总数",
    ["method", "endpoint", "status_code"],
)

REQUEST_DURATION = Histogram(
    "todolist_request_duration_ms",
    "HTTP 请求耗时（毫秒）",
    ["method", "endpoint"],
    buckets=[5, 10, 25, 50, 100, 250, 500, 1000],
)

# ── 列表变更 ──

MUTATION_TOTAL = Counter(
    "todolist_mutation_total",
    "列表变更总数",
    ["operation"],  # operation: append/remove_at
)

ITEM_COUNT = Gauge(
    "todolist_items",
    "当前内存中的条目数",
)

# ── 持久化 ──

PERSIST_WRITE_TOTAL = Counter(
    "todolist_persist_write_total",
    "写回存储的结果统计",
    ["outcome"],  # outcome: ok/failed/retry/superseded
)

HYDRATION_TOTAL = Counter(
    "todolist_hydration_total",
    "启动加载结果统计",
    ["outcome"],  # outcome: empty/loaded/failed
)
