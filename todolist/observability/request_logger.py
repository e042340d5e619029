"""
请求日志 + 指标中间件：trace_id 注入、请求起止日志、请求计数与耗时
"""

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from todolist.observability.metrics import REQUEST_DURATION, REQUEST_TOTAL

log = structlog.get_logger()

# 不记日志也不计指标的路径
_QUIET_PATHS = ("/metrics", "/health")


class RequestLoggerMiddleware(BaseHTTPMiddleware):
    """HTTP 请求日志 + trace_id 上下文注入"""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        if path.startswith(_QUIET_PATHS):
            return await call_next(request)

        trace_id = request.headers.get("X-Trace-ID") or str(uuid.uuid4())
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(trace_id=trace_id)

        start = time.monotonic()
        log.info("请求开始", method=request.method, path=path)

        response = await call_next(request)

        duration_ms = (time.monotonic() - start) * 1000
        log.info(
            "请求结束",
            method=request.method,
            path=path,
            status_code=response.status_code,
            duration_ms=int(duration_ms),
        )

        # 路由模板作为 endpoint 标签，避免 /todos/{position} 按位置爆出无数个标签
        route = request.scope.get("route")
        endpoint = getattr(route, "path", path)
        REQUEST_TOTAL.labels(
            method=request.method, endpoint=endpoint, status_code=str(response.status_code)
        ).inc()
        REQUEST_DURATION.labels(method=request.method, endpoint=endpoint).observe(duration_ms)

        response.headers["X-Trace-ID"] = trace_id
        return response
