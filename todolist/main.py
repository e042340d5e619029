"""
FastAPI 应用主入口（组合根）

TodoListContainer 在 lifespan 中创建并只 hydrate 一次，挂到 app.state，
路由通过依赖注入取用；关闭时先等待在途写入，再释放存储连接。
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from prometheus_client import make_asgi_app

from todolist.api.health import router as health_router
from todolist.api.todos import router as todos_router
from todolist.config import Settings, get_settings
from todolist.observability.logging_config import setup_logging
from todolist.observability.request_logger import RequestLoggerMiddleware
from todolist.store import KeyValueStore, create_store
from todolist.todo import TodoListContainer

log = structlog.get_logger()


def create_app(
    store: KeyValueStore | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """构建应用；测试时可注入独立的 store / settings"""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        setup_logging(env=settings.ENV, level=settings.LOG_LEVEL)
        log.info("应用启动", env=settings.ENV, app=settings.APP_NAME, backend=settings.STORE_BACKEND)

        kv = store if store is not None else create_store(settings)
        todo_list = TodoListContainer(
            kv,
            key=settings.TODO_LIST_KEY,
            max_retries=settings.TODO_WRITE_MAX_RETRIES,
            retry_delay=settings.TODO_WRITE_RETRY_DELAY,
        )
        # 存储不可用时 hydrate 会降级为空列表，不阻止启动
        await todo_list.hydrate()

        application.state.store = kv
        application.state.todo_list = todo_list

        yield

        await todo_list.flush()
        await kv.aclose()
        log.info("应用关闭，资源已释放", pending_writes=todo_list.pending_writes)

    application = FastAPI(
        title=settings.APP_NAME,
        version="0.1.0",
        lifespan=lifespan,
    )
    application.add_middleware(RequestLoggerMiddleware)
    application.mount("/metrics", make_asgi_app())
    application.include_router(health_router)
    application.include_router(todos_router)
    return application


if __name__ == "__main__":
    import uvicorn

    port = get_settings().APP_PORT
    uvicorn.run("todolist.main:create_app", factory=True, host="0.0.0.0", port=port)
