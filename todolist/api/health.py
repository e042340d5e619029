"""
健康检查接口：探活 + 存储连接 + 列表加载状态
"""

import structlog
from fastapi import APIRouter, Depends, Request

from todolist.api.todos import get_todo_list
from todolist.todo import ContainerState, TodoListContainer

router = APIRouter(tags=["健康检查"])
log = structlog.get_logger()


@router.get("/health")
async def health_check(
    request: Request,
    todo_list: TodoListContainer = Depends(get_todo_list),
):
    """健康检查：校验存储连接 + 列表是否已加载"""
    result = {"status": "ok", "store": "ok", "todo_list": todo_list.state.value}

    try:
        await request.app.state.store.ping()
    except Exception as e:
        result["store"] = f"error: {e}"
        result["status"] = "degraded"
        log.error("存储健康检查失败", error=str(e))

    if todo_list.state is not ContainerState.READY:
        result["status"] = "degraded"

    return result
