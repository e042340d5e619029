"""
/todos 接口：展示层对 Todo 列表的读写入口

端点：
- GET    /todos  当前快照（含 empty 标记，供空状态占位展示）
- POST   /todos  末尾追加
- DELETE /todos/{position}  按位置删除

接口只依赖 TodoListContainer，持久化细节对调用方完全透明。
"""

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel

from todolist.todo import InvalidPosition, TodoListContainer, TodoListNotReady

router = APIRouter(prefix="/todos", tags=["Todo"])
log = structlog.get_logger()


class AddTodoRequest(BaseModel):
    text: str


class TodoListResponse(BaseModel):
    items: list[str]
    empty: bool

    @classmethod
    def of(cls, container: TodoListContainer) -> "TodoListResponse":
        return cls(items=list(container.snapshot), empty=container.is_empty)


def get_todo_list(request: Request) -> TodoListContainer:
    """FastAPI 依赖注入：获取应用级 TodoListContainer"""
    return request.app.state.todo_list


@router.get("", response_model=TodoListResponse)
async def list_todos(todo_list: TodoListContainer = Depends(get_todo_list)):
    return TodoListResponse.of(todo_list)


@router.post("", response_model=TodoListResponse, status_code=status.HTTP_201_CREATED)
async def add_todo(
    body: AddTodoRequest,
    todo_list: TodoListContainer = Depends(get_todo_list),
):
    try:
        todo_list.append(body.text)
    except TodoListNotReady as e:
        raise HTTPException(status_code=503, detail=str(e)) from e
    return TodoListResponse.of(todo_list)


@router.delete("/{position}", response_model=TodoListResponse)
async def remove_todo(
    position: int,
    todo_list: TodoListContainer = Depends(get_todo_list),
):
    try:
        todo_list.remove_at(position)
    except InvalidPosition as e:
        log.info("删除位置越界", position=position, length=e.length)
        raise HTTPException(status_code=404, detail=str(e)) from e
    except TodoListNotReady as e:
        raise HTTPException(status_code=503, detail=str(e)) from e
    return TodoListResponse.of(todo_list)
