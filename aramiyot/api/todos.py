"""
Dashboard todo list API
"""
from fastapi import APIRouter, Depends, HTTPException, status

from ..errors import InvalidInputError
from ..models.resources import TodoCreateRequest, TodoUpdateRequest
from ..services import TodoService, TodoNotFoundError
from .dependencies import get_todo_service

router = APIRouter(prefix="/api/todos", tags=["todos"])


def _not_found(todo_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Todo not found: {todo_id}")


@router.get("")
async def list_todos(todos: TodoService = Depends(get_todo_service)):
    return {"todos": [t.model_dump(by_alias=True, mode="json") for t in todos.list()]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_todo(request: TodoCreateRequest, todos: TodoService = Depends(get_todo_service)):
    try:
        todo = todos.add(request.text)
    except ValueError as e:
        raise InvalidInputError({"formErrors": [], "fieldErrors": {"text": [str(e)]}})
    return todo.model_dump(by_alias=True, mode="json")


@router.patch("/{todo_id}")
async def update_todo(todo_id: str, request: TodoUpdateRequest, todos: TodoService = Depends(get_todo_service)):
    """Set completion and/or text; an empty body toggles completion"""
    try:
        if request.completed is None and request.text is None:
            todo = todos.toggle(todo_id)
        else:
            todo = todos.update(todo_id, completed=request.completed, text=request.text)
    except TodoNotFoundError:
        raise _not_found(todo_id)
    except ValueError as e:
        raise InvalidInputError({"formErrors": [], "fieldErrors": {"text": [str(e)]}})
    return todo.model_dump(by_alias=True, mode="json")


@router.delete("/{todo_id}")
async def delete_todo(todo_id: str, todos: TodoService = Depends(get_todo_service)):
    try:
        todos.delete(todo_id)
    except TodoNotFoundError:
        raise _not_found(todo_id)
    return {"success": True}
