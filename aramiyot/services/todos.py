"""
Dashboard todo list in local storage
"""
import uuid
from typing import List, Optional

from pydantic import ValidationError

from ..errors import StorageError
from ..models.resources import TodoItem
from ..storage.keys import TODOS_KEY
from ..storage.local import LocalStorage
from ..utils.logger import setup_logger

logger = setup_logger(__name__)


class TodoNotFoundError(KeyError):
    pass


class TodoService:
    """A single todo list under a fixed key"""

    def __init__(self, storage: LocalStorage):
        self.storage = storage

    def list(self) -> List[TodoItem]:
        try:
            raw = self.storage.get_json(TODOS_KEY, [])
            return [TodoItem.model_validate(item) for item in raw]
        except (StorageError, ValidationError, TypeError) as e:
            logger.error(f"Failed to load todos: {e}")
            return []

    def _save(self, todos: List[TodoItem]):
        self.storage.set_json(TODOS_KEY, [t.model_dump(by_alias=True, mode="json") for t in todos])

    def add(self, text: str) -> TodoItem:
        cleaned = (text or "").strip()
        if not cleaned:
            raise ValueError("Todo text cannot be blank")

        todo = TodoItem(id=str(uuid.uuid4()), text=cleaned)
        todos = self.list()
        todos.append(todo)
        self._save(todos)
        return todo

    def update(self, todo_id: str, completed: Optional[bool] = None, text: Optional[str] = None) -> TodoItem:
        todos = self.list()
        for todo in todos:
            if todo.id == todo_id:
                if completed is not None:
                    todo.completed = completed
                if text is not None:
                    if not text.strip():
                        raise ValueError("Todo text cannot be blank")
                    todo.text = text.strip()
                self._save(todos)
                return todo
        raise TodoNotFoundError(todo_id)

    def toggle(self, todo_id: str) -> TodoItem:
        for todo in self.list():
            if todo.id == todo_id:
                return self.update(todo_id, completed=not todo.completed)
        raise TodoNotFoundError(todo_id)

    def delete(self, todo_id: str):
        todos = self.list()
        remaining = [t for t in todos if t.id != todo_id]
        if len(remaining) == len(todos):
            raise TodoNotFoundError(todo_id)
        self._save(remaining)
