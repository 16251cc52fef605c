import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .store import StoreError, TodoStore

logger = logging.getLogger(__name__)

EMPTY_MESSAGE = "Try adding a todo ☝️"


@dataclass
class TodoListView:
    """What the list fragment shows: loading, error, or the rows."""

    todos: Optional[List[Dict[str, Any]]] = None
    error: Optional[str] = None

    @property
    def status(self) -> str:
        if self.error is not None:
            return "error"
        if self.todos is None:
            return "loading"
        return "ready"

    @property
    def is_empty(self) -> bool:
        return self.status == "ready" and not self.todos

    @classmethod
    def loading(cls) -> "TodoListView":
        return cls()

    @classmethod
    def load(cls, store: TodoStore) -> "TodoListView":
        try:
            todos = store.list()
        except StoreError as exc:
            logger.error("Error loading todos: %s", exc.message)
            return cls(error=exc.message)
        return cls(todos=[t.to_dict() for t in todos])
