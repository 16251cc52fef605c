from .store import StoreError, TodoStore
from .schemas import TodoCreate, TodoUpdate
from .views import TodoListView

__all__ = ["StoreError", "TodoStore", "TodoCreate", "TodoUpdate", "TodoListView"]
