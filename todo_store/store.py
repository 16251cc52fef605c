"""
Data access for the ``todos`` table.

Every method works on the session bound to the current Flask application
context, so a store instance can be shared between requests and worker
threads as long as each caller has pushed its own app context.
"""

import logging
from typing import List, Optional

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.exc import SQLAlchemyError

from db_models import Todo

logger = logging.getLogger(__name__)


class StoreError(RuntimeError):
    """Raised when the datastore rejects or fails an operation."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TodoStore:
    """Create/read/update/delete over the single Todo table."""

    def __init__(self, db: SQLAlchemy) -> None:
        self.db = db

    @property
    def session(self):
        return self.db.session

    def _fail(self, action: str, exc: SQLAlchemyError) -> StoreError:
        self.session.rollback()
        logger.error("todo store %s failed: %s", action, exc)
        return StoreError(f"Failed to {action} todo")

    def list(self) -> List[Todo]:
        try:
            return self.session.execute(
                self.db.select(Todo).order_by(Todo.id.asc())
            ).scalars().all()
        except SQLAlchemyError as exc:
            raise self._fail("list", exc) from exc

    def get(self, todo_id: int) -> Optional[Todo]:
        try:
            return self.session.get(Todo, todo_id)
        except SQLAlchemyError as exc:
            raise self._fail("load", exc) from exc

    def create(self, text: str) -> Todo:
        todo = Todo(text=text, completed=False)
        try:
            self.session.add(todo)
            self.session.commit()
        except SQLAlchemyError as exc:
            raise self._fail("create", exc) from exc
        logger.debug("created todo %s", todo.id)
        return todo

    def toggle(self, todo_id: int) -> Optional[Todo]:
        todo = self.get(todo_id)
        if todo is None:
            return None
        return self.set_completed(todo_id, not todo.completed)

    def set_completed(self, todo_id: int, completed: bool) -> Optional[Todo]:
        todo = self.get(todo_id)
        if todo is None:
            return None
        todo.completed = completed
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            raise self._fail("update", exc) from exc
        return todo

    def delete(self, todo_id: int) -> bool:
        todo = self.get(todo_id)
        if todo is None:
            return False
        try:
            self.session.delete(todo)
            self.session.commit()
        except SQLAlchemyError as exc:
            raise self._fail("delete", exc) from exc
        logger.debug("deleted todo %s", todo_id)
        return True
