from sqlalchemy import func

from . import db


class Todo(db.Model):
    """A single to-do item.

    Subtasks are plain rows: the link to the parent only lives in the text
    suffix ``(subtask of: <parent text>)``, there is no foreign key.
    """

    __tablename__ = "todos"

    id = db.Column(db.Integer, primary_key=True)
    text = db.Column(db.Text, nullable=False)
    completed = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(
        db.DateTime(timezone=True), nullable=True, server_default=func.now()
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self) -> str:
        return f"<Todo {self.id} completed={self.completed}>"
