from flask_sqlalchemy import SQLAlchemy

# single shared SQLAlchemy object for the project
db = SQLAlchemy()

# import models so they are registered with SQLAlchemy when db_models is imported
from .todo import Todo

__all__ = ["db", "Todo"]
