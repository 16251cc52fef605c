#!/usr/bin/env python3
"""
Database migration script for the todos schema.

1. Creates the todos table if it does not exist
2. Adds the created_at column to tables created before it existed

IMPORTANT: Backup your database before running this!

Usage:
    python migrate_db.py [--yes]
"""

import argparse
import logging
import sys

from flask import Flask
from sqlalchemy import inspect, text

from config import AppConfig
from db_models import db
from logging_setup import setup_logging

logger = logging.getLogger("migrate_db")


def create_migration_app(db_url: str) -> Flask:
    """Create a minimal Flask app bound to ``db_url``."""
    app = Flask(__name__)
    app.config["SQLALCHEMY_DATABASE_URI"] = db_url
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
    db.init_app(app)
    return app


def check_column_exists(table_name: str, column_name: str) -> bool:
    """Check if a column exists in a table."""
    inspector = inspect(db.engine)
    columns = [col["name"] for col in inspector.get_columns(table_name)]
    return column_name in columns


def check_table_exists(table_name: str) -> bool:
    """Check if a table exists."""
    inspector = inspect(db.engine)
    return table_name in inspector.get_table_names()


def _rebuild_sqlite_todos() -> None:
    """Recreate todos from the model and copy the old rows across.

    SQLite rejects ADD COLUMN with a non-constant default such as
    CURRENT_TIMESTAMP, so the table is rebuilt instead.
    """
    with db.engine.connect() as conn:
        conn.execute(text("ALTER TABLE todos RENAME TO todos_legacy"))
        conn.commit()

    db.create_all()

    with db.engine.connect() as conn:
        conn.execute(
            text(
                "INSERT INTO todos (id, text, completed) "
                "SELECT id, text, completed FROM todos_legacy"
            )
        )
        conn.execute(text("DROP TABLE todos_legacy"))
        conn.commit()


def migrate_todo_table() -> list:
    """Bring the todos table up to date. Returns the changes applied."""
    applied = []

    if not check_table_exists("todos"):
        logger.info("creating todos table")
        db.create_all()
        applied.append("create_table")
        return applied

    if not check_column_exists("todos", "created_at"):
        logger.info("adding column created_at")
        if db.engine.dialect.name == "sqlite":
            _rebuild_sqlite_todos()
        else:
            with db.engine.connect() as conn:
                conn.execute(
                    text(
                        "ALTER TABLE todos ADD COLUMN created_at "
                        "TIMESTAMP WITH TIME ZONE DEFAULT now()"
                    )
                )
                conn.commit()
        applied.append("add_created_at")
    else:
        logger.info("column created_at already exists")

    return applied


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Migrate the todos database schema")
    parser.add_argument("--yes", action="store_true", help="Skip the backup confirmation")
    args = parser.parse_args(argv)

    config = AppConfig.from_env()
    setup_logging(config.log_level, config.log_dir)
    logger.info("database: %s...", config.database_url[:50])

    if not args.yes:
        response = input("Have you backed up your database? (yes/no): ")
        if response.lower() not in ["yes", "y"]:
            logger.error("please backup your database first")
            return 1

    app = create_migration_app(config.database_url)
    with app.app_context():
        try:
            applied = migrate_todo_table()
        except Exception:
            logger.exception("migration failed, the database may be in an inconsistent state")
            return 1

    logger.info("migration complete: %s", ", ".join(applied) or "nothing to do")
    return 0


if __name__ == "__main__":
    sys.exit(main())
