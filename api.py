from typing import Any, Optional

from flask import Flask, jsonify, redirect, render_template, request, url_for
from flask_cors import CORS
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from config import AppConfig
from db_models import db
from model import build_completion_client
from subtasks import CompletionClient, generate_subtasks
from todo_store import StoreError, TodoCreate, TodoListView, TodoStore, TodoUpdate


def _error(message: str, status: int):
    return jsonify({"ok": False, "error": {"message": message, "status": status}}), status


def _parse(schema, body: Any):
    try:
        return schema.model_validate(body or {})
    except ValidationError as exc:
        errors = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'body'}: {err['msg']}"
            for err in exc.errors()
        )
        return _error(errors, 400)


def create_app(
    config: Optional[AppConfig] = None,
    completion: Optional[CompletionClient] = None,
) -> Flask:
    config = config or AppConfig.from_env()

    # create the app
    app = Flask(__name__)
    app.url_map.strict_slashes = False
    app.config["SQLALCHEMY_DATABASE_URI"] = config.database_url
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
    app.config["APP_CONFIG"] = config

    CORS(app, resources={r"/api/*": {"origins": "*"}})
    db.init_app(app)

    store = TodoStore(db)
    completion = completion or build_completion_client(config)
    app.extensions["todo_store"] = store
    app.extensions["completion"] = completion

    def create_in_worker(text: str) -> dict:
        # fan-out workers run outside the request thread; give each one its
        # own app context and therefore its own session
        with app.app_context():
            return store.create(text).to_dict()

    def run_fan_out(todo_id: int) -> Optional[list]:
        parent = store.get(todo_id)
        if parent is None:
            return None
        result = generate_subtasks(parent.text, completion, create_in_worker)
        return sorted(result.created, key=lambda t: t["id"])

    @app.errorhandler(StoreError)
    def handle_store_error(exc: StoreError):
        app.logger.error("store error on %s %s: %s", request.method, request.path, exc.message)
        if request.path.startswith("/api/"):
            return _error(exc.message, 500)
        return render_template("_todo_list.html", view=TodoListView(error=exc.message)), 500

    @app.errorhandler(HTTPException)
    def handle_http_exception(exc: HTTPException):
        if request.path.startswith("/api/"):
            return _error(exc.description, exc.code)
        return exc

    # --- pages ---

    @app.get("/")
    def index() -> Any:
        return render_template("index.html", view=TodoListView.loading())

    @app.get("/todos/list")
    def todo_list() -> Any:
        view = TodoListView.load(store)
        status = 500 if view.status == "error" else 200
        return render_template("_todo_list.html", view=view), status

    @app.post("/todos")
    def add_todo() -> Any:
        text = request.form.get("text", "")
        try:
            store.create(text)
        except StoreError:
            app.logger.exception("Error creating todo")
        return redirect(url_for("index"), code=303)

    @app.post("/todos/<int:todo_id>/toggle")
    def toggle_todo(todo_id: int) -> Any:
        try:
            if store.toggle(todo_id) is None:
                app.logger.warning("toggle: todo %s not found", todo_id)
        except StoreError:
            app.logger.exception("Error toggling todo %s", todo_id)
        return redirect(url_for("index"), code=303)

    @app.post("/todos/<int:todo_id>/delete")
    def delete_todo(todo_id: int) -> Any:
        try:
            store.delete(todo_id)
        except StoreError:
            app.logger.exception("Error deleting todo %s", todo_id)
        return redirect(url_for("index"), code=303)

    @app.post("/todos/<int:todo_id>/subtasks")
    def generate_todo_subtasks(todo_id: int) -> Any:
        try:
            if run_fan_out(todo_id) is None:
                app.logger.warning("generate: todo %s not found", todo_id)
        except StoreError:
            app.logger.exception("Error generating subtasks for todo %s", todo_id)
        return redirect(url_for("index"), code=303)

    # --- json api ---

    @app.get("/health")
    def health() -> Any:
        return jsonify({"ok": True, "status": "healthy"})

    @app.get("/api/todos")
    def api_list_todos() -> Any:
        return jsonify({"ok": True, "data": [t.to_dict() for t in store.list()]})

    @app.post("/api/todos")
    def api_create_todo() -> Any:
        payload = _parse(TodoCreate, request.get_json(silent=True))
        if not isinstance(payload, TodoCreate):
            return payload
        todo = store.create(payload.text)
        return jsonify({"ok": True, "data": todo.to_dict()}), 201

    @app.put("/api/todos/<int:todo_id>")
    def api_update_todo(todo_id: int) -> Any:
        payload = _parse(TodoUpdate, request.get_json(silent=True))
        if not isinstance(payload, TodoUpdate):
            return payload
        todo = store.set_completed(todo_id, payload.completed)
        if todo is None:
            return _error("Todo not found", 404)
        return jsonify({"ok": True, "data": todo.to_dict()})

    @app.post("/api/todos/<int:todo_id>/toggle")
    def api_toggle_todo(todo_id: int) -> Any:
        todo = store.toggle(todo_id)
        if todo is None:
            return _error("Todo not found", 404)
        return jsonify({"ok": True, "data": todo.to_dict()})

    @app.delete("/api/todos/<int:todo_id>")
    def api_delete_todo(todo_id: int) -> Any:
        if not store.delete(todo_id):
            return _error("Todo not found", 404)
        return jsonify({"ok": True, "data": {"deleted": todo_id}})

    @app.post("/api/todos/<int:todo_id>/subtasks")
    def api_generate_subtasks(todo_id: int) -> Any:
        created = run_fan_out(todo_id)
        if created is None:
            return _error("Todo not found", 404)
        return jsonify({"ok": True, "data": {"created": created}})

    # create tables at startup
    with app.app_context():
        db.create_all()

    return app


if __name__ == "__main__":
    from logging_setup import setup_logging

    cfg = AppConfig.from_env()
    setup_logging(cfg.log_level, cfg.log_dir)
    create_app(cfg).run(host="0.0.0.0", port=cfg.port, debug=True)
