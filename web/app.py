"""
Flask web server for Story Search.

Every route returns the session view as JSON; the front end renders it.

Routes
──────
GET    /api/state               Current session view
PUT    /api/search-term         Update the search term      {"text": "..."}
POST   /api/search              Search for the current term
POST   /api/history/select      Re-run a previous search    {"term": "..."}
POST   /api/more                Load the next page
DELETE /api/items/<id>          Dismiss a story
POST   /api/sort                Sort by a key / flip order  {"key": "title"}
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys
import threading
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify, request

# Allow running as `python web/app.py` from the project root
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from config.settings import Settings
from core.client import InMemoryTransport, StoryClient
from core.session import SearchSession
from core.storage import SqliteStorage

logger = logging.getLogger(__name__)


def build_session(settings: Settings) -> SearchSession:
    """Wire a SearchSession from *settings*."""
    if settings.offline:
        transport = InMemoryTransport(base_url=settings.api_base_url)
    else:
        transport = StoryClient(timeout=settings.http_timeout)

    storage = SqliteStorage(settings.db_path)
    storage.init_db()

    return SearchSession(
        transport,
        storage,
        base_url=settings.api_base_url,
        storage_key=settings.search_storage_key,
        history_size=settings.history_size,
    )


def _json_field(name: str) -> str:
    body = request.get_json(silent=True) or {}
    value = body.get(name)
    if not isinstance(value, str):
        raise ValueError(f"'{name}' must be a string")
    return value


def create_app(
    settings: Optional[Settings] = None,
    session: Optional[SearchSession] = None,
) -> Flask:
    settings = settings or Settings()
    settings.validate()
    session = session or build_session(settings)

    app = Flask(__name__)
    # Requests run on worker threads, each async view on its own event loop;
    # session intents must not interleave.
    lock = threading.Lock()
    app.extensions["session_lock"] = lock

    def _view():
        with lock:
            snapshot = session.view()
        return jsonify(snapshot.model_dump(mode="json"))

    @app.errorhandler(ValueError)
    def bad_request(exc: ValueError):
        logger.info("Rejected %s %s: %s", request.method, request.path, exc)
        return jsonify({"error": str(exc)}), 400

    # ── State ──────────────────────────────────────────────────────────────

    @app.route("/api/state")
    def state():
        return _view()

    # ── Intents ────────────────────────────────────────────────────────────

    @app.route("/api/search-term", methods=["PUT"])
    def set_search_term():
        text = _json_field("text")
        with lock:
            session.set_search_term(text)
        return _view()

    @app.route("/api/search", methods=["POST"])
    async def submit_search():
        with lock:
            await session.submit_search()
        return _view()

    @app.route("/api/history/select", methods=["POST"])
    async def select_history():
        term = _json_field("term")
        with lock:
            await session.select_from_history(term)
        return _view()

    @app.route("/api/more", methods=["POST"])
    async def load_more():
        with lock:
            await session.load_more()
        return _view()

    @app.route("/api/items/<item_id>", methods=["DELETE"])
    def remove_item(item_id: str):
        with lock:
            session.remove_item(item_id)
        return _view()

    @app.route("/api/sort", methods=["POST"])
    def sort():
        key = _json_field("key")
        with lock:
            session.sort_by(key)
        return _view()

    return app


# ── Entry point ────────────────────────────────────────────────────────────

if __name__ == "__main__":
    load_dotenv()
    logging.basicConfig(level=logging.INFO)

    settings = Settings()
    settings.validate()
    session = build_session(settings)
    asyncio.run(session.start())

    app = create_app(settings, session)
    app.run(debug=settings.debug, host="0.0.0.0", port=settings.port)
