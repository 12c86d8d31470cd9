"""rootline.server.app - Flask app factory and routes.

This is a THIN wrapper: every request refreshes the TableWatcher (which
recomputes only when the table changed) and renders its current result.
"""

from __future__ import annotations

from typing import Any

from flask import Flask, Response, jsonify
from flask_cors import CORS

from rootline.html.generator import HTMLGenerator
from rootline.serialize import serialize_result
from rootline.server.watcher import TableWatcher


def create_app(watcher: TableWatcher, render: dict[str, Any] | None = None) -> Flask:
    """Create the Flask application.

    Args:
        watcher: Watcher over the table being served.
        render: ``[render]`` config table for the HTML view.

    Returns:
        Configured Flask application.
    """
    app = Flask(__name__)
    CORS(app)

    @app.after_request
    def _no_cache(response: Response) -> Response:
        response.headers["Cache-Control"] = "no-store"
        return response

    @app.route("/")
    def index():
        watcher.refresh()
        if watcher.result is None:
            message = watcher.last_error or "No lineage built yet"
            return Response(message, status=503, mimetype="text/plain")
        generator = HTMLGenerator(
            watcher.result.layout,
            render=render,
            title=watcher.table_path.name,
        )
        return generator.generate()

    @app.route("/api/graph")
    def api_graph():
        watcher.refresh()
        if watcher.result is None:
            return jsonify({"error": watcher.last_error}), 503
        return jsonify(watcher.result.graph.to_dict())

    @app.route("/api/layout")
    def api_layout():
        watcher.refresh()
        if watcher.result is None:
            return jsonify({"error": watcher.last_error}), 503
        return jsonify(serialize_result(watcher.result))

    @app.route("/api/status")
    def api_status():
        watcher.refresh()
        return jsonify(watcher.status())

    return app
