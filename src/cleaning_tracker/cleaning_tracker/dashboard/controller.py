from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_user, error_response, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/dashboard", endpoint="dashboard")
    @login_required
    def dashboard():
        try:
            data = container.dashboard_service.load(current_user())
        except Exception as e:
            return error_response(e, "load the dashboard")
        return jsonify(data)
