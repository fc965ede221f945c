from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import current_user, error_response, login_required, payload
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = payload()
        try:
            user = container.auth_service.sign_in(data.get("email", ""), data.get("password", ""))
        except Exception as e:
            return error_response(e, "sign in")

        session.clear()
        session["uid"] = user.uid
        session["email"] = user.email
        session["name"] = user.name
        session["role"] = user.role.value
        return jsonify({"success": True, "message": "Signed in successfully", "role": user.role.value})

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True, "message": "Signed out"})

    @app.route("/api/me", endpoint="me")
    @login_required
    def me():
        user = current_user()
        return jsonify({"uid": user.uid, "email": user.email, "name": user.name, "role": user.role.value})
