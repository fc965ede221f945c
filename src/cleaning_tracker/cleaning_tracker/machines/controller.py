from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import admin_required, as_bool, current_user, error_response, login_required, payload, result_response
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/machines", methods=["GET"], endpoint="list_machines")
    @login_required
    def list_machines():
        active_only = as_bool(request.args.get("active", "0"))
        try:
            machines = container.machine_service.list_machines(active_only=active_only)
        except Exception as e:
            return error_response(e, "load machines")
        return jsonify([m.to_dict() for m in machines])

    @app.route("/api/machines", methods=["POST"], endpoint="create_machine")
    @admin_required
    def create_machine():
        user = current_user()
        data = payload()
        try:
            result = container.machine_service.create_machine(
                current_role=user.role,
                created_by=user.uid,
                name=data.get("name", ""),
                location=data.get("location", ""),
                city=data.get("city", ""),
            )
        except Exception as e:
            return error_response(e, "create the machine")
        return result_response(result, ok_status=201)

    @app.route("/api/machines/<machine_id>", methods=["PATCH"], endpoint="update_machine")
    @admin_required
    def update_machine(machine_id: str):
        try:
            result = container.machine_service.update_machine(machine_id, payload(), current_role=current_user().role)
        except Exception as e:
            return error_response(e, "update the machine")
        return result_response(result)

    @app.route("/api/machines/<machine_id>/toggle", methods=["POST"], endpoint="toggle_machine")
    @admin_required
    def toggle_machine(machine_id: str):
        data = payload()
        try:
            result = container.machine_service.toggle_machine_status(
                machine_id,
                as_bool(data.get("isActive", False)),
                current_role=current_user().role,
            )
        except Exception as e:
            return error_response(e, "update the machine status")
        return result_response(result)
