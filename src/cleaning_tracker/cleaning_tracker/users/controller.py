from __future__ import annotations

from flask import Flask, jsonify

from ..common.validators import parse_rate
from ..common.web import admin_required, as_bool, current_user, error_response, payload, result_response
from ..container import Container
from .model import CreateCleanerData


def register(app: Flask, container: Container) -> None:
    @app.route("/api/cleaners", methods=["GET"], endpoint="list_cleaners")
    @admin_required
    def list_cleaners():
        try:
            cleaners = container.cleaner_service.list_cleaners()
        except Exception as e:
            return error_response(e, "load cleaners")
        return jsonify([c.to_dict() for c in cleaners])

    @app.route("/api/cleaners", methods=["POST"], endpoint="create_cleaner")
    @admin_required
    def create_cleaner():
        user = current_user()
        data = payload()
        try:
            cleaner = CreateCleanerData(
                name=data.get("name", ""),
                email=data.get("email", ""),
                password=data.get("password", ""),
                confirm_password=data.get("confirmPassword", ""),
                payment_rate=parse_rate(data.get("paymentRate", 100)),
                assigned_machine_id=data.get("assignedMachineId") or None,
            )
            result = container.cleaner_service.create_cleaner(cleaner, created_by=user.uid, current_role=user.role)
        except Exception as e:
            return error_response(e, "create the cleaner")
        return result_response(result, ok_status=201)

    @app.route("/api/cleaners/<uid>/assignment", methods=["POST"], endpoint="assign_cleaner")
    @admin_required
    def assign_cleaner(uid: str):
        data = payload()
        try:
            rate = data.get("paymentRate")
            result = container.cleaner_service.update_cleaner_machine_assignment(
                uid,
                data.get("assignedMachineId") or None,
                parse_rate(rate) if rate not in (None, "") else None,
                current_role=current_user().role,
            )
        except Exception as e:
            return error_response(e, "update the cleaner assignment")
        return result_response(result)

    @app.route("/api/cleaners/<uid>/rate", methods=["POST"], endpoint="cleaner_rate")
    @admin_required
    def cleaner_rate(uid: str):
        try:
            result = container.cleaner_service.update_cleaner_payment_rate(
                uid,
                parse_rate(payload().get("paymentRate")),
                current_role=current_user().role,
            )
        except Exception as e:
            return error_response(e, "update the payment rate")
        return result_response(result)

    @app.route("/api/cleaners/<uid>/status", methods=["POST"], endpoint="cleaner_status")
    @admin_required
    def cleaner_status(uid: str):
        try:
            result = container.cleaner_service.update_cleaner_status(
                uid,
                as_bool(payload().get("isActive", False)),
                current_role=current_user().role,
            )
        except Exception as e:
            return error_response(e, "update the cleaner status")
        return result_response(result)

    @app.route("/api/cleaners/<uid>/machine", methods=["GET"], endpoint="cleaner_machine")
    @admin_required
    def cleaner_machine(uid: str):
        try:
            info = container.cleaner_service.get_cleaner_machine_info(uid)
        except Exception as e:
            return error_response(e, "load the machine assignment")
        return jsonify(info.to_dict())

    @app.route("/api/stats/cleaners", endpoint="cleaner_stats")
    @admin_required
    def cleaner_stats():
        try:
            stats = container.stats_service.get_all_cleaner_stats()
        except Exception as e:
            return error_response(e, "load cleaner statistics")
        return jsonify([s.to_dict() for s in stats])

    @app.route("/api/stats/machines", endpoint="machine_stats")
    @admin_required
    def machine_stats():
        try:
            stats = container.stats_service.get_machine_stats()
        except Exception as e:
            return error_response(e, "load machine statistics")
        return jsonify([s.to_dict() for s in stats])
