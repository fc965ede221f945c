from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import admin_required, current_user, error_response, login_required, payload, result_response
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payment-rate", methods=["GET"], endpoint="get_payment_rate")
    @login_required
    def get_payment_rate():
        try:
            rate = container.payment_rate_service.get_payment_rate()
        except Exception as e:
            return error_response(e, "load the payment rate")
        return jsonify({"rate": rate})

    @app.route("/api/payment-rate", methods=["POST"], endpoint="set_payment_rate")
    @admin_required
    def set_payment_rate():
        try:
            result = container.payment_rate_service.set_payment_rate(
                current_role=current_user().role,
                rate=payload().get("rate"),
            )
        except Exception as e:
            return error_response(e, "update the payment rate")
        return result_response(result)
