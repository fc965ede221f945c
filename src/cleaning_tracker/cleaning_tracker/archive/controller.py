from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import parse_rate
from ..common.web import admin_required, current_user, error_response, payload
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/archive", methods=["GET"], endpoint="archive")
    @admin_required
    def archive():
        try:
            entries = container.archive_service.get_archive_entries(request.args.get("machineId") or None)
        except Exception as e:
            return error_response(e, "load the payment history")
        return jsonify([e.to_dict() for e in entries])

    @app.route("/api/archive/reset", methods=["POST"], endpoint="archive_reset")
    @admin_required
    def archive_reset():
        data = payload()
        try:
            rate = data.get("ratePerCleaning")
            result = container.archive_service.archive_and_reset_cleanings(
                current_role=current_user().role,
                paid_by=data.get("paidBy", ""),
                rate_per_cleaning=parse_rate(rate) if rate not in (None, "") else None,
                machine_id=data.get("machineId") or None,
            )
        except Exception as e:
            return error_response(e, "process the payment")

        if not result.success:
            return jsonify(result.to_dict()), 400

        outcome = result.data
        body = {"success": True, "message": result.message, **outcome.to_dict()}
        if not outcome.archived:
            return jsonify(body)

        # The entry is written; cleanup leftovers only add a warning.
        status = container.notifier.notify_payment_processed(
            paid_by=data.get("paidBy", "").strip(),
            total_amount=outcome.total_amount,
            cleaning_count=outcome.cleaning_count,
            cleaners=outcome.cleaner_names,
        )
        body["notification"] = status.value
        return jsonify(body)
