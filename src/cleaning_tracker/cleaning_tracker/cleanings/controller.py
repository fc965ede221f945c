from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import to_datetime
from ..common.web import current_user, error_response, login_required
from ..container import Container
from ..core.exceptions import ValidationError
from .model import CleaningFilter


def register(app: Flask, container: Container) -> None:
    def _filter_from_args() -> CleaningFilter:
        try:
            start = to_datetime(request.args.get("start"))
            end = to_datetime(request.args.get("end"))
        except ValueError:
            raise ValidationError("Invalid date (use YYYY-MM-DD)")
        return CleaningFilter(
            machine_id=request.args.get("machineId") or None,
            cleaner_id=request.args.get("cleanerId") or None,
            start_date=start,
            end_date=end,
        )

    @app.route("/api/cleanings", methods=["GET"], endpoint="list_cleanings")
    @login_required
    def list_cleanings():
        user = current_user()
        try:
            cleanings = container.cleaning_service.list_cleanings(
                current_role=user.role,
                current_uid=user.uid,
                filter=_filter_from_args(),
            )
        except Exception as e:
            return error_response(e, "load cleanings")
        return jsonify([c.to_dict() for c in cleanings])

    @app.route("/api/cleanings", methods=["POST"], endpoint="log_cleaning")
    @login_required
    def log_cleaning():
        user = current_user()
        try:
            result = container.cleaning_service.log_cleaning(user.uid, user.name)
        except Exception as e:
            return error_response(e, "log the cleaning")

        if not result.success:
            return jsonify(result.to_dict()), 400

        logged = result.data
        # The cleaning is saved at this point; email problems only add a note.
        status = container.notifier.notify_cleaning_logged(
            cleaner_name=logged.cleaner_name,
            machine_name=logged.machine_name,
            machine_location=logged.machine_location,
            payment_rate=logged.payment_rate,
        )
        return (
            jsonify(
                {
                    "success": True,
                    "message": result.message,
                    "cleaningId": logged.cleaning_id,
                    "notification": status.value,
                }
            ),
            201,
        )
