from __future__ import annotations

import logging
from datetime import date
from functools import wraps

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_iso_date, parse_iso_date
from ..core.exceptions import StorageError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def _reply(code: int, message: str, data=None):
    body = {"code": code, "message": message}
    if data is not None:
        body["data"] = data
    return jsonify(body), code


def register(app: Flask, container: Container) -> None:
    def token_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            token = request.args.get("token") or request.headers.get("X-Token")
            if not token:
                return _reply(401, "token is required")
            if not container.token_verifier(token):
                return _reply(401, "invalid token")
            return view(*args, **kwargs)

        return wrapper

    @app.route("/api/persons", methods=["GET"], endpoint="api_persons")
    @token_required
    def api_persons():
        people = [
            {"name": p.name, "email": p.email or "", "avatar": p.avatar or ""}
            for p in container.checkin_service.persons()
        ]
        return _reply(200, "success", people)

    @app.route("/api/upload", methods=["POST"], endpoint="api_upload")
    @token_required
    def api_upload():
        name = request.form.get("name", "")
        file = request.files.get("image")
        if file is None:
            return _reply(400, "Please upload an image file")

        try:
            result = container.checkin_service.submit(
                name=name,
                filename=file.filename,
                content_type=file.mimetype,
                data=file.read(),
            )
        except ValidationError as e:
            return _reply(400, str(e))
        except StorageError:
            return _reply(500, "Failed to save the check-in")

        return _reply(
            200,
            "uploaded",
            {
                "name": result.name,
                "date": format_iso_date(result.checkin_date),
                "filePath": result.evidence_location,
            },
        )

    @app.route("/api/status", methods=["GET"], endpoint="api_status")
    @token_required
    def api_status():
        date_s = request.args.get("date")
        try:
            day = parse_iso_date(date_s) if date_s else date.today()
        except ValueError:
            return _reply(400, "date must be YYYY-MM-DD")

        try:
            statuses = container.checkin_service.status_for(day)
        except StorageError:
            return _reply(500, "Failed to read check-in status")

        return _reply(
            200,
            "success",
            {"date": format_iso_date(day), "status": [s.to_dict() for s in statuses]},
        )
