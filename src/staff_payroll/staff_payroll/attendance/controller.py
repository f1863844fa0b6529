from __future__ import annotations

from flask import Flask, g, request

from ..common.datetime_utils import now_local
from ..common.validators import require_month
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..container import Container
from ..users.access import require_staff
from ..web import json_body, json_response, login_required, parse_enum
from .model import GeoPoint


def _location(body: dict):
    lat, lng = body.get("lat"), body.get("lng")
    if lat is None or lng is None:
        return None
    try:
        return GeoPoint(lat=float(lat), lng=float(lng))
    except (TypeError, ValueError):
        raise ValidationError("lat/lng must be numbers")


def register(app: Flask, container: Container) -> None:
    auth = login_required(container)
    svc = container.attendance_service

    @app.route("/attendance/check-in", methods=["POST"], endpoint="attendance_check_in")
    @auth
    def check_in():
        staff = require_staff(g.actor)
        result = svc.check_in(staff.user_id, location=_location(json_body()))
        return json_response(result, 201)

    @app.route("/attendance/check-out", methods=["POST"], endpoint="attendance_check_out")
    @auth
    def check_out():
        staff = require_staff(g.actor)
        return json_response(svc.check_out(staff.user_id))

    @app.route("/attendance/today", methods=["GET"], endpoint="attendance_today")
    @auth
    def today():
        staff = require_staff(g.actor)
        return json_response(svc.get_today_record(staff.user_id, now_local().date()))

    @app.route("/attendance/month", methods=["GET"], endpoint="attendance_month")
    @auth
    def month():
        staff = require_staff(g.actor)
        now = now_local()
        year, month_no = require_month(request.args.get("year", now.year), request.args.get("month", now.month))
        return json_response(svc.month_records(staff.user_id, year, month_no))

    @app.route("/attendance/mark", methods=["POST"], endpoint="attendance_mark")
    @auth
    def mark():
        body = json_body()
        if body.get("staff_id") is None:
            raise ValidationError("staff_id is required")
        status = parse_enum(AttendanceStatus, body.get("status"), "status")
        record = svc.admin_mark(g.actor, int(body["staff_id"]), status)
        return json_response(record, 201)

    @app.route("/attendance/<int:attendance_id>/correct", methods=["POST"], endpoint="attendance_correct")
    @auth
    def correct(attendance_id: int):
        status = parse_enum(AttendanceStatus, json_body().get("status"), "status")
        return json_response(svc.correct_status(g.actor, attendance_id, status))
