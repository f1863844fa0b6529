from __future__ import annotations

from flask import Flask, g

from ..core.enums import LeaveType
from ..container import Container
from ..users.access import require_staff
from ..web import json_body, json_response, login_required, parse_date_field, parse_enum


def register(app: Flask, container: Container) -> None:
    auth = login_required(container)
    svc = container.leave_service

    @app.route("/leaves", methods=["POST"], endpoint="leave_apply")
    @auth
    def apply_leave():
        body = json_body()
        created = svc.apply_leave(
            g.actor,
            leave_date=parse_date_field(body.get("date"), "date"),
            leave_type=parse_enum(LeaveType, body.get("type", LeaveType.PAID.value), "type"),
            reason=body.get("reason", ""),
        )
        return json_response(created, 201)

    @app.route("/leaves/mine", methods=["GET"], endpoint="leave_mine")
    @auth
    def my_leaves():
        staff = require_staff(g.actor)
        return json_response(svc.list_for_staff(staff.user_id))

    @app.route("/leaves/<int:request_id>/approve", methods=["POST"], endpoint="leave_approve")
    @auth
    def approve(request_id: int):
        return json_response(svc.approve(g.actor, request_id))

    @app.route("/leaves/<int:request_id>/reject", methods=["POST"], endpoint="leave_reject")
    @auth
    def reject(request_id: int):
        return json_response(svc.reject(g.actor, request_id))

    @app.route("/stores/<int:store_id>/leaves/pending", methods=["GET"], endpoint="leave_pending")
    @auth
    def pending(store_id: int):
        return json_response(svc.list_pending_for_store(g.actor, store_id))
