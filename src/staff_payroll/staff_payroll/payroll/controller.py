from __future__ import annotations

from flask import Flask, g

from ..container import Container
from ..users.access import load_staff, require_self_or_manager
from ..web import json_body, json_response, login_required, parse_date_field


def register(app: Flask, container: Container) -> None:
    auth = login_required(container)
    svc = container.payroll_service

    @app.route("/salary/<int:staff_id>/<int:year>/<int:month>", methods=["GET"], endpoint="salary_preview")
    @auth
    def preview(staff_id: int, year: int, month: int):
        require_self_or_manager(g.actor, load_staff(container.users_repo, staff_id))
        locked = svc.get_locked_record(staff_id, year, month)
        if locked and locked.is_locked:
            return json_response({"locked": True, "record": locked})
        return json_response({"locked": False, "statement": svc.calculate_staff_salary(staff_id, year, month)})

    @app.route("/salary/<int:staff_id>/<int:year>/<int:month>/lock", methods=["POST"], endpoint="salary_lock")
    @auth
    def lock(staff_id: int, year: int, month: int):
        return json_response(svc.lock_month(g.actor, staff_id, year, month), 201)

    @app.route("/salary/<int:staff_id>/history", methods=["GET"], endpoint="salary_history")
    @auth
    def history(staff_id: int):
        require_self_or_manager(g.actor, load_staff(container.users_repo, staff_id))
        return json_response(svc.salary_history(staff_id))

    @app.route("/salary/<int:staff_id>/advances", methods=["GET"], endpoint="salary_advances")
    @auth
    def list_advances(staff_id: int):
        require_self_or_manager(g.actor, load_staff(container.users_repo, staff_id))
        return json_response(svc.list_advances(staff_id))

    @app.route("/salary/<int:staff_id>/advances", methods=["POST"], endpoint="salary_advance")
    @auth
    def add_advance(staff_id: int):
        body = json_body()
        given_on = parse_date_field(body["given_on"], "given_on") if body.get("given_on") else None
        advance = svc.add_advance(g.actor, staff_id, body.get("amount"), given_on=given_on)
        return json_response(advance, 201)
