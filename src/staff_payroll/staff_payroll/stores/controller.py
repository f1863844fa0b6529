from __future__ import annotations

from flask import Flask, g

from ..container import Container
from ..core.exceptions import ValidationError
from ..web import json_body, json_response, login_required


def _frozen_flag(body: dict) -> bool:
    frozen = body.get("frozen", True)
    if not isinstance(frozen, bool):
        raise ValidationError("frozen must be true or false")
    return frozen


def register(app: Flask, container: Container) -> None:
    auth = login_required(container)
    svc = container.store_service

    @app.route("/stores/<int:store_id>/freeze", methods=["POST"], endpoint="store_freeze")
    @auth
    def freeze(store_id: int):
        return json_response(svc.set_attendance_frozen(g.actor, store_id, frozen=_frozen_flag(json_body())))

    @app.route("/stores/<int:store_id>/staff", methods=["GET"], endpoint="store_staff")
    @auth
    def staff(store_id: int):
        return json_response(svc.list_staff(g.actor, store_id))
