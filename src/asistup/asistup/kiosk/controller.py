from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body
from ..container import Container
from ..core.enums import AttendanceType
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    kiosk = container.kiosk_service

    def _mark_type(value) -> AttendanceType:
        try:
            return AttendanceType(value)
        except ValueError:
            raise ValidationError("Tipo de marcación no válido")

    @app.route("/api/kiosk/sessions", methods=["POST"], endpoint="kiosk_open")
    def kiosk_open():
        session = kiosk.open_session()
        return jsonify(session.view().to_dict()), 201

    @app.route("/api/kiosk/sessions/<session_id>", methods=["GET"], endpoint="kiosk_view")
    def kiosk_view(session_id: str):
        return jsonify(kiosk.get(session_id).view().to_dict())

    @app.route("/api/kiosk/sessions/<session_id>/keys", methods=["POST"], endpoint="kiosk_keys")
    def kiosk_keys(session_id: str):
        session = kiosk.get(session_id)
        key = json_body().get("key")
        if not isinstance(key, str):
            raise ValidationError("Tecla no válida")
        return jsonify(session.press_key(key).to_dict())

    @app.route("/api/kiosk/sessions/<session_id>/pin", methods=["POST"], endpoint="kiosk_new_pin")
    def kiosk_new_pin(session_id: str):
        session = kiosk.get(session_id)
        new_pin = json_body().get("new_pin")
        return jsonify(session.submit_new_pin(new_pin if isinstance(new_pin, str) else "").to_dict())

    @app.route("/api/kiosk/sessions/<session_id>/mark", methods=["POST"], endpoint="kiosk_mark")
    def kiosk_mark(session_id: str):
        session = kiosk.get(session_id)
        record = session.mark(_mark_type(json_body().get("type")))
        return jsonify({"success": True, "record": record.to_document(), "session": session.view().to_dict()}), 201

    @app.route("/api/kiosk/sessions/<session_id>/cancel", methods=["POST"], endpoint="kiosk_cancel")
    def kiosk_cancel(session_id: str):
        return jsonify(kiosk.get(session_id).cancel().to_dict())

    @app.route("/api/kiosk/sessions/<session_id>/exit", methods=["POST"], endpoint="kiosk_exit")
    def kiosk_exit(session_id: str):
        return jsonify(kiosk.close(session_id).view().to_dict())
