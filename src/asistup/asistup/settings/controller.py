from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.http import admin_required, json_body
from ..common.validators import require_decimal
from ..container import Container
from ..core.exceptions import ValidationError
from .model import GlobalSettings


def register(app: Flask, container: Container) -> None:
    settings = container.settings_service

    @app.route("/api/admin/settings", methods=["GET"], endpoint="settings_get")
    @admin_required(container)
    def settings_get():
        return jsonify(settings.current().to_document())

    @app.route("/api/admin/settings", methods=["PUT"], endpoint="settings_replace")
    @admin_required(container)
    def settings_replace():
        data = json_body()
        require_decimal(data.get("sbu"), "SBU")
        require_decimal(data.get("iess_rate"), "Tasa IESS")
        require_decimal(data.get("reserve_rate"), "Tasa fondo de reserva")
        try:
            candidate = GlobalSettings.from_document(data)
        except (KeyError, TypeError, ValueError) as exc:
            raise ValidationError(f"Configuración no válida: {exc}")
        saved = settings.replace(current_role=g.current_role, settings=candidate)
        return jsonify({"success": True, "settings": saved.to_document()})
