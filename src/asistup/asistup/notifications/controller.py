from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import admin_required
from ..container import Container
from ..core.exceptions import NotFound


def register(app: Flask, container: Container) -> None:
    outbox = container.notifications

    @app.route("/api/admin/notifications", methods=["GET"], endpoint="notifications_list")
    @admin_required(container)
    def notifications_list():
        return jsonify(
            {
                "unread": outbox.unread_count(),
                "items": [n.to_dict() for n in outbox.list()],
            }
        )

    @app.route("/api/admin/notifications/<int:notification_id>/read", methods=["POST"], endpoint="notifications_read")
    @admin_required(container)
    def notifications_read(notification_id: int):
        if not outbox.mark_read(notification_id):
            raise NotFound("Notificación no existe")
        return jsonify({"success": True})

    @app.route("/api/admin/notifications", methods=["DELETE"], endpoint="notifications_clear")
    @admin_required(container)
    def notifications_clear():
        outbox.clear()
        return jsonify({"success": True})
