from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.http import admin_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    approvals = container.approval_service

    @app.route("/api/admin/attendance/pending", methods=["GET"], endpoint="approvals_pending")
    @admin_required(container)
    def approvals_pending():
        return jsonify([r.to_document() for r in approvals.list_pending(current_role=g.current_role)])

    @app.route("/api/admin/attendance/<record_id>/approve", methods=["POST"], endpoint="approvals_approve")
    @admin_required(container)
    def approvals_approve(record_id: str):
        record = approvals.approve(current_role=g.current_role, record_id=record_id)
        return jsonify({"success": True, "record": record.to_document()})

    @app.route("/api/admin/attendance/<record_id>/reject", methods=["POST"], endpoint="approvals_reject")
    @admin_required(container)
    def approvals_reject(record_id: str):
        record = approvals.reject(current_role=g.current_role, record_id=record_id)
        return jsonify({"success": True, "record": record.to_document()})

    @app.route("/api/admin/attendance/<record_id>", methods=["DELETE"], endpoint="approvals_delete")
    @admin_required(container)
    def approvals_delete(record_id: str):
        approvals.delete(current_role=g.current_role, record_id=record_id)
        return jsonify({"success": True})
