from __future__ import annotations

from flask import Flask

from ..common.http import admin_required, current_identity, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/rotation/preview", methods=["GET"], endpoint="rotation_preview")
    @admin_required
    def preview():
        return ok(container.rotation_service.preview(current_identity()).to_dict())

    @app.route("/api/rotation/execute", methods=["POST"], endpoint="rotation_execute")
    @admin_required
    def execute():
        result = container.rotation_service.execute(current_identity())
        return ok(result.to_dict(), f"Rotación completada: {result.assignments_made} asignaciones realizadas")

    @app.route("/api/rotation/reset", methods=["POST"], endpoint="rotation_reset")
    @admin_required
    def reset():
        count = container.rotation_service.reset(current_identity())
        return ok({"desactivadas": count}, "Todos los horarios han sido reseteados")

    @app.route("/api/rotation/stats", methods=["GET"], endpoint="rotation_stats")
    @admin_required
    def stats():
        return ok(container.rotation_service.stats(current_identity()))
