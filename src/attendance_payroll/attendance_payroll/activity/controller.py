from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/activity-logs", methods=["GET"], endpoint="api_activity_logs")
    def api_activity_logs():
        limit = request.args.get("limit", default=50, type=int)
        logs = container.activity_logger.recent(limit)
        return jsonify(
            [
                {
                    "id": e.log_id,
                    "userId": e.user_id,
                    "activityType": e.activity_type,
                    "description": e.description,
                    "metadata": e.metadata,
                    "createdAt": e.created_at.isoformat() if e.created_at else None,
                }
                for e in logs
            ]
        ), 200
