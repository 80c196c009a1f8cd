from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/config", methods=["GET"], endpoint="api_config_list")
    def api_config_list():
        entries = container.config_service.list_entries()
        return jsonify([{"key": e.key, "value": e.value, "description": e.description} for e in entries]), 200

    @app.route("/api/config/<key>", methods=["PUT"], endpoint="api_config_set")
    def api_config_set(key: str):
        data = request.get_json(silent=True) or {}
        container.config_service.set_value(key, str(data.get("value", "")), description=data.get("description"))
        return jsonify({"success": True, "key": key}), 200
