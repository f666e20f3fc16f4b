from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(error: DomainError):
        return jsonify({"message": str(error)}), error.status_code

    def _payload():
        # Anything that is not a JSON object fails validation downstream.
        return request.get_json(silent=True) or {}

    @app.route("/users", methods=["GET"], endpoint="list_users")
    def list_users():
        users = container.user_service.list_users()
        return jsonify([u.to_dict() for u in users])

    @app.route("/users", methods=["POST"], endpoint="create_user")
    def create_user():
        user = container.user_service.create_user(_payload())
        return jsonify({"message": f"New user {user.username} created"}), 201

    @app.route("/users", methods=["PATCH"], endpoint="update_user")
    def update_user():
        user = container.user_service.update_user(_payload())
        return jsonify({"message": f"{user.username} updated"})

    @app.route("/users", methods=["DELETE"], endpoint="delete_user")
    def delete_user():
        user = container.user_service.delete_user(_payload())
        return jsonify(f"Username {user.username} with ID {user.id} deleted")
