from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.session_guard import current_role, current_user_id, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    messaging = container.messaging_service

    @app.route("/api/messages/<message_id>/reply", methods=["POST"], endpoint="reply_to_message")
    @login_required
    async def reply_to_message(message_id: str):
        data = request.get_json(silent=True) or {}
        reply = await messaging.send_reply(
            current_role=current_role(),
            original_message_id=message_id,
            reply_text=data.get("reply", ""),
            admin_id=current_user_id(),
        )
        if reply is None:
            return jsonify({"success": False, "message": "Message or parent account not found"}), 404
        return jsonify(reply), 201

    @app.route("/api/parents/<parent_id>/messages", methods=["GET"], endpoint="parent_messages")
    @login_required
    async def parent_messages(parent_id: str):
        rows = await messaging.messages_for_parent(
            current_role=current_role(), current_user_id=current_user_id(), parent_id=parent_id
        )
        return jsonify(list(rows))

    @app.route("/api/parents/<parent_id>/notifications", methods=["GET"], endpoint="parent_notifications")
    @login_required
    async def parent_notifications(parent_id: str):
        rows = await messaging.notifications_for_parent(
            current_role=current_role(), current_user_id=current_user_id(), parent_id=parent_id
        )
        return jsonify(list(rows))
