from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.datetime_utils import generate_id, now_iso
from ..common.validators import require_non_empty
from ..core.constants import ADMIN_SENDER_EMAIL, ADMIN_SENDER_NAME
from ..core.enums import EntityKind, Role
from ..core.exceptions import AuthorizationError
from ..records.repository import Record, RecordStore

logger = logging.getLogger(__name__)


class MessagingService:
    """Administration replies to parents and the parent inbox."""

    def __init__(self, store: RecordStore):
        self._users = store.collection(EntityKind.USERS)
        self._messages = store.collection(EntityKind.MESSAGES)
        self._notifications = store.collection(EntityKind.PARENT_NOTIFICATIONS)

    @staticmethod
    def _require_reader(*, current_role: Role, current_user_id: str, parent_id: str) -> None:
        if current_role == Role.ADMIN:
            return
        if current_role == Role.PARENT and current_user_id == parent_id:
            return
        raise AuthorizationError("You can only read your own messages")

    async def send_reply(
        self,
        *,
        current_role: Role,
        original_message_id: str,
        reply_text: str,
        admin_id: str,
    ) -> Optional[Record]:
        """Answer a parent's message.

        The parent is found by the original sender's email. Returns the reply,
        or None when the message or the parent account does not exist.
        """
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only administrators can reply to messages")
        reply_text = require_non_empty(reply_text, "reply")

        original = await self._messages.get(original_message_id)
        if not original:
            return None

        sender_email = original.get("senderEmail")
        parent = next(
            (
                u
                for u in await self._users.list()
                if u.get("role") == Role.PARENT.value and sender_email and u.get("email") == sender_email
            ),
            None,
        )
        if not parent:
            logger.info("No parent account for message %s, reply not sent", original_message_id)
            return None

        stamp = generate_id()
        reply = {
            "id": f"{stamp}_reply",
            "senderName": ADMIN_SENDER_NAME,
            "senderEmail": ADMIN_SENDER_EMAIL,
            "subject": f"Re: {original.get('subject', '')}",
            "message": reply_text,
            "type": "general",
            "status": "unread",
            "createdAt": now_iso(),
            "priority": "medium",
            "recipientId": parent["id"],
            "parentMessageId": original_message_id,
            "isFromAdmin": True,
        }
        await self._messages.add(reply)

        await self._notifications.add(
            {
                "id": f"{stamp}_notif",
                "parentId": parent["id"],
                "messageId": reply["id"],
                "title": "Nouvelle réponse de l'administration",
                "content": f"Vous avez reçu une réponse à votre message \"{original.get('subject', '')}\".",
                "type": "message_reply",
                "isRead": False,
                "createdAt": now_iso(),
            }
        )
        logger.info("Admin %s replied to message %s", admin_id, original_message_id)
        return reply

    async def messages_for_parent(
        self, *, current_role: Role, current_user_id: str, parent_id: str
    ) -> Sequence[Record]:
        self._require_reader(current_role=current_role, current_user_id=current_user_id, parent_id=parent_id)
        parent = await self._users.get(parent_id)
        email = parent.get("email") if parent else None
        return [
            m
            for m in await self._messages.list()
            if m.get("recipientId") == parent_id or (email and m.get("senderEmail") == email)
        ]

    async def notifications_for_parent(
        self, *, current_role: Role, current_user_id: str, parent_id: str
    ) -> Sequence[Record]:
        self._require_reader(current_role=current_role, current_user_id=current_user_id, parent_id=parent_id)
        return [n for n in await self._notifications.list() if n.get("parentId") == parent_id]
