from __future__ import annotations

import asyncio

import pytest

from src.school_records.school_records.core.enums import EntityKind, Role
from src.school_records.school_records.core.exceptions import AuthorizationError
from src.school_records.school_records.database.keyvalue import InMemoryKeyValueStore
from src.school_records.school_records.messaging.service import MessagingService
from src.school_records.school_records.records.local_repository import LocalRecordStore


def run(coro):
    return asyncio.run(coro)


@pytest.fixture()
def store():
    store = LocalRecordStore(InMemoryKeyValueStore())
    run(store.collection(EntityKind.USERS).add({"id": "3", "role": "parent", "email": "pierre.martin@email.com"}))
    run(store.collection(EntityKind.USERS).add({"id": "4", "role": "parent", "email": "awa@email.com"}))
    messages = store.collection(EntityKind.MESSAGES)
    run(messages.add({"id": "m1", "senderEmail": "pierre.martin@email.com", "subject": "Cantine"}))
    run(messages.add({"id": "m2", "senderEmail": "visiteur@email.com", "subject": "Inscription"}))
    return store


@pytest.fixture()
def service(store):
    return MessagingService(store)


def test_reply_reaches_parent_with_notification(service, store):
    reply = run(
        service.send_reply(current_role=Role.ADMIN, original_message_id="m1", reply_text="Bien reçu", admin_id="1")
    )

    assert reply["subject"] == "Re: Cantine"
    assert reply["recipientId"] == "3"
    assert reply["parentMessageId"] == "m1"
    assert reply["isFromAdmin"] is True
    assert reply["id"].endswith("_reply")

    notifications = run(
        service.notifications_for_parent(current_role=Role.PARENT, current_user_id="3", parent_id="3")
    )
    assert len(notifications) == 1
    assert notifications[0]["type"] == "message_reply"
    assert notifications[0]["messageId"] == reply["id"]
    assert notifications[0]["isRead"] is False


def test_reply_without_parent_account_does_nothing(service, store):
    result = run(
        service.send_reply(current_role=Role.ADMIN, original_message_id="m2", reply_text="Merci", admin_id="1")
    )

    assert result is None
    assert len(run(store.collection(EntityKind.MESSAGES).list())) == 2
    assert run(store.collection(EntityKind.PARENT_NOTIFICATIONS).list()) == []


def test_reply_to_unknown_message(service):
    assert (
        run(service.send_reply(current_role=Role.ADMIN, original_message_id="nope", reply_text="x", admin_id="1"))
        is None
    )


def test_only_admin_can_reply(service):
    with pytest.raises(AuthorizationError):
        run(service.send_reply(current_role=Role.TEACHER, original_message_id="m1", reply_text="x", admin_id="2"))


def test_parent_inbox_holds_sent_and_received(service):
    run(service.send_reply(current_role=Role.ADMIN, original_message_id="m1", reply_text="Bien reçu", admin_id="1"))

    inbox = run(service.messages_for_parent(current_role=Role.PARENT, current_user_id="3", parent_id="3"))

    assert {m["subject"] for m in inbox} == {"Cantine", "Re: Cantine"}


def test_parent_cannot_read_another_inbox(service):
    with pytest.raises(AuthorizationError):
        run(service.messages_for_parent(current_role=Role.PARENT, current_user_id="4", parent_id="3"))


def test_admin_reads_any_inbox(service):
    assert run(service.notifications_for_parent(current_role=Role.ADMIN, current_user_id="1", parent_id="4")) == []
