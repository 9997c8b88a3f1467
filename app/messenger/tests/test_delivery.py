"""
Tests for MessengerService delivery flows.

Related files:
    - delivery.py: Implementation under test
    - realtime.py: RealtimeDispatcher (driven through FakeTransport)
"""

import uuid

from messenger.attachments import AttachmentReference
from messenger.delivery import MessengerService
from messenger.identity import IdentityContext
from messenger.models import Message
from messenger.realtime import RealtimeDispatcher
from messenger.tests.factories import MessageFactory


class TestSendMessage:
    """Tests for MessengerService.send_message()."""

    def test_stores_projects_and_publishes(self, alice, bob, fake_transport):
        """
        Given an authenticated sender
        When a message is sent
        Then it is stored, the sender gets their card and the recipient is notified
        """
        result = MessengerService.send_message(
            IdentityContext.from_user(alice),
            bob.id,
            "Hello Bob",
            dispatcher=RealtimeDispatcher(fake_transport),
        )

        assert result.success is True
        card = result.data["message"]
        assert result.data["delivered"] is True
        assert card["message"] == "Hello Bob"
        assert card["is_sender"] is True

        message = Message.objects.get(id=card["id"])
        assert message.seen is False

        [(channel, event, payload)] = fake_transport.published
        assert channel == f"private-messenger.{bob.id}"
        assert event == "messaging"
        assert payload["message"]["id"] == card["id"]
        assert payload["message"]["is_sender"] is False

    def test_attachment_only_message(self, alice, bob, fake_transport):
        result = MessengerService.send_message(
            IdentityContext.from_user(alice),
            bob.id,
            None,
            attachment=AttachmentReference("a.png", "a.png"),
            dispatcher=RealtimeDispatcher(fake_transport),
        )

        assert result.data["message"]["attachment"]["type"] == "image"

    def test_transport_failure_keeps_message(self, alice, bob, failing_transport):
        result = MessengerService.send_message(
            IdentityContext.from_user(alice),
            bob.id,
            "Are you there?",
            dispatcher=RealtimeDispatcher(failing_transport),
        )

        assert result.success is True
        assert result.data["delivered"] is False
        assert Message.objects.filter(from_user=alice, to_user=bob).count() == 1

    def test_anonymous_sender_is_rejected(self, bob, fake_transport):
        result = MessengerService.send_message(
            IdentityContext.anonymous(),
            bob.id,
            "Hello",
            dispatcher=RealtimeDispatcher(fake_transport),
        )

        assert result.error_code == "UNAUTHENTICATED"
        assert not Message.objects.exists()

    def test_empty_message_is_rejected(self, alice, bob, fake_transport):
        result = MessengerService.send_message(
            IdentityContext.from_user(alice),
            bob.id,
            "   ",
            dispatcher=RealtimeDispatcher(fake_transport),
        )

        assert result.error_code == "EMPTY_MESSAGE"
        assert fake_transport.published == []


class TestMarkSeen:
    """Tests for MessengerService.mark_seen()."""

    def test_marks_and_notifies_sender(self, alice, bob, conversation, fake_transport):
        result = MessengerService.mark_seen(
            IdentityContext.from_user(bob),
            alice.id,
            dispatcher=RealtimeDispatcher(fake_transport),
        )

        assert result.data == {"updated": 2, "delivered": True}
        assert fake_transport.published == [
            (
                f"private-messenger.{alice.id}",
                "client-seen",
                {"from_id": bob.id, "to_id": alice.id, "seen": True},
            )
        ]

    def test_nothing_to_mark_publishes_nothing(self, alice, bob, fake_transport):
        result = MessengerService.mark_seen(
            IdentityContext.from_user(bob),
            alice.id,
            dispatcher=RealtimeDispatcher(fake_transport),
        )

        assert result.data == {"updated": 0, "delivered": False}
        assert fake_transport.published == []


class TestDeleteMessage:
    """Tests for MessengerService.delete_message()."""

    def test_deletes_and_notifies_recipient(self, alice, bob, fake_transport, fake_storage):
        message = MessageFactory(from_user=alice, to_user=bob)

        result = MessengerService.delete_message(
            IdentityContext.from_user(alice),
            message.id,
            dispatcher=RealtimeDispatcher(fake_transport),
            storage=fake_storage,
        )

        assert result.data == {"message_id": str(message.id), "delivered": True}
        assert not Message.objects.filter(id=message.id).exists()
        assert fake_transport.published == [
            (
                f"private-messenger.{bob.id}",
                "message-deleted",
                {"from_id": alice.id, "to_id": bob.id, "message_id": str(message.id)},
            )
        ]

    def test_cannot_delete_someone_elses_message(self, alice, bob, fake_transport, fake_storage):
        message = MessageFactory(from_user=alice, to_user=bob)

        result = MessengerService.delete_message(
            IdentityContext.from_user(bob),
            message.id,
            dispatcher=RealtimeDispatcher(fake_transport),
            storage=fake_storage,
        )

        assert result.success is False
        assert result.error_code == "MESSAGE_NOT_FOUND"
        assert Message.objects.filter(id=message.id).exists()
        assert fake_transport.published == []

    def test_unknown_message(self, alice, fake_transport):
        result = MessengerService.delete_message(
            IdentityContext.from_user(alice),
            uuid.uuid4(),
            dispatcher=RealtimeDispatcher(fake_transport),
        )

        assert result.error_code == "MESSAGE_NOT_FOUND"
