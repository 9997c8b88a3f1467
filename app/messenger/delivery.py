"""
Messenger delivery flows.

MessengerService chains the building blocks the way an endpoint or a
WebSocket consumer uses them: persist through MessageService, project
through ConversationProjector, publish through RealtimeDispatcher.

Rows are committed before anything is published. A failed publish is
logged and reported as ``delivered=False``; the stored data stays as it is
and clients catch up on their next refresh.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.exceptions import (
    BaseApplicationError,
    TransportError,
    UnauthenticatedError,
    ValidationError,
)
from core.services import BaseService, ServiceResult
from messenger.projections import ConversationProjector
from messenger.realtime import RealtimeDispatcher
from messenger.services import MessageService

if TYPE_CHECKING:
    from messenger.attachments import AttachmentReference
    from messenger.identity import IdentityContext
    from messenger.storage import AttachmentStorage


class MessengerService(BaseService):
    """
    Send, read and delete flows for an authenticated caller.

    Methods:
        send_message: Store, project and push a new message
        mark_seen: Flag a conversation as read and notify the other side
        delete_message: Delete one of the caller's messages and notify

    Usage:
        identity = IdentityContext.from_user(request.user)
        result = MessengerService.send_message(identity, to_id=6, body="Hi")
        if result:
            card = result.data["message"]
    """

    @classmethod
    def _deliver(cls, publish, *args) -> bool:
        try:
            publish(*args)
        except TransportError as exc:
            cls.get_logger().warning(f"Realtime delivery skipped: {exc}")
            return False
        return True

    @classmethod
    def send_message(
        cls,
        identity: IdentityContext,
        to_id,
        body: str | None,
        attachment: AttachmentReference | None = None,
        dispatcher: RealtimeDispatcher | None = None,
        now=None,
    ) -> ServiceResult[dict]:
        """
        Send a message from the caller to to_id.

        Returns:
            ServiceResult with {"message": <sender-side card>, "delivered": bool}
        """
        if not identity.is_authenticated:
            return ServiceResult.from_exception(
                UnauthenticatedError("Authentication required")
            )

        if not (body and body.strip()) and attachment is None:
            return ServiceResult.from_exception(
                ValidationError("Message is empty", error_code="EMPTY_MESSAGE")
            )

        try:
            message = MessageService.create(identity.user_id, to_id, body, attachment)
        except BaseApplicationError as exc:
            return ServiceResult.from_exception(exc)

        sender_card = ConversationProjector.project_message(
            message, identity.user_id, now=now
        )
        recipient_card = ConversationProjector.project_message(
            message, to_id, now=now, render_default_card=True
        )

        delivered = cls._deliver(
            (dispatcher or RealtimeDispatcher()).publish_message,
            message,
            recipient_card,
        )

        return ServiceResult.success({"message": sender_card, "delivered": delivered})

    @classmethod
    def mark_seen(
        cls,
        identity: IdentityContext,
        other_id,
        dispatcher: RealtimeDispatcher | None = None,
    ) -> ServiceResult[dict]:
        """
        Mark everything other_id sent to the caller as seen.

        The seen event is only published when something changed.

        Returns:
            ServiceResult with {"updated": int, "delivered": bool}
        """
        if not identity.is_authenticated:
            return ServiceResult.from_exception(
                UnauthenticatedError("Authentication required")
            )

        try:
            updated = MessageService.mark_seen(identity.user_id, other_id)
        except BaseApplicationError as exc:
            return ServiceResult.from_exception(exc)

        delivered = False
        if updated:
            delivered = cls._deliver(
                (dispatcher or RealtimeDispatcher()).publish_seen,
                identity.user_id,
                other_id,
            )

        return ServiceResult.success({"updated": updated, "delivered": delivered})

    @classmethod
    def delete_message(
        cls,
        identity: IdentityContext,
        message_id,
        dispatcher: RealtimeDispatcher | None = None,
        storage: AttachmentStorage | None = None,
    ) -> ServiceResult[dict]:
        """
        Delete one of the caller's messages and tell the recipient.

        Returns:
            ServiceResult with {"message_id": str, "delivered": bool}, or a
            failure with MESSAGE_NOT_FOUND when the caller did not send it
        """
        if not identity.is_authenticated:
            return ServiceResult.from_exception(
                UnauthenticatedError("Authentication required")
            )

        try:
            message = MessageService.delete_one(
                identity.user_id, message_id, storage=storage
            )
        except BaseApplicationError as exc:
            return ServiceResult.from_exception(exc)

        delivered = cls._deliver(
            (dispatcher or RealtimeDispatcher()).publish_deleted,
            identity.user_id,
            message.to_user_id,
            message_id,
        )

        return ServiceResult.success(
            {"message_id": str(message_id), "delivered": delivered}
        )
