"""
Conversation projections.

ConversationProjector turns stored messages into the read-only records a
client needs: a message card, a contact-list row, the list of images
shared in a conversation, and the URLs of avatars and attachments.
Nothing here is cached; every call reads current data.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.exceptions import ProjectionError
from core.helpers import hash_string
from core.services import BaseService
from messenger.constants import messenger_settings
from messenger.serializers import ContactUserSerializer, MessageCardSerializer
from messenger.services import MessageService
from messenger.storage import AttachmentStorage

if TYPE_CHECKING:
    from datetime import datetime

    from messenger.models import Message
    from messenger.protocols import AvatarOwner

GRAVATAR_URL = "https://www.gravatar.com/avatar/"


class ConversationProjector(BaseService):
    """
    Builds display records from stored messages.

    Methods:
        project_message: Card for one message as seen by a viewer
        project_message_by_id: Same, looked up by id ({} when missing)
        project_contact_row: User, last message and unseen counter
        shared_images: Image attachments of a conversation, newest first
        avatar_url: Gravatar or stored avatar URL for a user
        attachment_url: Public URL of a stored attachment
    """

    @classmethod
    def project_message(
        cls,
        message: Message,
        viewer_id,
        now: datetime | None = None,
        render_default_card: bool = False,
    ) -> dict:
        """
        Build the display record for one message.

        Args:
            message: Stored message
            viewer_id: User the record is built for (drives is_sender)
            now: Reference time for the relative age
            render_default_card: Build the recipient-side card (is_sender=False)

        Returns:
            Dict as documented on MessageCardSerializer
        """
        serializer = MessageCardSerializer(
            message,
            context={
                "viewer_id": viewer_id,
                "now": now,
                "image_extensions": messenger_settings().allowed_images,
                "render_default_card": render_default_card,
            },
        )
        return dict(serializer.data)

    @classmethod
    def project_message_by_id(cls, message_id, viewer_id, now=None) -> dict:
        """Project a message by id; an empty dict when it does not exist."""
        message = MessageService.get_by_id(message_id)
        if message is None:
            return {}
        return cls.project_message(message, viewer_id, now=now)

    @classmethod
    def project_contact_row(
        cls,
        user: AvatarOwner,
        viewer_id,
        now: datetime | None = None,
        storage: AttachmentStorage | None = None,
    ) -> dict:
        """
        Build a contact-list row for user as seen by viewer_id.

        Returns:
            {"user": {...}, "last_message": {...} | None, "unseen_count": int}

        Raises:
            ProjectionError: Wrapping whatever failed underneath
        """
        try:
            last_message = MessageService.last_message(viewer_id, user.id)
            unseen_count = MessageService.count_unseen(viewer_id, user.id)

            user_data = ContactUserSerializer(
                user,
                context={
                    "avatar_resolver": lambda owner: cls.avatar_url(owner, storage),
                },
            ).data

            return {
                "user": dict(user_data),
                "last_message": (
                    cls.project_message(last_message, viewer_id, now=now)
                    if last_message is not None
                    else None
                ),
                "unseen_count": unseen_count,
            }
        except ProjectionError:
            raise
        except Exception as exc:
            cls.get_logger().warning(
                f"Could not build contact row of user {getattr(user, 'id', None)} "
                f"for viewer {viewer_id}: {exc}"
            )
            raise ProjectionError(
                "Could not build contact row",
                details={"user_id": getattr(user, "id", None), "cause": str(exc)},
            ) from exc

    @classmethod
    def shared_images(cls, self_id, other_id) -> list[str]:
        """
        Stored names of image attachments in a conversation, newest first.

        Messages without attachments and non-image attachments are skipped.
        """
        image_extensions = messenger_settings().allowed_images
        messages = (
            MessageService.conversation_query(self_id, other_id)
            .with_attachment()
            .order_by("-created_at", "-id")
        )
        return [
            message.attachment.new_name
            for message in messages
            if message.attachment is not None
            and message.attachment.is_image(image_extensions)
        ]

    @classmethod
    def avatar_url(
        cls,
        user: AvatarOwner,
        storage: AttachmentStorage | None = None,
    ) -> str:
        """
        Avatar URL for a user.

        Users still on the default avatar get a Gravatar URL when Gravatar
        is enabled; everyone else gets their stored avatar's URL.
        """
        config = messenger_settings()
        if user.avatar_name == config.default_avatar and config.gravatar_enabled:
            digest = hash_string(user.email.strip().lower(), "md5")
            return (
                f"{GRAVATAR_URL}{digest}"
                f"?s={config.gravatar_image_size}&d={config.gravatar_imageset}"
            )
        return (storage or AttachmentStorage.default()).avatar_url(user.avatar_name)

    @classmethod
    def attachment_url(cls, file_name: str, storage: AttachmentStorage | None = None) -> str:
        return (storage or AttachmentStorage.default()).attachment_url(file_name)
