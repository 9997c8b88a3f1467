"""
Messenger models.

Models:
    Message: One direct message from one user to another
    Favorite: A starred contact in a user's favorites list

Design Decisions:
    - There is no conversation table. The conversation between A and B is
      the set of messages whose (from_user, to_user) is (A, B) or (B, A),
      ordered by created_at (see Message.objects.between).
    - The attachment is an inline JSON descriptor, parsed by AttachmentField.
    - Messages are hard deleted; the attachment file goes with the row.
    - Favorite pairs are not unique at the database level. Readers go
      through FavoriteService.is_favorite, which tolerates duplicates.
"""

from __future__ import annotations

from django.conf import settings
from django.db import models
from django.db.models import Q

from core.models import BaseModel, UUIDPrimaryKeyMixin
from messenger.fields import AttachmentField


class MessageQuerySet(models.QuerySet):
    """QuerySet helpers for direct messages."""

    def between(self, self_id, other_id) -> MessageQuerySet:
        """
        Messages exchanged between two users, in either direction.

        Pure filter: ordering, limits and aggregation are left to the caller.
        """
        return self.filter(
            Q(from_user_id=self_id, to_user_id=other_id)
            | Q(from_user_id=other_id, to_user_id=self_id)
        )

    def unseen_from(self, sender_id, recipient_id) -> MessageQuerySet:
        """Messages sent by sender_id to recipient_id not yet seen."""
        return self.filter(
            from_user_id=sender_id,
            to_user_id=recipient_id,
            seen=False,
        )

    def with_attachment(self) -> MessageQuerySet:
        return self.filter(attachment__isnull=False)


class Message(UUIDPrimaryKeyMixin, BaseModel):
    """
    A direct message between two users.

    Fields:
        from_user: Sender
        to_user: Recipient
        body: Message text (null for attachment-only messages)
        attachment: AttachmentReference or None
        seen: True once the recipient has read the conversation

    Lifecycle:
        Created with seen=False. The only later mutation is seen -> True
        (bulk, by MessageService.mark_seen). Deleted individually or per
        conversation together with its attachment file.
    """

    from_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sent_direct_messages",
        help_text="User who sent this message",
    )

    to_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="received_direct_messages",
        help_text="User this message was sent to",
    )

    body = models.TextField(
        null=True,
        blank=True,
        help_text="Message text (null when the message only carries a file)",
    )

    attachment = AttachmentField(
        null=True,
        blank=True,
        help_text='Attachment descriptor {"new_name": ..., "old_name": ...}',
    )

    seen = models.BooleanField(
        default=False,
        help_text="Whether the recipient has seen this message",
    )

    objects = MessageQuerySet.as_manager()

    class Meta:
        db_table = "messenger_message"
        ordering = ["created_at", "id"]
        indexes = [
            # Conversation reads in both directions
            models.Index(
                fields=["from_user", "to_user", "created_at"],
                name="msgr_msg_pair_created_idx",
            ),
            # Unseen counters
            models.Index(
                fields=["to_user", "from_user", "seen"],
                name="msgr_msg_unseen_idx",
            ),
        ]

    def __str__(self) -> str:
        preview = self.body or ""
        if len(preview) > 50:
            preview = preview[:50] + "..."
        if self.attachment is not None:
            preview = f"{preview} [{self.attachment.new_name}]".strip()
        return f"User {self.from_user_id} -> User {self.to_user_id}: {preview}"

    @property
    def has_attachment(self) -> bool:
        return self.attachment is not None

    def is_sent_by(self, user_id) -> bool:
        return self.from_user_id == user_id


class Favorite(UUIDPrimaryKeyMixin, BaseModel):
    """
    A user starring another user.

    Fields:
        user: Owner of the favorites list
        favorite: The starred user
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="messenger_favorites",
        help_text="Owner of this favorites entry",
    )

    favorite = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="+",
        help_text="User added to the owner's favorites",
    )

    class Meta:
        db_table = "messenger_favorite"
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["user", "favorite"],
                name="msgr_fav_owner_target_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"Favorite: {self.user_id} -> {self.favorite_id}"
