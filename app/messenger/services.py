"""
Messenger persistence services.

Services:
    MessageService: Conversation queries, message creation, seen-state,
        deletion with attachment cleanup
    FavoriteService: Starred contacts

Design Principles:
    - Services are stateless (class methods only)
    - Callers pass ids explicitly; nothing reads a global "current user"
    - Database failures surface as core.exceptions.PersistenceError, no retries
    - Deletion is not transactional: rows and files are removed one by one,
      and a crash part-way leaves a partially deleted conversation

Usage:
    from messenger.services import FavoriteService, MessageService

    message = MessageService.create(sender.id, recipient.id, "Hello!")
    MessageService.mark_seen(recipient.id, sender.id)
    FavoriteService.set_favorite(sender.id, recipient.id, True)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.core.exceptions import ValidationError as DjangoValidationError
from django.utils import timezone

from core.decorators import translate_database_errors
from core.exceptions import NotFoundError
from core.services import BaseService
from messenger.models import Favorite, Message, MessageQuerySet
from messenger.storage import AttachmentStorage

if TYPE_CHECKING:
    from messenger.attachments import AttachmentReference


class MessageService(BaseService):
    """
    Service for direct message storage.

    Methods:
        conversation_query: Messages between two users (both directions)
        create: Persist a new unseen message
        mark_seen: Flag everything the other user sent as seen
        count_unseen: Number of unseen messages from the other user
        last_message: Most recent message of a conversation
        get_by_id: Fetch one message or None
        delete_one: Delete a message the caller sent
        delete_conversation: Delete a whole conversation
    """

    @classmethod
    def conversation_query(cls, self_id, other_id) -> MessageQuerySet:
        """
        Messages where (from=self, to=other) or (from=other, to=self).

        Returns an unevaluated queryset; callers add ordering and limits.
        conversation_query(a, b) and conversation_query(b, a) match the
        same rows.
        """
        return Message.objects.between(self_id, other_id)

    @classmethod
    @translate_database_errors("create message")
    def create(
        cls,
        from_id,
        to_id,
        body: str | None,
        attachment: AttachmentReference | None = None,
    ) -> Message:
        """
        Persist a new message with seen=False.

        Body and attachment are stored as given; content validation is the
        caller's job.

        Raises:
            PersistenceError: If the database rejects the insert
        """
        message = Message.objects.create(
            from_user_id=from_id,
            to_user_id=to_id,
            body=body,
            attachment=attachment,
            seen=False,
        )

        cls.get_logger().debug(
            f"User {from_id} sent message {message.id} to user {to_id}"
        )
        return message

    @classmethod
    @translate_database_errors("mark messages seen")
    def mark_seen(cls, self_id, other_id) -> int:
        """
        Mark every unseen message sent by other_id to self_id as seen.

        Idempotent: a second call updates nothing.

        Returns:
            Number of messages updated
        """
        updated = Message.objects.unseen_from(other_id, self_id).update(
            seen=True,
            updated_at=timezone.now(),
        )

        if updated:
            cls.get_logger().debug(
                f"User {self_id} marked {updated} message(s) from user {other_id} as seen"
            )
        return updated

    @classmethod
    @translate_database_errors("count unseen messages")
    def count_unseen(cls, self_id, other_id) -> int:
        """Number of messages from other_id to self_id still unseen."""
        return Message.objects.unseen_from(other_id, self_id).count()

    @classmethod
    @translate_database_errors("load last message")
    def last_message(cls, self_id, other_id) -> Message | None:
        """Most recent message of the conversation, or None."""
        return (
            cls.conversation_query(self_id, other_id)
            .order_by("-created_at", "-id")
            .first()
        )

    @classmethod
    @translate_database_errors("load message")
    def get_by_id(cls, message_id) -> Message | None:
        """Fetch a message by id; None if absent or the id is malformed."""
        try:
            return Message.objects.filter(id=message_id).first()
        except DjangoValidationError:
            return None

    @classmethod
    @translate_database_errors("delete message")
    def delete_one(
        cls,
        self_id,
        message_id,
        storage: AttachmentStorage | None = None,
    ) -> Message:
        """
        Delete a message sent by self_id.

        The attachment file is removed first on a best-effort basis; a
        storage failure is logged and the row is deleted anyway.

        Returns:
            The deleted Message instance (its primary key is cleared)

        Raises:
            NotFoundError: If no such message exists or self_id is not its sender
        """
        try:
            message = Message.objects.get(id=message_id, from_user_id=self_id)
        except (Message.DoesNotExist, DjangoValidationError) as exc:
            raise NotFoundError(
                "Message not found",
                error_code="MESSAGE_NOT_FOUND",
                details={"message_id": str(message_id)},
            ) from exc

        if message.attachment is not None:
            (storage or AttachmentStorage.default()).remove(message.attachment)

        message.delete()

        cls.get_logger().info(f"User {self_id} deleted message {message_id}")
        return message

    @classmethod
    def delete_conversation(
        cls,
        self_id,
        other_id,
        storage: AttachmentStorage | None = None,
    ) -> bool:
        """
        Delete every message between self_id and other_id.

        Messages are deleted one at a time outside any transaction, each
        after a best-effort removal of its attachment file. If anything
        unexpected fails, already-deleted messages stay deleted and the
        call reports False.

        Returns:
            True if the loop completed, False on an unexpected error
        """
        deleted = 0
        try:
            storage = storage or AttachmentStorage.default()
            for message in list(cls.conversation_query(self_id, other_id)):
                if message.attachment is not None:
                    storage.remove(message.attachment)
                message.delete()
                deleted += 1
        except Exception as exc:
            cls.get_logger().error(
                f"Deleting conversation between users {self_id} and {other_id} "
                f"failed after {deleted} message(s): {exc}",
                exc_info=True,
            )
            return False

        cls.get_logger().info(
            f"User {self_id} deleted conversation with user {other_id} "
            f"({deleted} message(s))"
        )
        return True


class FavoriteService(BaseService):
    """
    Service for a user's favorites (starred contacts).

    Methods:
        is_favorite: Whether owner starred target
        set_favorite: Star or unstar
        list_favorites: Starred users, newest first
    """

    @classmethod
    @translate_database_errors("check favorite")
    def is_favorite(cls, owner_id, target_id) -> bool:
        return Favorite.objects.filter(user_id=owner_id, favorite_id=target_id).exists()

    @classmethod
    @translate_database_errors("update favorite")
    def set_favorite(cls, owner_id, target_id, on: bool) -> bool:
        """
        Star (on=True) or unstar (on=False) target for owner.

        Starring always inserts a row; callers check is_favorite first if
        they want to avoid duplicates. Unstarring removes every matching row.

        Returns:
            True when a row was inserted, or when at least one row was removed
        """
        if on:
            Favorite.objects.create(user_id=owner_id, favorite_id=target_id)
            cls.get_logger().debug(f"User {owner_id} starred user {target_id}")
            return True

        deleted, _ = Favorite.objects.filter(
            user_id=owner_id,
            favorite_id=target_id,
        ).delete()
        cls.get_logger().debug(
            f"User {owner_id} unstarred user {target_id} ({deleted} row(s))"
        )
        return deleted > 0

    @classmethod
    @translate_database_errors("list favorites")
    def list_favorites(cls, owner_id) -> list:
        """Users starred by owner_id, most recently starred first, without duplicates."""
        users = []
        seen_ids = set()
        for favorite in Favorite.objects.filter(user_id=owner_id).select_related(
            "favorite"
        ):
            if favorite.favorite_id in seen_ids:
                continue
            seen_ids.add(favorite.favorite_id)
            users.append(favorite.favorite)
        return users
