"""
Serializers producing messenger display records.

Serializers:
    MessageCardSerializer: One message as a client renders it
    ContactUserSerializer: The user part of a contact-list row

Both are read-only. Per-request inputs (the viewer, the clock, the image
extension allowlist, the avatar resolver) travel in the serializer context;
ConversationProjector fills it in.
"""

from __future__ import annotations

from django.utils import timezone
from django.utils.timesince import timesince
from rest_framework import serializers

from messenger.constants import messenger_settings


def humanize_age(created_at, now=None) -> str:
    """
    Relative age such as "3 minutes ago".

    Django's timesince separates number and unit with a non-breaking space;
    it is normalized to a plain space for JSON clients.
    """
    now = now or timezone.now()
    return f"{timesince(created_at, now)} ago".replace("\xa0", " ")


class MessageCardSerializer(serializers.Serializer):
    """
    Display record for one message.

    Context:
        viewer_id: Id of the user the card is built for (required)
        now: Reference time for time_ago (defaults to timezone.now())
        image_extensions: Image allowlist (defaults to settings)
        render_default_card: Force is_sender=False (recipient-side card)

    Output:
        {
            "id": "<uuid>",
            "from_id": 1,
            "to_id": 2,
            "message": "Hello" | None,
            "attachment": {"file": ..., "title": ..., "type": "image" | "file"},
            "time_ago": "5 minutes ago",
            "created_at": "2026-01-01T10:00:00+00:00",
            "is_sender": True,
            "seen": False,
        }
    """

    id = serializers.UUIDField(read_only=True)
    from_id = serializers.ReadOnlyField(source="from_user_id")
    to_id = serializers.ReadOnlyField(source="to_user_id")
    message = serializers.CharField(source="body", read_only=True, allow_null=True)
    attachment = serializers.SerializerMethodField()
    time_ago = serializers.SerializerMethodField()
    created_at = serializers.SerializerMethodField()
    is_sender = serializers.SerializerMethodField()
    seen = serializers.BooleanField(read_only=True)

    def _image_extensions(self):
        extensions = self.context.get("image_extensions")
        if extensions is None:
            extensions = messenger_settings().allowed_images
        return extensions

    def get_attachment(self, obj) -> dict:
        reference = obj.attachment
        if reference is None:
            return {"file": None, "title": None, "type": None}
        return {
            "file": reference.new_name,
            "title": reference.title,
            "type": reference.kind(self._image_extensions()),
        }

    def get_time_ago(self, obj) -> str:
        return humanize_age(obj.created_at, self.context.get("now"))

    def get_created_at(self, obj) -> str:
        return obj.created_at.isoformat()

    def get_is_sender(self, obj) -> bool:
        if self.context.get("render_default_card"):
            return False
        return str(obj.from_user_id) == str(self.context["viewer_id"])


class ContactUserSerializer(serializers.Serializer):
    """
    User part of a contact-list row.

    Works on any messenger.protocols.AvatarOwner. The avatar URL comes
    from the ``avatar_resolver`` callable in the context.
    """

    id = serializers.ReadOnlyField()
    email = serializers.EmailField(read_only=True)
    name = serializers.SerializerMethodField()
    avatar = serializers.SerializerMethodField()

    def get_name(self, obj) -> str:
        return getattr(obj, "name", "") or ""

    def get_avatar(self, obj) -> str:
        return self.context["avatar_resolver"](obj)
