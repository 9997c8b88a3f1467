"""
Constants and configuration for the messenger.

Runtime configuration lives in ``settings.MESSENGER``; any key left out
falls back to MESSENGER_DEFAULTS. Values are read on every access so test
overrides (pytest-django's ``settings`` fixture) apply immediately.

Import example:
    from messenger.constants import EVENTS, messenger_settings

    if extension in messenger_settings().allowed_images:
        ...
"""

from __future__ import annotations

from typing import Any, Final

from django.conf import settings

BYTES_PER_MEGABYTE: Final[int] = 1048576


# =============================================================================
# Realtime event names
# =============================================================================


class EVENTS:
    """Event names published on private user channels."""

    NEW_MESSAGE: Final[str] = "messaging"
    SEEN: Final[str] = "client-seen"
    TYPING: Final[str] = "client-typing"
    MESSAGE_DELETED: Final[str] = "message-deleted"

    # Channel layer message type handled by MessengerConsumer.messenger_event
    CHANNEL_LAYER_TYPE: Final[str] = "messenger.event"


class ATTACHMENT_KIND:
    """Classification of an attachment by its stored file extension."""

    IMAGE: Final[str] = "image"
    FILE: Final[str] = "file"


# =============================================================================
# Settings
# =============================================================================

MESSENGER_DEFAULTS: Final[dict[str, Any]] = {
    "STORAGE_ALIAS": "default",
    "ATTACHMENTS": {
        "FOLDER": "attachments",
        "ALLOWED_IMAGES": ["png", "jpg", "jpeg", "gif"],
        "ALLOWED_FILES": ["zip", "rar", "txt"],
        "MAX_UPLOAD_SIZE": 150,  # MB
    },
    "USER_AVATAR": {
        "FOLDER": "users-avatar",
        "DEFAULT": "avatar.png",
    },
    "GRAVATAR": {
        "ENABLED": True,
        "IMAGE_SIZE": 200,
        "IMAGESET": "identicon",
    },
    "COLORS": [
        "#2180f3",
        "#2196F3",
        "#00BCD4",
        "#3F51B5",
        "#673AB7",
        "#4CAF50",
        "#FFC107",
        "#FF9800",
        "#ff2522",
        "#9C27B0",
    ],
    "CHANNEL_PREFIX": "private-messenger",
    "SUBSCRIPTION_TOKEN_MAX_AGE": 60 * 60 * 24,  # seconds
}

FALLBACK_COLOR: Final[str] = "#000000"


class MessengerSettings:
    """
    Read-only view over ``settings.MESSENGER`` merged with defaults.

    Nested sections (ATTACHMENTS, USER_AVATAR, GRAVATAR) are merged key by
    key, so overriding one entry keeps the rest of the section.
    """

    def __init__(self, overrides: dict[str, Any] | None = None):
        self._overrides = overrides or {}

    def _get(self, section: str, key: str | None = None) -> Any:
        value = self._overrides.get(section, MESSENGER_DEFAULTS[section])
        if key is None:
            return value
        if key in value:
            return value[key]
        return MESSENGER_DEFAULTS[section][key]

    @property
    def storage_alias(self) -> str:
        return self._get("STORAGE_ALIAS")

    @property
    def attachments_folder(self) -> str:
        return self._get("ATTACHMENTS", "FOLDER")

    @property
    def allowed_images(self) -> list[str]:
        return [ext.lower() for ext in self._get("ATTACHMENTS", "ALLOWED_IMAGES")]

    @property
    def allowed_files(self) -> list[str]:
        return [ext.lower() for ext in self._get("ATTACHMENTS", "ALLOWED_FILES")]

    @property
    def max_upload_size(self) -> int:
        """Maximum upload size in bytes (configured in megabytes)."""
        return int(self._get("ATTACHMENTS", "MAX_UPLOAD_SIZE")) * BYTES_PER_MEGABYTE

    @property
    def avatar_folder(self) -> str:
        return self._get("USER_AVATAR", "FOLDER")

    @property
    def default_avatar(self) -> str:
        return self._get("USER_AVATAR", "DEFAULT")

    @property
    def gravatar_enabled(self) -> bool:
        return bool(self._get("GRAVATAR", "ENABLED"))

    @property
    def gravatar_image_size(self) -> int:
        return int(self._get("GRAVATAR", "IMAGE_SIZE"))

    @property
    def gravatar_imageset(self) -> str:
        return self._get("GRAVATAR", "IMAGESET")

    @property
    def colors(self) -> list[str]:
        return list(self._get("COLORS"))

    @property
    def fallback_color(self) -> str:
        """First configured color, or black when the palette is empty."""
        colors = self.colors
        return colors[0] if colors else FALLBACK_COLOR

    @property
    def channel_prefix(self) -> str:
        return self._get("CHANNEL_PREFIX")

    @property
    def subscription_token_max_age(self) -> int:
        return int(self._get("SUBSCRIPTION_TOKEN_MAX_AGE"))


def messenger_settings() -> MessengerSettings:
    """Return the current messenger configuration."""
    return MessengerSettings(getattr(settings, "MESSENGER", None))
