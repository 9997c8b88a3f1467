"""
Protocols for the messenger's external collaborators.

Available Protocols:
    AvatarOwner: What contact rendering needs from a user-like object
    BlobStorage: File storage used for attachments and avatars
    PubSubTransport: Realtime publish and subscription signing

Django's storage classes satisfy BlobStorage as-is, and
messenger.realtime.ChannelLayerTransport is the default PubSubTransport.
Tests substitute simple fakes or mocks for both.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from typing import Any


@runtime_checkable
class AvatarOwner(Protocol):
    """Narrow identity capability used when building contact rows."""

    id: Any
    email: str

    @property
    def avatar_name(self) -> str: ...


@runtime_checkable
class BlobStorage(Protocol):
    """Subset of django.core.files.storage.Storage used by the messenger."""

    def exists(self, name: str) -> bool: ...

    def delete(self, name: str) -> None: ...

    def url(self, name: str) -> str: ...

    def save(self, name: str, content: Any, max_length: int | None = None) -> str: ...


@runtime_checkable
class PubSubTransport(Protocol):
    """Publish/subscribe transport with its own subscription signing."""

    def publish(self, channel: str, event: str, payload: dict) -> None:
        """
        Deliver an event to every subscriber of channel.

        Raises:
            TransportError: If the transport could not accept the event
        """
        ...

    def sign_subscription(self, channel: str, socket_id: str, auth_payload: dict) -> str:
        """Return an opaque token allowing socket_id to join channel."""
        ...

    def verify_subscription(self, token: str, channel: str, socket_id: str) -> bool:
        """Check a token issued by sign_subscription."""
        ...
