"""
Realtime event delivery.

Every user owns one private channel, ``<prefix>.<user_id>``. Events are
published to that channel and fanned out by Django Channels to every
WebSocket that subscribed to it (see messenger.consumers).

Classes:
    ChannelLayerTransport: PubSubTransport backed by the Channels layer
    RealtimeDispatcher: Publishes messenger events through a transport

Delivery is fire-and-forget and at-most-once. A publish failure raises
TransportError and is never retried; clients reconcile by refreshing.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from asgiref.sync import async_to_sync
from channels.layers import DEFAULT_CHANNEL_LAYER, get_channel_layer
from django.core import signing

from core.exceptions import TransportError
from messenger.constants import EVENTS, messenger_settings

if TYPE_CHECKING:
    from messenger.protocols import PubSubTransport

logger = logging.getLogger(__name__)

SUBSCRIPTION_SALT = "messenger.channel-subscription"

# Channels group names only allow ASCII alphanumerics, hyphens, underscores
# and periods.
_INVALID_GROUP_CHARS = re.compile(r"[^a-zA-Z0-9\-_.]")


def channel_for_user(user_id) -> str:
    """Private channel name of a user."""
    return f"{messenger_settings().channel_prefix}.{user_id}"


def group_name_for(channel: str) -> str:
    """Channels group backing a messenger channel name."""
    return _INVALID_GROUP_CHARS.sub("_", channel)


class ChannelLayerTransport:
    """
    PubSubTransport over a Django Channels layer.

    publish() sends a ``messenger.event`` message to the group of the
    channel. Subscription tokens are signed with Django's signing module,
    bound to the channel and the socket id, and expire after
    ``MESSENGER["SUBSCRIPTION_TOKEN_MAX_AGE"]`` seconds.
    """

    def __init__(self, channel_layer=None, alias: str = DEFAULT_CHANNEL_LAYER, max_age=None):
        self._channel_layer = channel_layer
        self.alias = alias
        self.max_age = max_age

    @property
    def channel_layer(self):
        if self._channel_layer is None:
            self._channel_layer = get_channel_layer(self.alias)
        return self._channel_layer

    def publish(self, channel: str, event: str, payload: dict) -> None:
        layer = self.channel_layer
        if layer is None:
            raise TransportError(
                "No channel layer configured",
                details={"alias": self.alias},
            )

        try:
            async_to_sync(layer.group_send)(
                group_name_for(channel),
                {
                    "type": EVENTS.CHANNEL_LAYER_TYPE,
                    "channel": channel,
                    "event": event,
                    "data": payload,
                },
            )
        except Exception as exc:
            raise TransportError(
                f"Could not publish {event} on {channel}",
                details={"channel": channel, "event": event, "cause": str(exc)},
            ) from exc

    def sign_subscription(self, channel: str, socket_id: str, auth_payload: dict) -> str:
        try:
            return signing.dumps(
                {"channel": channel, "socket_id": socket_id, "auth": auth_payload},
                salt=SUBSCRIPTION_SALT,
            )
        except Exception as exc:
            raise TransportError(
                "Could not sign channel subscription",
                details={"channel": channel, "cause": str(exc)},
            ) from exc

    def verify_subscription(self, token: str, channel: str, socket_id: str) -> bool:
        max_age = self.max_age
        if max_age is None:
            max_age = messenger_settings().subscription_token_max_age

        try:
            data = signing.loads(token, salt=SUBSCRIPTION_SALT, max_age=max_age)
        except signing.BadSignature:
            return False

        return data.get("channel") == channel and data.get("socket_id") == socket_id


class RealtimeDispatcher:
    """
    Publishes messenger events to private user channels.

    Usage:
        dispatcher = RealtimeDispatcher()
        dispatcher.publish_typing(from_id=5, to_id=6, typing=True)
    """

    def __init__(self, transport: PubSubTransport | None = None):
        self.transport = transport or ChannelLayerTransport()

    def publish(self, channel: str, event: str, payload: dict) -> None:
        """
        Hand one event to the transport.

        Raises:
            TransportError: If the transport rejected the event
        """
        try:
            self.transport.publish(channel, event, payload)
        except TransportError as exc:
            logger.error(f"Publishing {event} on {channel} failed: {exc}")
            raise
        except Exception as exc:
            logger.error(f"Publishing {event} on {channel} failed: {exc}")
            raise TransportError(
                f"Could not publish {event} on {channel}",
                details={"channel": channel, "event": event, "cause": str(exc)},
            ) from exc

        logger.debug(f"Published {event} on {channel}")

    def publish_message(self, message, projected: dict) -> None:
        """Notify the recipient of a new message with its projected card."""
        self.publish(
            channel_for_user(message.to_user_id),
            EVENTS.NEW_MESSAGE,
            {
                "from_id": message.from_user_id,
                "to_id": message.to_user_id,
                "message": projected,
            },
        )

    def publish_seen(self, self_id, other_id) -> None:
        """Tell other_id that self_id has read their messages."""
        self.publish(
            channel_for_user(other_id),
            EVENTS.SEEN,
            {"from_id": self_id, "to_id": other_id, "seen": True},
        )

    def publish_typing(self, from_id, to_id, typing: bool) -> None:
        self.publish(
            channel_for_user(to_id),
            EVENTS.TYPING,
            {"from_id": from_id, "to_id": to_id, "typing": bool(typing)},
        )

    def publish_deleted(self, self_id, other_id, message_id) -> None:
        self.publish(
            channel_for_user(other_id),
            EVENTS.MESSAGE_DELETED,
            {"from_id": self_id, "to_id": other_id, "message_id": str(message_id)},
        )
