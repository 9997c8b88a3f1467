"""
WebSocket consumer for realtime messenger events.

One socket per client session. After connecting, a client asks for a
subscription token for its own private channel, then subscribes with it.
Events published by RealtimeDispatcher on that channel are forwarded to the
socket as they arrive.

Authentication:
    JWTAuthMiddleware attaches the user to self.scope["user"]; anonymous
    connections are closed with code 4001.

Message Types (from client):
    - authorize: {"type": "authorize", "channel": "private-messenger.5"}
    - subscribe: {"type": "subscribe", "channel": "...", "auth": "<token>"}
    - typing: {"type": "typing", "to_id": 6, "typing": true}
    - seen: {"type": "seen", "with_id": 6}

Message Types (to client):
    - connection_established: {"socket_id": ...}
    - subscription_authorized: {"channel": ..., "auth": ...}
    - subscription_succeeded: {"channel": ...}
    - error: {"error": ..., "error_code": ...}
    - any published event: {"channel": ..., "event": ..., "data": ...}
"""

from __future__ import annotations

import logging

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncJsonWebsocketConsumer

from core.exceptions import TransportError
from messenger.authorization import ChannelAuthorizationService
from messenger.delivery import MessengerService
from messenger.identity import IdentityContext
from messenger.realtime import RealtimeDispatcher, group_name_for

logger = logging.getLogger(__name__)


class MessengerConsumer(AsyncJsonWebsocketConsumer):
    """
    Per-connection handler for private messenger channels.

    Attributes:
        identity: Caller identity built from the connection scope
        subscribed_groups: Channel layer groups this socket joined
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.identity: IdentityContext = IdentityContext.anonymous()
        self.subscribed_groups: set[str] = set()

    async def connect(self):
        self.identity = IdentityContext.from_user(self.scope.get("user"))

        if not self.identity.is_authenticated:
            logger.warning("Rejected unauthenticated messenger connection")
            await self.close(code=4001)
            return

        # Browsers drop the socket unless the offered subprotocol is echoed
        subprotocol = "jwt" if "jwt" in self.scope.get("subprotocols", []) else None
        await self.accept(subprotocol=subprotocol)
        await self._send_event("connection_established", {"socket_id": self.channel_name})
        logger.info(f"User {self.identity.user_id} connected to messenger")

    async def disconnect(self, close_code):
        for group in self.subscribed_groups:
            await self.channel_layer.group_discard(group, self.channel_name)
        self.subscribed_groups.clear()

        if self.identity.is_authenticated:
            logger.info(
                f"User {self.identity.user_id} disconnected from messenger ({close_code})"
            )

    async def receive_json(self, content, **kwargs):
        """
        Dispatch an incoming client frame by its ``type`` key.

        Args:
            content: Parsed JSON frame from the client
        """
        if not isinstance(content, dict):
            await self._send_error("Malformed frame", "INVALID_FRAME")
            return

        frame_type = content.get("type")
        handler = {
            "authorize": self._handle_authorize,
            "subscribe": self._handle_subscribe,
            "typing": self._handle_typing,
            "seen": self._handle_seen,
        }.get(frame_type)

        if handler is None:
            await self._send_error(f"Unknown message type: {frame_type}", "UNKNOWN_TYPE")
            return

        await handler(content)

    # -------------------------------------------------------------------------
    # Client frames
    # -------------------------------------------------------------------------

    async def _handle_authorize(self, content):
        channel = content.get("channel") or ""
        if not isinstance(channel, str):
            await self._send_error("channel must be a string", "INVALID_FRAME")
            return
        target_user_id = self._owner_of(channel)

        result = await database_sync_to_async(ChannelAuthorizationService.authorize)(
            self.identity, target_user_id, channel, self.channel_name
        )
        if not result:
            await self._send_error(result.error, result.error_code)
            return

        await self._send_event(
            "subscription_authorized", {"channel": channel, "auth": result.data}
        )

    async def _handle_subscribe(self, content):
        channel = content.get("channel") or ""
        token = content.get("auth") or ""
        if not isinstance(channel, str) or not isinstance(token, str):
            await self._send_error("channel and auth must be strings", "INVALID_FRAME")
            return

        valid = await database_sync_to_async(
            ChannelAuthorizationService.verify_subscription
        )(token, channel, self.channel_name)
        if not valid:
            logger.warning(
                f"User {self.identity.user_id} presented an invalid token for {channel}"
            )
            await self._send_error("Invalid subscription token", "UNAUTHORIZED")
            return

        group = group_name_for(channel)
        await self.channel_layer.group_add(group, self.channel_name)
        self.subscribed_groups.add(group)
        await self._send_event("subscription_succeeded", {"channel": channel})

    async def _handle_typing(self, content):
        to_id = content.get("to_id")
        if not self._is_user_id(to_id):
            await self._send_error("to_id is required", "VALIDATION_ERROR")
            return

        try:
            await database_sync_to_async(RealtimeDispatcher().publish_typing)(
                self.identity.user_id, to_id, bool(content.get("typing", False))
            )
        except TransportError as exc:
            await self._send_error(exc.message, exc.error_code)

    async def _handle_seen(self, content):
        with_id = content.get("with_id")
        if not self._is_user_id(with_id):
            await self._send_error("with_id is required", "VALIDATION_ERROR")
            return

        try:
            result = await database_sync_to_async(MessengerService.mark_seen)(
                self.identity, with_id
            )
        except (TypeError, ValueError):
            logger.warning(
                f"User {self.identity.user_id} sent seen with invalid id {with_id!r}"
            )
            await self._send_error("with_id is not a valid user id", "VALIDATION_ERROR")
            return

        if not result:
            await self._send_error(result.error, result.error_code)

    # -------------------------------------------------------------------------
    # Channel layer events
    # -------------------------------------------------------------------------

    async def messenger_event(self, event):
        """Forward a published event to the client."""
        await self.send_json(
            {
                "channel": event["channel"],
                "event": event["event"],
                "data": event["data"],
            }
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _is_user_id(value) -> bool:
        # bool is an int subclass but never a user id
        return isinstance(value, (int, str)) and not isinstance(value, bool) and value != ""

    @staticmethod
    def _owner_of(channel: str) -> str | None:
        _, sep, user_id = channel.rpartition(".")
        return user_id if sep and user_id else None

    async def _send_event(self, event: str, data: dict):
        await self.send_json({"event": event, "data": data})

    async def _send_error(self, message: str | None, error_code: str | None):
        await self._send_event("error", {"error": message, "error_code": error_code})
