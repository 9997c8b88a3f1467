"""
Private channel authorization.

A user may only listen on their own private channel. The WebSocket consumer
(or an HTTP endpoint, for clients using an external pub/sub service) asks
ChannelAuthorizationService.authorize() for a signed subscription token and
presents it when joining the channel.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.exceptions import TransportError, UnauthenticatedError, UnauthorizedError
from core.services import BaseService, ServiceResult
from messenger.realtime import ChannelLayerTransport, channel_for_user

if TYPE_CHECKING:
    from messenger.identity import IdentityContext
    from messenger.protocols import PubSubTransport


class ChannelAuthorizationService(BaseService):
    """
    Grants or denies subscriptions to private user channels.

    Methods:
        channel_for: Private channel name of a user
        authorize: Sign a subscription for the caller's own channel
        verify_subscription: Check a previously issued token
    """

    @classmethod
    def channel_for(cls, user_id) -> str:
        return channel_for_user(user_id)

    @classmethod
    def authorize(
        cls,
        identity: IdentityContext,
        target_user_id,
        channel_name: str,
        socket_id: str,
        transport: PubSubTransport | None = None,
    ) -> ServiceResult[str]:
        """
        Authorize identity to subscribe to target_user_id's channel.

        Args:
            identity: Caller's identity context
            target_user_id: Owner of the requested channel
            channel_name: Channel the client wants to join
            socket_id: Connection id the token is bound to
            transport: Signing transport (defaults to ChannelLayerTransport)

        Returns:
            ServiceResult with the signed token, or a failure with error_code
            UNAUTHENTICATED, UNAUTHORIZED or TRANSPORT_ERROR
        """
        logger = cls.get_logger()

        if not identity.is_authenticated:
            logger.warning(
                f"Rejected anonymous subscription to channel {channel_name}"
            )
            return ServiceResult.from_exception(
                UnauthenticatedError("Authentication required")
            )

        if not identity.is_user(target_user_id):
            logger.warning(
                f"User {identity.user_id} denied subscription to the channel "
                f"of user {target_user_id}"
            )
            return ServiceResult.from_exception(
                UnauthorizedError("Cannot subscribe to another user's channel")
            )

        if channel_name != cls.channel_for(target_user_id):
            logger.warning(
                f"User {identity.user_id} asked for unknown channel {channel_name}"
            )
            return ServiceResult.from_exception(
                UnauthorizedError("Channel does not belong to the requested user")
            )

        auth_payload = {
            "user_id": identity.user_id,
            "user_info": {"name": identity.name},
        }

        try:
            token = (transport or ChannelLayerTransport()).sign_subscription(
                channel_name, socket_id, auth_payload
            )
        except TransportError as exc:
            logger.error(f"Signing subscription to {channel_name} failed: {exc}")
            return ServiceResult.from_exception(exc)

        logger.info(f"User {identity.user_id} authorized on channel {channel_name}")
        return ServiceResult.success(token)

    @classmethod
    def verify_subscription(
        cls,
        token: str,
        channel_name: str,
        socket_id: str,
        transport: PubSubTransport | None = None,
    ) -> bool:
        if not token:
            return False
        return (transport or ChannelLayerTransport()).verify_subscription(
            token, channel_name, socket_id
        )
