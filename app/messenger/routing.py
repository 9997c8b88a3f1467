"""
WebSocket URL routing for the messenger.

URL Patterns:
    ws/messenger/ - One socket per client; channels are joined by frames

Authentication:
    JWT token passed as ?token=<jwt_access_token> or as the
    "jwt, <token>" subprotocol; JWTAuthMiddleware attaches the user.
"""

from django.urls import path

from messenger import consumers

websocket_urlpatterns = [
    path("ws/messenger/", consumers.MessengerConsumer.as_asgi()),
]
