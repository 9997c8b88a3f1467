"""
Test doubles and helpers for messenger tests.

FakeBlobStorage and FakeTransport satisfy messenger.protocols.BlobStorage
and messenger.protocols.PubSubTransport and keep everything in memory.
"""

from datetime import timedelta

from django.utils import timezone

from core.exceptions import TransportError


def backdate(instance, minutes):
    """Move a row's created_at into the past (auto_now_add ignores kwargs)."""
    created_at = timezone.now() - timedelta(minutes=minutes)
    type(instance).objects.filter(pk=instance.pk).update(created_at=created_at)
    instance.refresh_from_db()
    return instance


class FakeBlobStorage:
    """In-memory stand-in for a Django storage backend."""

    def __init__(self, files=None, fail_on_delete=False):
        self.files = dict.fromkeys(files or [], b"")
        self.fail_on_delete = fail_on_delete
        self.deleted = []

    def exists(self, name):
        return name in self.files

    def delete(self, name):
        if self.fail_on_delete:
            raise OSError("disk unavailable")
        self.files.pop(name, None)
        self.deleted.append(name)

    def url(self, name):
        return f"/media/{name}"

    def save(self, name, content, max_length=None):
        self.files[name] = content.read() if hasattr(content, "read") else content
        return name


class FakeTransport:
    """Records published events and signed subscriptions; can be told to fail."""

    def __init__(self, fail=False):
        self.fail = fail
        self.published = []
        self.signed = []

    def publish(self, channel, event, payload):
        if self.fail:
            raise TransportError("pub/sub unavailable")
        self.published.append((channel, event, payload))

    def sign_subscription(self, channel, socket_id, auth_payload):
        if self.fail:
            raise TransportError("signing unavailable")
        self.signed.append((channel, socket_id, auth_payload))
        return f"token:{channel}:{socket_id}"

    def verify_subscription(self, token, channel, socket_id):
        return token == f"token:{channel}:{socket_id}"
