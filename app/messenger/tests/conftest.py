"""
Test configuration and fixtures for messenger tests.

This module provides:
- A pair of users with a short conversation between them
- In-memory fakes for the blob storage and the pub/sub transport
- A settings override pinning the messenger configuration

Usage:
    def test_example(alice, bob, conversation, fake_transport):
        ...
"""

import pytest

from authentication.tests.factories import UserFactory
from messenger.storage import AttachmentStorage
from messenger.tests.factories import MessageFactory
from messenger.tests.fakes import FakeBlobStorage, FakeTransport, backdate


# =============================================================================
# Settings
# =============================================================================


@pytest.fixture(autouse=True)
def messenger_config(settings):
    """Pin the messenger configuration used by every test."""
    settings.MESSENGER = {
        "STORAGE_ALIAS": "default",
        "ATTACHMENTS": {
            "FOLDER": "attachments",
            "ALLOWED_IMAGES": ["png", "jpg", "jpeg", "gif"],
            "ALLOWED_FILES": ["zip", "rar", "txt"],
            "MAX_UPLOAD_SIZE": 1,
        },
        "USER_AVATAR": {"FOLDER": "users-avatar", "DEFAULT": "avatar.png"},
        "GRAVATAR": {"ENABLED": True, "IMAGE_SIZE": 200, "IMAGESET": "identicon"},
        "CHANNEL_PREFIX": "private-messenger",
        "SUBSCRIPTION_TOKEN_MAX_AGE": 3600,
    }
    return settings.MESSENGER


# =============================================================================
# Users and conversations
# =============================================================================


@pytest.fixture
def alice(db):
    return UserFactory(name="Alice", email="alice@example.com")


@pytest.fixture
def bob(db):
    return UserFactory(name="Bob", email="bob@example.com")


@pytest.fixture
def carol(db):
    return UserFactory(name="Carol", email="carol@example.com")


@pytest.fixture
def conversation(alice, bob):
    """
    Three messages between alice and bob, oldest first.

    alice -> bob (10 min ago), bob -> alice (5 min ago), alice -> bob (1 min ago)
    """
    return [
        backdate(MessageFactory(from_user=alice, to_user=bob, body="Hi Bob"), 10),
        backdate(MessageFactory(from_user=bob, to_user=alice, body="Hi Alice"), 5),
        backdate(MessageFactory(from_user=alice, to_user=bob, body="How are you?"), 1),
    ]


# =============================================================================
# Fakes
# =============================================================================


@pytest.fixture
def blob_backend():
    return FakeBlobStorage()


@pytest.fixture
def fake_storage(blob_backend):
    """AttachmentStorage over an in-memory backend."""
    return AttachmentStorage(backend=blob_backend)


@pytest.fixture
def fake_transport():
    return FakeTransport()


@pytest.fixture
def failing_transport():
    return FakeTransport(fail=True)
