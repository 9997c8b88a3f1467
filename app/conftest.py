"""
Shared pytest configuration for all apps.

Provides:
- Test-only settings (fast password hashing, in-memory channel layer,
  file storage under a temporary directory)
- Automatic unit/integration markers based on test file names
- Fixtures used across apps (JWT access tokens)
"""

import pytest


def pytest_configure():
    """Apply test-only settings once Django is configured."""
    from django.conf import settings

    # Use fast password hasher for tests (PBKDF2 is too slow with 870K iterations)
    settings.PASSWORD_HASHERS = [
        "django.contrib.auth.hashers.MD5PasswordHasher",
    ]

    settings.CHANNEL_LAYERS = {
        "default": {"BACKEND": "channels.layers.InMemoryChannelLayer"},
    }


def pytest_collection_modifyitems(items):
    """
    Auto-mark tests based on filename patterns.

    Mapping:
    - test_services.py, test_delivery.py, test_consumers.py, ... → integration
    - test_models.py, test_attachments.py, test_fields.py, ... → unit
    - Unmatched files → integration (safe default for Django)

    Explicit markers on test functions/classes take precedence.
    """
    integration_patterns = [
        "test_services.py",
        "test_projections.py",
        "test_authorization.py",
        "test_delivery.py",
        "test_consumers.py",
        "test_middleware.py",
        "test_realtime.py",
        "test_storage.py",
    ]

    unit_patterns = [
        "test_models.py",
        "test_attachments.py",
        "test_fields.py",
        "test_managers.py",
        "test_identity.py",
        "test_exceptions.py",
        "test_decorators.py",
        "test_constants.py",
    ]

    for item in items:
        existing_markers = {m.name for m in item.iter_markers()}
        if existing_markers & {"unit", "integration"}:
            continue

        filename = str(item.fspath).split("/")[-1]

        if any(pattern in filename for pattern in integration_patterns):
            item.add_marker(pytest.mark.integration)
        elif any(pattern in filename for pattern in unit_patterns):
            item.add_marker(pytest.mark.unit)
        else:
            item.add_marker(pytest.mark.integration)


@pytest.fixture(autouse=True)
def media_storage(settings, tmp_path):
    """Keep uploaded files of every test under its own temporary directory."""
    settings.MEDIA_ROOT = tmp_path / "media"
    return settings.MEDIA_ROOT


@pytest.fixture
def access_token():
    """Factory returning a JWT access token string for a user."""

    from rest_framework_simplejwt.tokens import AccessToken

    def make(user) -> str:
        return str(AccessToken.for_user(user))

    return make
