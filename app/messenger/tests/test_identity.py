"""
Tests for IdentityContext.
"""

from django.contrib.auth.models import AnonymousUser

from messenger.identity import IdentityContext


class TestIdentityContext:
    """Tests for building and comparing identity contexts."""

    def test_from_authenticated_user(self, alice):
        identity = IdentityContext.from_user(alice)

        assert identity.user_id == alice.id
        assert identity.is_authenticated is True
        assert identity.name == "Alice"

    def test_name_falls_back_to_username(self, db):
        from authentication.tests.factories import UserFactory

        user = UserFactory(name="", email="nameless@example.com")

        assert IdentityContext.from_user(user).name == "nameless@example.com"

    def test_from_anonymous_user(self):
        identity = IdentityContext.from_user(AnonymousUser())

        assert identity == IdentityContext.anonymous()
        assert identity.is_authenticated is False

    def test_from_none(self):
        assert IdentityContext.from_user(None).is_authenticated is False

    def test_is_user_compares_ids_as_strings(self):
        identity = IdentityContext(user_id=5, is_authenticated=True)

        assert identity.is_user(5) is True
        assert identity.is_user("5") is True
        assert identity.is_user(6) is False

    def test_anonymous_is_nobody(self):
        assert IdentityContext.anonymous().is_user(None) is False
