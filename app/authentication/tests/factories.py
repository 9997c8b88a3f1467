"""
Factory Boy factories for authentication models.

Usage:
    from authentication.tests.factories import UserFactory

    # Create a user with default values
    user = UserFactory()

    # A user with an uploaded avatar
    user = UserFactory(avatar="3f1c.png")
"""

import factory

from authentication.models import DEFAULT_AVATAR, User


class UserFactory(factory.django.DjangoModelFactory):
    """
    Factory for User model.

    Creates active users on the default avatar.

    Examples:
        # Basic user
        user = UserFactory()

        # Named user
        user = UserFactory(name="Ada Lovelace")

        # Inactive user (deactivated)
        user = UserFactory(is_active=False)
    """

    class Meta:
        model = User
        skip_postgeneration_save = True

    email = factory.Sequence(lambda n: f"user{n}@example.com")
    name = factory.Faker("name")
    avatar = DEFAULT_AVATAR
    is_active = True
    is_staff = False

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        """Override create to use UserManager.create_user()."""
        password = kwargs.pop("password", "TestPass123!")
        return model_class.objects.create_user(
            email=kwargs.pop("email"), password=password, **kwargs
        )
