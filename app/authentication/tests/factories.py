"""
Factory Boy factories for authentication models.

Provides realistic test data generation for:
- User: Local mirror of an identity-provider account

Profile rows are created by the post_save signal, so there is no
ProfileFactory; use the profile_data hook to fill profile fields.

Usage:
    from authentication.tests.factories import UserFactory

    # Create a user with default values
    user = UserFactory()

    # Create a user with a named profile
    user = UserFactory(profile_data={"name": "Ann", "username": "ann"})

    # Admin panel user
    user = UserFactory(roles=["admin"])
"""

import factory

from authentication.models import User


class UserFactory(factory.django.DjangoModelFactory):
    """
    Factory for User model.

    Creates active users keyed by a sequential provider subject id.

    Examples:
        # Basic user
        user = UserFactory()

        # Staff user
        user = UserFactory(is_staff=True)

        # Inactive user (deactivated)
        user = UserFactory(is_active=False)
    """

    class Meta:
        model = User
        skip_postgeneration_save = True

    auth_user_id = factory.Sequence(lambda n: f"sub-{n:04d}")
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    is_active = True
    is_staff = False

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        """Override create to use UserManager.create_user()."""
        return model_class.objects.create_user(
            auth_user_id=kwargs.pop("auth_user_id"), **kwargs
        )

    @factory.post_generation
    def profile_data(obj, create, extracted, **kwargs):
        """Write profile fields onto the signal-created profile."""
        if not create:
            return
        fields = dict(extracted or {}, **kwargs)
        if not fields:
            return
        profile = obj.profile
        for name, value in fields.items():
            setattr(profile, name, value)
        profile.save()
