"""
Stormtrooper Test Data Factories
================================

Factory classes for generating test data using factory_boy.

Usage:
    from tests.factories import ExternalAuthRequestFactory, UserFactory

    # Build a Facebook sign in payload
    external = ExternalAuthRequestFactory()

    # Build an unsaved user
    user = UserFactory.build()

    # Build a request body for the HTTP API
    body = ExternalAuthRequestFactory.payload()

Dependencies:
    pip install factory-boy faker
"""

import string

import factory
from faker import Faker

from stormtrooper.models import User
from stormtrooper.schemas.auth import ExternalAuthRequest
from stormtrooper.schemas.stream import StreamCreate

# Initialize Faker with consistent seed for reproducibility
fake = Faker()
Faker.seed(42)


def _user_id() -> str:
    return fake.pystr_format("??????????", letters=string.ascii_letters + string.digits)


# =============================================================================
# User Factory
# =============================================================================

class UserFactory(factory.Factory):
    """
    Factory for unsaved User model instances.

    Examples:
        # Anonymous device user
        user = UserFactory()

        # User without a push token yet
        user = UserFactory(device_token=None)
    """

    class Meta:
        model = User

    id = factory.LazyFunction(_user_id)
    device_token = factory.LazyFunction(lambda: fake.hexify("^" * 64, upper=True))


# =============================================================================
# External Account Factory
# =============================================================================

class ExternalAuthRequestFactory(factory.Factory):
    """
    Factory for Facebook sign in payloads.

    Examples:
        # Facebook account without a refresh token
        external = ExternalAuthRequestFactory()

        # With a refresh token
        external = ExternalAuthRequestFactory(with_refresh=True)
    """

    class Meta:
        model = ExternalAuthRequest

    provider = "facebook"
    id = factory.LazyFunction(lambda: fake.numerify("1##############"))
    access_token = factory.LazyFunction(lambda: "EAAB" + fake.pystr(min_chars=60, max_chars=60))
    refresh_token = None

    class Params:
        with_refresh = factory.Trait(
            refresh_token=factory.LazyFunction(lambda: fake.sha256()),
        )

    @classmethod
    def payload(cls, **kwargs) -> dict:
        """Build a JSON request body."""
        return cls.build(**kwargs).model_dump()


# =============================================================================
# Stream Factory
# =============================================================================

class StreamCreateFactory(factory.Factory):
    """
    Factory for stream creation requests.

    The ``payload`` helper produces the camelCase body the mobile client sends.
    """

    class Meta:
        model = StreamCreate

    stream_path = factory.LazyFunction(lambda: f"streams.{fake.slug().replace('-', '_')}")
    stream_name = factory.LazyFunction(lambda: fake.catch_phrase())
    stream_description = factory.LazyFunction(lambda: fake.sentence())

    @classmethod
    def payload(cls, **kwargs) -> dict:
        """Build a camelCase JSON request body."""
        return cls.build(**kwargs).model_dump(by_alias=True)
