"""Tests for settings validation."""

import pytest
from pydantic import ValidationError

from stormtrooper.config import Settings

pytestmark = pytest.mark.unit


class TestSettings:

    def test_environment_normalized(self):
        assert Settings(environment="Production").is_production

    def test_invalid_environment(self):
        with pytest.raises(ValidationError):
            Settings(environment="moon-base")

    def test_access_token_key_must_be_32_bytes(self):
        with pytest.raises(ValidationError):
            Settings(access_token_key="abcd")

    def test_access_token_key_must_be_hex(self):
        with pytest.raises(ValidationError):
            Settings(access_token_key="zz" * 32)

    def test_cors_origins_from_string(self):
        settings = Settings(cors_origins="http://a.test, http://b.test")
        assert settings.cors_origins == ["http://a.test", "http://b.test"]

