"""Tests for application settings."""

import pytest
from pydantic import ValidationError

from src.config import Settings

SECRET = "config-test-secret-0123456789"


def test_development_is_default():
    """Settings default to the development environment."""
    settings = Settings(jwt_secret=SECRET)
    assert settings.is_development
    assert not settings.is_production


def test_production_rejects_localhost_database():
    """Production must not point at a local database."""
    with pytest.raises(ValidationError):
        Settings(
            jwt_secret=SECRET,
            environment="production",
            database_url="postgresql://u:p@localhost:5432/task_manager",
        )


def test_production_rejects_weak_bcrypt_rounds():
    """Production requires a realistic bcrypt cost."""
    with pytest.raises(ValidationError):
        Settings(
            jwt_secret=SECRET,
            environment="production",
            database_url="postgresql://u:p@db:5432/task_manager",
            bcrypt_rounds=4,
        )


def test_production_settings_accepted():
    """A well-formed production configuration validates."""
    settings = Settings(
        jwt_secret=SECRET,
        environment="production",
        database_url="postgresql://u:p@db:5432/task_manager",
        bcrypt_rounds=12,
    )
    assert settings.is_production


def test_short_secret_rejected():
    """The signing secret must be long enough."""
    with pytest.raises(ValidationError):
        Settings(jwt_secret="short")
