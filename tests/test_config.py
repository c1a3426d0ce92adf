"""Tests for settings validation."""

import pydantic
import pytest

from eatmefirst.config import Settings


def test_sqlite_rejected_in_production():
    with pytest.raises(pydantic.ValidationError):
        Settings(environment="production", database_url="sqlite:///./eatmefirst.db")


def test_production_with_server_database():
    settings = Settings(environment="production", database_url="postgresql://db/eatmefirst")

    assert settings.is_production
    assert not settings.is_development


def test_critical_days_must_not_exceed_warning_days():
    with pytest.raises(pydantic.ValidationError):
        Settings(critical_days=8, warning_days=7)
