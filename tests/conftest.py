"""Test configuration and fixtures."""

from datetime import date, datetime, timezone

import pytest

from uniprofile.config import ProfileSettings
from uniprofile.domain.model import Profile
from uniprofile.domain.service import ErrorTranslator, ProfileValidator
from uniprofile.domain.value import Success, UserId

FIXED_NOW = datetime(2025, 3, 14, 9, 30, tzinfo=timezone.utc)


def make_profile(uid: str = "uid-ana", **overrides) -> Profile:
    """Helper to build a complete profile for tests."""
    fields = {
        "name": "Ana",
        "email": "ana@uni.edu",
        "university_title": "Computer Science",
        "graduation_year": 2020,
        "created_at": FIXED_NOW,
        "updated_at": FIXED_NOW,
    }
    fields.update(overrides)
    return Profile(uid=UserId(uid), **fields)


def registration_fields(**overrides) -> dict:
    """Raw registration form values."""
    fields = {
        "name": "Ana",
        "email": "ana@uni.edu",
        "university_title": "Computer Science",
        "graduation_year": "2020",
    }
    fields.update(overrides)
    return fields


@pytest.fixture
def translator() -> ErrorTranslator:
    return ErrorTranslator(locale="es")


@pytest.fixture
def profile_settings() -> ProfileSettings:
    return ProfileSettings()


@pytest.fixture
def validator(profile_settings: ProfileSettings) -> ProfileValidator:
    """Validator pinned to 2025, so the latest accepted year is 2035."""
    return ProfileValidator(settings=profile_settings, today=lambda: date(2025, 6, 1))


class FakeSessionStore:
    """Session store stand-in driven by hand."""

    def __init__(self) -> None:
        self.listeners = []
        self.refreshed = 0

    def subscribe(self, listener):
        self.listeners.append(listener)
        return lambda: self.listeners.remove(listener)

    def report(self, snapshot) -> None:
        for listener in list(self.listeners):
            listener(snapshot)

    async def refresh_profile(self):
        self.refreshed += 1
        return Success(make_profile())
