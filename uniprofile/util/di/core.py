"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from uniprofile.config import (
    FirebaseSettings,
    NavigationSettings,
    ProfileSettings,
    SessionSettings,
    Settings,
)
from uniprofile.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide
    def provide_firebase_settings(self, settings: Settings) -> FirebaseSettings:
        return settings.firebase

    @provide
    def provide_navigation_settings(self, settings: Settings) -> NavigationSettings:
        return settings.navigation

    @provide
    def provide_session_settings(self, settings: Settings) -> SessionSettings:
        return settings.session

    @provide
    def provide_profile_settings(self, settings: Settings) -> ProfileSettings:
        return settings.profile
