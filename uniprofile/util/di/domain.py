"""Domain layer DI providers."""

from dishka import Scope, provide

from uniprofile.config import ProfileSettings, Settings
from uniprofile.domain.repository import DocumentStore
from uniprofile.domain.service import (
    AuthService,
    ErrorTranslator,
    IdentityProvider,
    ProfileService,
    ProfileValidator,
)
from uniprofile.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are APP-scoped: the identity provider they wrap holds
    the signed-in session for the lifetime of the app.
    """

    scope = Scope.APP

    @provide
    def get_error_translator(self, settings: Settings) -> ErrorTranslator:
        """Provide error translator for the configured locale."""
        return ErrorTranslator(locale=settings.locale)

    @provide
    def get_profile_validator(self, profile_settings: ProfileSettings) -> ProfileValidator:
        return ProfileValidator(settings=profile_settings)

    @provide
    def get_auth_service(
        self, identity_provider: IdentityProvider, translator: ErrorTranslator
    ) -> AuthService:
        """Provide authentication domain service."""
        return AuthService(identity_provider=identity_provider, translator=translator)

    @provide
    def get_profile_service(
        self,
        document_store: DocumentStore,
        translator: ErrorTranslator,
        profile_settings: ProfileSettings,
    ) -> ProfileService:
        """Provide profile domain service."""
        return ProfileService(
            document_store=document_store,
            translator=translator,
            settings=profile_settings,
        )
