"""Firebase infrastructure providers."""

from dishka import Scope, provide

from uniprofile.adapter.firebase import RealFirebaseAuthClient
from uniprofile.config import FirebaseSettings
from uniprofile.domain.service import IdentityProvider
from uniprofile.util.di.base import ProviderBase
from uniprofile.util.error import ConfigurationError
from uniprofile.util.observability import instrument_httpx


class FirebaseProvider(ProviderBase):
    """Firebase Authentication component base."""

    __mock_component__ = "firebase"


class ProdFirebaseProvider(FirebaseProvider):
    """Production Firebase provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_identity_provider(self, settings: FirebaseSettings) -> IdentityProvider:
        """Provide the Identity Toolkit client.

        One instance per app: it holds the signed-in identity and its tokens.

        Raises:
            ConfigurationError: If no API key is configured
        """
        if not settings.api_key or settings.api_key == "CHANGE_ME":
            raise ConfigurationError("firebase.api_key", "set FIREBASE__API_KEY")

        instrument_httpx()
        return RealFirebaseAuthClient(
            api_key=settings.api_key,
            identity_toolkit_url=settings.identity_toolkit_url,
            secure_token_url=settings.secure_token_url,
            timeout=settings.timeout,
        )
