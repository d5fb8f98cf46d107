"""Persistence infrastructure providers."""

from dishka import Scope, provide

from uniprofile.config import FirebaseSettings
from uniprofile.domain.repository import DocumentStore
from uniprofile.domain.service import IdentityProvider
from uniprofile.persistence.firestore import FirestoreDocumentStore
from uniprofile.util.di.base import ProviderBase
from uniprofile.util.error import ConfigurationError


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"
    # Firestore requests carry the signed-in identity's token
    __depends_on__ = {"firebase"}


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using Firestore."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_document_store(
        self, settings: FirebaseSettings, identity_provider: IdentityProvider
    ) -> DocumentStore:
        """Provide Firestore document store.

        Raises:
            ConfigurationError: If no project id is configured
        """
        if not settings.project_id or settings.project_id == "CHANGE_ME":
            raise ConfigurationError("firebase.project_id", "set FIREBASE__PROJECT_ID")

        return FirestoreDocumentStore(
            documents_url=settings.documents_url,
            token_source=identity_provider.get_token,
            timeout=settings.timeout,
        )
