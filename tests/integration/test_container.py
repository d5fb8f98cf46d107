"""Integration tests for dependency injection wiring."""

from dishka import AsyncContainer
import pytest

from uniprofile.adapter.firebase import MockFirebaseAuthClient, RealFirebaseAuthClient
from uniprofile.application.data_access import ProfileDataAccess
from uniprofile.application.navigation import NavigationStateMachine
from uniprofile.application.session import SessionStore
from uniprofile.config import Settings
from uniprofile.domain.repository import DocumentStore
from uniprofile.domain.service import IdentityProvider
from uniprofile.domain.value import RetryPolicy
from uniprofile.persistence.firestore import FirestoreDocumentStore
from uniprofile.util.error import ConfigurationError
from tests.di import build_test_container
from tests.harness import create_env_fixture

unit_env = create_env_fixture()
firebase_env = create_env_fixture(
    unmock={"firebase", "persistence"},
    env={"FIREBASE__API_KEY": "api-key-1", "FIREBASE__PROJECT_ID": "uni-app"},
)
unconfigured_env = create_env_fixture(
    unmock={"firebase"}, env={"FIREBASE__API_KEY": "CHANGE_ME"}
)


class TestContainer:
    """Tests for the DI container."""

    @pytest.mark.asyncio
    async def test_settings_from_environment(self, unit_env: AsyncContainer):
        settings = await unit_env.get(Settings)

        assert settings.environment == "test"
        assert settings.navigation.splash_min_seconds == 0.01

    @pytest.mark.asyncio
    async def test_long_lived_objects_are_shared(self, unit_env: AsyncContainer):
        machine = await unit_env.get(NavigationStateMachine)
        session = await unit_env.get(SessionStore)
        data_access = await unit_env.get(ProfileDataAccess)

        assert machine.session_store is session
        assert session.data_access is data_access
        assert session.identity_provider is await unit_env.get(IdentityProvider)

    @pytest.mark.asyncio
    async def test_retry_policy_from_settings(self, unit_env: AsyncContainer):
        policy = await unit_env.get(RetryPolicy)

        assert policy == RetryPolicy(max_attempts=3, delay=0)

    @pytest.mark.asyncio
    async def test_mock_components(self, unit_env: AsyncContainer):
        assert isinstance(await unit_env.get(IdentityProvider), MockFirebaseAuthClient)

    @pytest.mark.asyncio
    async def test_real_components(self, firebase_env: AsyncContainer):
        provider = await firebase_env.get(IdentityProvider)
        store = await firebase_env.get(DocumentStore)

        assert isinstance(provider, RealFirebaseAuthClient)
        assert provider.api_key == "api-key-1"
        assert isinstance(store, FirestoreDocumentStore)
        assert store.documents_url.endswith(
            "/projects/uni-app/databases/(default)/documents"
        )

    @pytest.mark.asyncio
    async def test_missing_api_key(self, unconfigured_env: AsyncContainer):
        with pytest.raises(ConfigurationError):
            await unconfigured_env.get(IdentityProvider)

    def test_persistence_requires_firebase(self):
        with pytest.raises(ValueError, match="requires"):
            build_test_container(unmock={"persistence"})

    def test_unknown_component(self):
        with pytest.raises(ValueError, match="Unknown components"):
            build_test_container(unmock={"storage"})
