"""Unit tests for AuthService."""

from dishka import AsyncContainer
import pytest

from uniprofile.adapter.firebase import MockFirebaseAuthClient
from uniprofile.domain.error import RemoteError
from uniprofile.domain.service import AuthService, IdentityProvider
from tests.harness import create_env_fixture

# Unit test fixtures
unit_env = create_env_fixture()
english_env = create_env_fixture(env={"LOCALE": "en"})


class TestAuthService:
    """Tests for AuthService."""

    @pytest.mark.asyncio
    async def test_sign_up_returns_identity(self, unit_env: AsyncContainer):
        auth_service = await unit_env.get(AuthService)

        identity = await auth_service.sign_up("ana@uni.edu", "secret1")

        assert identity.email == "ana@uni.edu"
        assert auth_service.current_identity == identity

    @pytest.mark.asyncio
    async def test_sign_up_duplicate_email_is_translated(
        self, unit_env: AsyncContainer
    ):
        auth_service = await unit_env.get(AuthService)
        await auth_service.sign_up("ana@uni.edu", "secret1")

        with pytest.raises(RemoteError) as exc_info:
            await auth_service.sign_up("ana@uni.edu", "secret1")

        assert exc_info.value.code == "auth/email-already-in-use"
        assert exc_info.value.message == "Este email ya está registrado"

    @pytest.mark.asyncio
    async def test_sign_in_wrong_password(self, unit_env: AsyncContainer):
        auth_service = await unit_env.get(AuthService)
        await auth_service.sign_up("ana@uni.edu", "secret1")
        await auth_service.sign_out()

        with pytest.raises(RemoteError) as exc_info:
            await auth_service.sign_in("ana@uni.edu", "wrong-one")

        assert exc_info.value.message == "Contraseña incorrecta"

    @pytest.mark.asyncio
    async def test_sign_out_is_idempotent(self, unit_env: AsyncContainer):
        auth_service = await unit_env.get(AuthService)

        await auth_service.sign_out()
        await auth_service.sign_out()

        assert auth_service.current_identity is None

    @pytest.mark.asyncio
    async def test_delete_without_identity(self, unit_env: AsyncContainer):
        auth_service = await unit_env.get(AuthService)

        with pytest.raises(RemoteError) as exc_info:
            await auth_service.delete_current_identity()

        assert exc_info.value.code == "auth/no-current-user"

    @pytest.mark.asyncio
    async def test_network_failure_in_english(self, english_env: AsyncContainer):
        auth_service = await english_env.get(AuthService)
        provider = await english_env.get(IdentityProvider)
        assert isinstance(provider, MockFirebaseAuthClient)
        provider.fail_next("sign_in", "auth/network-request-failed")

        with pytest.raises(RemoteError) as exc_info:
            await auth_service.sign_in("ana@uni.edu", "secret1")

        assert exc_info.value.message == "Connection error. Check your internet"
