"""Unit tests for LoginUseCase and LogoutUseCase."""

from dishka import AsyncContainer
import pytest
import pytest_asyncio

from uniprofile.adapter.firebase import MockFirebaseAuthClient
from uniprofile.application.usecase.auth import (
    LoginRequest,
    LoginUseCase,
    LogoutUseCase,
)
from uniprofile.domain.error import RemoteError, ValidationError
from uniprofile.domain.service import IdentityProvider
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


@pytest_asyncio.fixture
async def provider(unit_env: AsyncContainer) -> MockFirebaseAuthClient:
    provider = await unit_env.get(IdentityProvider)
    await provider.sign_up("ana@uni.edu", "secret1")
    await provider.sign_out()
    provider.calls.clear()
    return provider


class TestLoginUseCase:
    """Tests for LoginUseCase."""

    @pytest.mark.asyncio
    async def test_login_normalizes_email(
        self, unit_env: AsyncContainer, provider: MockFirebaseAuthClient
    ):
        use_case = await unit_env.get(LoginUseCase)

        result = await use_case.execute(
            LoginRequest(email="  Ana@Uni.EDU ", password="secret1")
        )

        assert result.ok
        assert result.value.email == "ana@uni.edu"
        assert provider.current_identity == result.value

    @pytest.mark.asyncio
    async def test_missing_credentials_make_no_remote_call(
        self, unit_env: AsyncContainer, provider: MockFirebaseAuthClient
    ):
        use_case = await unit_env.get(LoginUseCase)

        result = await use_case.execute(LoginRequest(email=" ", password=""))

        assert not result.ok
        assert isinstance(result.error, ValidationError)
        assert result.error.fields == ["email", "password"]
        assert result.message == "Campos requeridos faltantes: email, password"
        assert provider.calls == []

    @pytest.mark.asyncio
    async def test_wrong_password(
        self, unit_env: AsyncContainer, provider: MockFirebaseAuthClient
    ):
        use_case = await unit_env.get(LoginUseCase)

        result = await use_case.execute(
            LoginRequest(email="ana@uni.edu", password="secret2")
        )

        assert not result.ok
        assert isinstance(result.error, RemoteError)
        assert result.message == "Contraseña incorrecta"

    @pytest.mark.asyncio
    async def test_unknown_user(
        self, unit_env: AsyncContainer, provider: MockFirebaseAuthClient
    ):
        use_case = await unit_env.get(LoginUseCase)

        result = await use_case.execute(
            LoginRequest(email="eva@uni.edu", password="secret1")
        )

        assert result.message == "Usuario no encontrado"


class TestLogoutUseCase:
    """Tests for LogoutUseCase."""

    @pytest.mark.asyncio
    async def test_logout_clears_identity(
        self, unit_env: AsyncContainer, provider: MockFirebaseAuthClient
    ):
        await provider.sign_in("ana@uni.edu", "secret1")
        use_case = await unit_env.get(LogoutUseCase)

        result = await use_case.execute()

        assert result.ok
        assert result.value is None
        assert provider.current_identity is None

    @pytest.mark.asyncio
    async def test_logout_when_signed_out(
        self, unit_env: AsyncContainer, provider: MockFirebaseAuthClient
    ):
        use_case = await unit_env.get(LogoutUseCase)

        assert (await use_case.execute()).ok

    @pytest.mark.asyncio
    async def test_logout_failure_is_reported(
        self, unit_env: AsyncContainer, provider: MockFirebaseAuthClient
    ):
        provider.fail_next("sign_out", "auth/network-request-failed")
        use_case = await unit_env.get(LogoutUseCase)

        result = await use_case.execute()

        assert not result.ok
        assert result.message == "Error de conexión. Verifica tu internet"
