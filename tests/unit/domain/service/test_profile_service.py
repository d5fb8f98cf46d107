"""Unit tests for ProfileService."""

from dishka import AsyncContainer
import pytest

from uniprofile.config import ProfileSettings
from uniprofile.domain.error import NotFoundError, RemoteError
from uniprofile.domain.repository import DocumentStore
from uniprofile.domain.service import ErrorTranslator, ProfileService
from uniprofile.domain.value import UserId
from uniprofile.persistence.inmemory import InMemoryDocumentStore
from tests.conftest import FIXED_NOW
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()

FIELDS = {
    "name": "Ana",
    "email": "ana@uni.edu",
    "university_title": "Computer Science",
    "graduation_year": 2020,
}


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def service(store: InMemoryDocumentStore, translator: ErrorTranslator) -> ProfileService:
    return ProfileService(
        document_store=store,
        translator=translator,
        settings=ProfileSettings(),
        clock=lambda: FIXED_NOW,
    )


class TestProfileService:
    """Tests for ProfileService."""

    @pytest.mark.asyncio
    async def test_create_writes_record_with_timestamps(
        self, service: ProfileService, store: InMemoryDocumentStore
    ):
        profile = await service.create(UserId("uid-1"), FIELDS)

        assert profile.created_at == FIXED_NOW
        assert profile.updated_at == FIXED_NOW
        assert store.raw("users", "uid-1") == {
            **FIELDS,
            "createdAt": FIXED_NOW,
            "updatedAt": FIXED_NOW,
        }

    @pytest.mark.asyncio
    async def test_create_translates_store_failure(
        self, service: ProfileService, store: InMemoryDocumentStore
    ):
        store.fail_next("set", "firestore/permission-denied")

        with pytest.raises(RemoteError) as exc_info:
            await service.create(UserId("uid-1"), FIELDS)

        assert exc_info.value.code == "firestore/permission-denied"
        assert exc_info.value.message == "No tienes permiso para realizar esta acción"

    @pytest.mark.asyncio
    async def test_get_returns_back_filled_profile(
        self, service: ProfileService, store: InMemoryDocumentStore
    ):
        await store.set("users", "uid-1", {"name": "Ana", "specialty": "Math"})

        profile = await service.get(UserId("uid-1"))

        assert profile.name == "Ana"
        assert profile.email == ""
        assert profile.graduation_year is None

    @pytest.mark.asyncio
    async def test_get_missing_record(self, service: ProfileService):
        with pytest.raises(NotFoundError):
            await service.get(UserId("uid-404"))

    @pytest.mark.asyncio
    async def test_get_translates_unavailable(
        self, service: ProfileService, store: InMemoryDocumentStore
    ):
        store.fail_next("get", "firestore/unavailable")

        with pytest.raises(RemoteError) as exc_info:
            await service.get(UserId("uid-1"))

        assert exc_info.value.message == "Servicio no disponible. Inténtalo más tarde"

    @pytest.mark.asyncio
    async def test_patch_only_touches_given_fields(
        self, service: ProfileService, store: InMemoryDocumentStore
    ):
        await store.set("users", "uid-1", {**FIELDS, "createdAt": "old"})

        applied = await service.patch(UserId("uid-1"), {"graduation_year": 2021})

        assert applied == {"graduation_year": 2021, "updated_at": FIXED_NOW}
        record = store.raw("users", "uid-1")
        assert record["graduation_year"] == 2021
        assert record["updatedAt"] == FIXED_NOW
        assert record["name"] == "Ana"
        assert record["createdAt"] == "old"

    @pytest.mark.asyncio
    async def test_patch_missing_record(self, service: ProfileService):
        with pytest.raises(NotFoundError):
            await service.patch(UserId("uid-404"), {"name": "Eva"})

    @pytest.mark.asyncio
    async def test_container_wires_in_memory_store(self, unit_env: AsyncContainer):
        service = await unit_env.get(ProfileService)
        store = await unit_env.get(DocumentStore)

        await service.create(UserId("uid-1"), FIELDS)

        assert isinstance(store, InMemoryDocumentStore)
        assert store.raw("users", "uid-1")["email"] == "ana@uni.edu"
