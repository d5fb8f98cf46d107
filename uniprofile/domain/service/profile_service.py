"""Profile domain service."""

from datetime import datetime, timezone
from typing import Any, Callable

import logfire

from uniprofile.config import ProfileSettings
from uniprofile.domain.error import ExternalServiceError, RemoteError
from uniprofile.domain.model import Profile
from uniprofile.domain.repository import DocumentStore
from uniprofile.domain.value import ProfileField, UserId

from .base import Service
from .error_translator import ErrorTranslator

NOT_FOUND_CODE = "firestore/not-found"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ProfileService(Service):
    """Domain service for profile records.

    Records live in a single collection keyed by the identity uid. Inputs are
    expected to be validated and normalized already (see
    ``ProfileValidator``); this service owns timestamps and error
    translation.
    """

    def __init__(
        self,
        document_store: DocumentStore,
        translator: ErrorTranslator,
        settings: ProfileSettings,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize profile service.

        Args:
            document_store: Document store binding
            translator: Error translator for store codes
            settings: Profile settings (collection name)
            clock: Source of mutation timestamps
        """
        self.document_store = document_store
        self.translator = translator
        self.collection = settings.collection
        self.clock = clock

    async def create(self, uid: UserId, fields: dict[str, Any]) -> Profile:
        """Write a new profile record.

        Args:
            uid: Owner identity uid
            fields: Normalized name, email, university_title, graduation_year

        Returns:
            The created profile

        Raises:
            RemoteError: If the write fails
        """
        with logfire.span("profile_service.create", uid=uid):
            now = self.clock()
            profile = Profile(uid=uid, **fields, created_at=now, updated_at=now)
            try:
                await self.document_store.set(
                    self.collection, uid, profile.to_document()
                )
            except ExternalServiceError as e:
                raise self._remote_error("create", e) from e
            logfire.info("Profile created", uid=uid, email=profile.email)
            return profile

    async def get(self, uid: UserId) -> Profile:
        """Fetch a profile record.

        Raises:
            NotFoundError: If no record exists for the uid
            RemoteError: If the read fails
        """
        with logfire.span("profile_service.get", uid=uid):
            try:
                document = await self.document_store.get(self.collection, uid)
            except ExternalServiceError as e:
                raise self._remote_error("get", e) from e
            if document is None:
                logfire.warn("Profile not found", uid=uid)
                raise self.translator.not_found("Profile", uid)
            profile = Profile.from_document(uid, document)
            logfire.info("Profile found", uid=uid, name=profile.name)
            return profile

    async def patch(self, uid: UserId, changes: dict[str, Any]) -> dict[str, Any]:
        """Apply a partial update and stamp ``updatedAt``.

        Args:
            uid: Owner identity uid
            changes: Normalized fields to overwrite

        Returns:
            The applied changes, including ``updated_at``

        Raises:
            NotFoundError: If no record exists for the uid
            RemoteError: If the write fails
        """
        with logfire.span("profile_service.patch", uid=uid, fields=sorted(changes)):
            updated_at = self.clock()
            partial = {**changes, ProfileField.UPDATED_AT.value: updated_at}
            try:
                await self.document_store.patch(self.collection, uid, partial)
            except ExternalServiceError as e:
                if e.code == NOT_FOUND_CODE:
                    logfire.warn("Profile not found for update", uid=uid)
                    raise self.translator.not_found("Profile", uid) from e
                raise self._remote_error("patch", e) from e
            logfire.info("Profile updated", uid=uid, fields=sorted(changes))
            return {**changes, "updated_at": updated_at}

    def _remote_error(self, operation: str, error: ExternalServiceError) -> RemoteError:
        logfire.warn(
            "Document store failure",
            operation=operation,
            code=error.code,
            error=str(error),
        )
        return RemoteError(
            error.code, self.translator.translate(error.code, error.provider_message)
        )
