"""Register use case."""

from typing import Any

import logfire
from pydantic import BaseModel, Field

from uniprofile.application.usecase.base import BaseUseCase
from uniprofile.domain.error import DomainError, RemoteError, ValidationError
from uniprofile.domain.model import Identity, Profile
from uniprofile.domain.service import (
    AuthService,
    ErrorTranslator,
    ProfileService,
    ProfileValidator,
)
from uniprofile.domain.value import Failure, Result, Success


class RegisterRequest(BaseModel):
    """Registration form submission.

    ``profile`` holds the raw form values (name, email, university_title,
    graduation_year); they are validated and normalized by the use case.
    Missing values count as empty.
    """

    profile: dict[str, Any] | None = Field(default_factory=dict)
    password: str | None = None


class RegisterUseCase(BaseUseCase):
    """Use case for creating an identity together with its profile record.

    The two writes form one unit: if the profile record cannot be written,
    the freshly created identity is deleted again.
    """

    def __init__(
        self,
        auth_service: AuthService,
        profile_service: ProfileService,
        validator: ProfileValidator,
        translator: ErrorTranslator,
    ) -> None:
        """Initialize register use case.

        Args:
            auth_service: Authentication domain service
            profile_service: Profile domain service
            validator: Profile field validator
            translator: Error translator for validation summaries
        """
        self.auth_service = auth_service
        self.profile_service = profile_service
        self.validator = validator
        self.translator = translator

    async def execute(self, request: RegisterRequest) -> Result[Profile]:
        """Execute registration flow.

        Steps:
        1. Validate and normalize every field (no remote call on failure)
        2. Create the identity
        3. Write the profile record keyed by the new uid
        4. On write failure, delete the identity and report the write error

        Args:
            request: Raw registration values

        Returns:
            Success with the created profile, or Failure with a
            ValidationError or RemoteError
        """
        with logfire.span("register"):
            try:
                fields = self.validator.registration(
                    request.profile or {}, request.password
                )
            except ValidationError as e:
                logfire.info("Registration rejected", fields=e.fields)
                return Failure(self.translator.validation_error(e.field_errors))

            try:
                identity = await self.auth_service.sign_up(
                    fields["email"], request.password
                )
            except DomainError as e:
                return Failure(e)

            try:
                profile = await self.profile_service.create(identity.uid, fields)
            except RemoteError as e:
                await self._rollback(identity)
                return Failure(e)

            logfire.info("Registration completed", uid=identity.uid)
            return Success(profile)

    async def _rollback(self, identity: Identity) -> None:
        """Delete an identity whose profile could not be written.

        Best-effort: a failed deletion is logged and swallowed so the caller
        still sees the original write failure.
        """
        logfire.warn("Rolling back identity", uid=identity.uid)
        try:
            await self.auth_service.delete_current_identity()
        except DomainError as e:
            logfire.error(
                "Identity rollback failed; identity left without profile",
                uid=identity.uid,
                error=str(e),
            )
