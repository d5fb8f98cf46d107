"""Update profile use case."""

from typing import Any

import logfire
from pydantic import BaseModel, Field

from uniprofile.application.usecase.base import BaseUseCase
from uniprofile.domain.error import DomainError, ValidationError
from uniprofile.domain.service import ErrorTranslator, ProfileService, ProfileValidator
from uniprofile.domain.service.validation import REQUIRED
from uniprofile.domain.value import Failure, Result, Success, UserId


class UpdateProfileRequest(BaseModel):
    """Update profile request.

    Only keys present in ``changes`` are modified. Missing values count as
    empty.
    """

    uid: str | None = None
    changes: dict[str, Any] | None = Field(default_factory=dict)


class UpdateProfileUseCase(BaseUseCase):
    """Use case for partially updating a profile record.

    Name, university title and graduation year can be changed; email is tied
    to the identity and cannot be changed here.
    """

    def __init__(
        self,
        profile_service: ProfileService,
        validator: ProfileValidator,
        translator: ErrorTranslator,
    ) -> None:
        """Initialize update profile use case.

        Args:
            profile_service: Profile domain service
            validator: Profile field validator
            translator: Error translator for validation summaries
        """
        self.profile_service = profile_service
        self.validator = validator
        self.translator = translator

    async def execute(self, request: UpdateProfileRequest) -> Result[dict[str, Any]]:
        """Execute update profile flow.

        Steps:
        1. Validate each provided field independently
        2. Issue a single patch with the normalized fields and ``updatedAt``

        Returns:
            Success with the applied changes (including ``updated_at``), or
            Failure with a ValidationError, NotFoundError or RemoteError
        """
        uid = (request.uid or "").strip()
        if not uid:
            return Failure(self.translator.validation_error({"uid": REQUIRED}))

        try:
            changes = self.validator.changes(request.changes or {})
        except ValidationError as e:
            logfire.info("Profile update rejected", uid=uid, fields=e.fields)
            return Failure(self.translator.validation_error(e.field_errors))

        try:
            applied = await self.profile_service.patch(UserId(uid), changes)
        except DomainError as e:
            return Failure(e)
        return Success(applied)
