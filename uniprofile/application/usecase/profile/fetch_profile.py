"""Fetch profile use case."""

from pydantic import BaseModel

from uniprofile.application.usecase.base import BaseUseCase
from uniprofile.domain.error import DomainError
from uniprofile.domain.model import Profile
from uniprofile.domain.service import ErrorTranslator, ProfileService
from uniprofile.domain.service.validation import REQUIRED
from uniprofile.domain.value import Failure, Result, Success, UserId


class FetchProfileRequest(BaseModel):
    """Fetch profile request."""

    uid: str | None = None


class FetchProfileUseCase(BaseUseCase):
    """Use case for reading the profile record of an identity."""

    def __init__(
        self, profile_service: ProfileService, translator: ErrorTranslator
    ) -> None:
        """Initialize fetch profile use case.

        Args:
            profile_service: Profile domain service
            translator: Error translator for validation summaries
        """
        self.profile_service = profile_service
        self.translator = translator

    async def execute(self, request: FetchProfileRequest) -> Result[Profile]:
        """Fetch a profile.

        Returns:
            Success with the back-filled profile, or Failure with a
            ValidationError (empty uid), NotFoundError or RemoteError
        """
        uid = (request.uid or "").strip()
        if not uid:
            return Failure(self.translator.validation_error({"uid": REQUIRED}))

        try:
            profile = await self.profile_service.get(UserId(uid))
        except DomainError as e:
            return Failure(e)
        return Success(profile)
