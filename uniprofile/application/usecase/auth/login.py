"""Login use case."""

import logfire
from pydantic import BaseModel

from uniprofile.application.usecase.base import BaseUseCase
from uniprofile.domain.error import DomainError
from uniprofile.domain.model import Identity
from uniprofile.domain.service import AuthService, ErrorTranslator
from uniprofile.domain.service.validation import REQUIRED
from uniprofile.domain.value import Failure, Result, Success


class LoginRequest(BaseModel):
    """Login form submission. Missing values count as empty."""

    email: str | None = None
    password: str | None = None


class LoginUseCase(BaseUseCase):
    """Use case for email/password sign-in."""

    def __init__(self, auth_service: AuthService, translator: ErrorTranslator) -> None:
        """Initialize login use case.

        Args:
            auth_service: Authentication domain service
            translator: Error translator for validation summaries
        """
        self.auth_service = auth_service
        self.translator = translator

    async def execute(self, request: LoginRequest) -> Result[Identity]:
        """Execute login flow.

        Args:
            request: Email and password

        Returns:
            Success with the signed-in identity, or Failure with a
            ValidationError (missing credentials) or RemoteError
        """
        email = (request.email or "").strip().lower()
        password = request.password or ""
        errors = {}
        if not email:
            errors["email"] = REQUIRED
        if not password:
            errors["password"] = REQUIRED
        if errors:
            return Failure(self.translator.validation_error(errors))

        with logfire.span("login", email=email):
            try:
                identity = await self.auth_service.sign_in(email, password)
            except DomainError as e:
                return Failure(e)
            return Success(identity)
