"""Logout use case."""

import logfire

from uniprofile.domain.error import DomainError
from uniprofile.domain.service import AuthService
from uniprofile.domain.value import Failure, Result, Success


class LogoutUseCase:
    """Use case for signing out.

    Idempotent; failures are reported once and never retried.
    """

    def __init__(self, auth_service: AuthService) -> None:
        self.auth_service = auth_service

    async def execute(self) -> Result[None]:
        with logfire.span("logout"):
            try:
                await self.auth_service.sign_out()
            except DomainError as e:
                return Failure(e)
            return Success(None)
