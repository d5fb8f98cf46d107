"""Authentication domain service."""

from abc import ABC, abstractmethod
from typing import Callable

import logfire

from uniprofile.domain.error import ExternalServiceError, RemoteError
from uniprofile.domain.model import Identity

from .base import Service
from .error_translator import ErrorTranslator

StateListener = Callable[[Identity | None], None]
Unsubscribe = Callable[[], None]


class IdentityProvider(ABC):
    """Identity provider interface.

    The provider owns credentials, token issuance and session persistence.
    Failures are raised as ``IdentityProviderError`` carrying an ``auth/*``
    code.
    """

    @abstractmethod
    async def sign_up(self, email: str, password: str) -> Identity:
        """Create an identity and sign it in."""
        pass

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> Identity:
        """Sign in with email and password."""
        pass

    @abstractmethod
    async def sign_out(self) -> None:
        """Sign out the current identity. No-op when signed out."""
        pass

    @abstractmethod
    async def delete_current_identity(self) -> None:
        """Delete the signed-in identity and sign it out."""
        pass

    @abstractmethod
    async def get_token(self) -> str:
        """Return a valid bearer token for the signed-in identity."""
        pass

    @abstractmethod
    def on_state_change(self, listener: StateListener) -> Unsubscribe:
        """Subscribe to identity changes.

        The listener is first called with the current state shortly after
        subscribing, then on every sign-in, sign-out or deletion.

        Returns:
            Callable that removes the listener
        """
        pass

    @property
    @abstractmethod
    def current_identity(self) -> Identity | None:
        """Signed-in identity, if any."""
        pass


class AuthService(Service):
    """Domain service for authentication operations.

    Wraps the identity provider so that callers only ever see translated
    ``RemoteError``s.
    """

    def __init__(
        self, identity_provider: IdentityProvider, translator: ErrorTranslator
    ) -> None:
        """Initialize auth service.

        Args:
            identity_provider: Identity provider binding
            translator: Error translator for provider codes
        """
        self.identity_provider = identity_provider
        self.translator = translator

    @property
    def current_identity(self) -> Identity | None:
        return self.identity_provider.current_identity

    async def sign_up(self, email: str, password: str) -> Identity:
        """Create a new identity.

        Raises:
            RemoteError: If the provider rejects the sign-up
        """
        with logfire.span("auth_service.sign_up", email=email):
            try:
                identity = await self.identity_provider.sign_up(email, password)
            except ExternalServiceError as e:
                raise self._remote_error("sign_up", e) from e
            logfire.info("Identity created", uid=identity.uid)
            return identity

    async def sign_in(self, email: str, password: str) -> Identity:
        """Sign in an existing identity.

        Raises:
            RemoteError: If the provider rejects the credentials
        """
        with logfire.span("auth_service.sign_in", email=email):
            try:
                identity = await self.identity_provider.sign_in(email, password)
            except ExternalServiceError as e:
                raise self._remote_error("sign_in", e) from e
            logfire.info("Identity signed in", uid=identity.uid)
            return identity

    async def sign_out(self) -> None:
        """Sign out. Idempotent.

        Raises:
            RemoteError: If the provider fails to sign out
        """
        with logfire.span("auth_service.sign_out"):
            try:
                await self.identity_provider.sign_out()
            except ExternalServiceError as e:
                raise self._remote_error("sign_out", e) from e
            logfire.info("Identity signed out")

    async def delete_current_identity(self) -> None:
        """Delete the signed-in identity.

        Raises:
            RemoteError: If the provider fails to delete it
        """
        with logfire.span("auth_service.delete_current_identity"):
            try:
                await self.identity_provider.delete_current_identity()
            except ExternalServiceError as e:
                raise self._remote_error("delete_current_identity", e) from e
            logfire.info("Identity deleted")

    def _remote_error(self, operation: str, error: ExternalServiceError) -> RemoteError:
        logfire.warn(
            "Identity provider failure",
            operation=operation,
            code=error.code,
            error=str(error),
        )
        return RemoteError(
            error.code, self.translator.translate(error.code, error.provider_message)
        )
