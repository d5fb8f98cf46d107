"""Firebase Authentication client.

Talks to the Identity Toolkit REST API for email/password accounts and keeps
the signed-in identity and its tokens in memory.
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import uuid4

import httpx
import jwt
import logfire

from uniprofile.adapter.error import IdentityProviderError
from uniprofile.domain.model import Identity
from uniprofile.domain.service.auth_service import (
    IdentityProvider,
    StateListener,
    Unsubscribe,
)
from uniprofile.domain.value import UserId

# Identity Toolkit error reasons -> client SDK style codes
AUTH_ERROR_CODES = {
    "EMAIL_EXISTS": "auth/email-already-in-use",
    "WEAK_PASSWORD": "auth/weak-password",
    "INVALID_EMAIL": "auth/invalid-email",
    "MISSING_EMAIL": "auth/invalid-email",
    "MISSING_PASSWORD": "auth/wrong-password",
    "EMAIL_NOT_FOUND": "auth/user-not-found",
    "USER_NOT_FOUND": "auth/user-not-found",
    "INVALID_PASSWORD": "auth/wrong-password",
    "INVALID_LOGIN_CREDENTIALS": "auth/invalid-credential",
    "TOO_MANY_ATTEMPTS_TRY_LATER": "auth/too-many-requests",
    "USER_DISABLED": "auth/user-disabled",
    "TOKEN_EXPIRED": "auth/requires-recent-login",
    "CREDENTIAL_TOO_OLD_LOGIN_AGAIN": "auth/requires-recent-login",
    "INVALID_ID_TOKEN": "auth/requires-recent-login",
    "INVALID_REFRESH_TOKEN": "auth/requires-recent-login",
}

NETWORK_ERROR_CODE = "auth/network-request-failed"
NO_CURRENT_USER_CODE = "auth/no-current-user"


def auth_error_from_response(response: httpx.Response) -> IdentityProviderError:
    """Build a provider error from an Identity Toolkit error response.

    Error bodies look like ``{"error": {"message": "WEAK_PASSWORD : Password
    should be at least 6 characters"}}``.
    """
    try:
        message = response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        message = response.text or f"HTTP {response.status_code}"

    reason, _, detail = str(message).partition(" : ")
    reason = reason.strip()
    code = AUTH_ERROR_CODES.get(reason, "auth/internal-error")
    return IdentityProviderError(code, detail.strip() or reason)


class FirebaseAuthClient(IdentityProvider):
    """Base class for Firebase Authentication clients.

    Holds the signed-in identity and notifies state listeners when it
    changes.
    """

    def __init__(self) -> None:
        self._identity: Identity | None = None
        self._listeners: list[StateListener] = []

    @property
    def current_identity(self) -> Identity | None:
        return self._identity

    def on_state_change(self, listener: StateListener) -> Unsubscribe:
        self._listeners.append(listener)
        # First report is asynchronous, like the client SDKs
        asyncio.get_running_loop().call_soon(self._report_current, listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _report_current(self, listener: StateListener) -> None:
        if listener in self._listeners:
            listener(self._identity)

    def _set_identity(self, identity: Identity | None) -> None:
        previous = self._identity
        self._identity = identity

        previous_uid = previous.uid if previous else None
        new_uid = identity.uid if identity else None
        if previous_uid == new_uid:
            return

        logfire.info(
            "Auth state changed",
            signed_in=identity is not None,
            uid=new_uid,
        )
        for listener in list(self._listeners):
            listener(identity)


@dataclass
class _Tokens:
    id_token: str
    refresh_token: str
    expires_at: datetime


def token_expiry(id_token: str, expires_in: Any) -> datetime:
    """Expiry of an ID token.

    Reads the ``exp`` claim without verifying the signature (the client
    never holds the signing keys); falls back to ``expires_in`` seconds.
    """
    try:
        claims = jwt.decode(id_token, options={"verify_signature": False})
        return datetime.fromtimestamp(int(claims["exp"]), tz=timezone.utc)
    except (jwt.InvalidTokenError, KeyError, TypeError, ValueError):
        seconds = int(expires_in) if str(expires_in).isdigit() else 3600
        return datetime.now(timezone.utc) + timedelta(seconds=seconds)


class RealFirebaseAuthClient(FirebaseAuthClient):
    """Firebase Authentication over the Identity Toolkit REST API."""

    def __init__(
        self,
        api_key: str,
        identity_toolkit_url: str,
        secure_token_url: str,
        timeout: float = 10.0,
        refresh_margin: timedelta = timedelta(minutes=1),
    ) -> None:
        """Initialize Firebase auth client.

        Args:
            api_key: Web API key of the Firebase project
            identity_toolkit_url: Identity Toolkit v1 base URL
            secure_token_url: Secure Token endpoint for refreshes
            timeout: Per-request timeout in seconds
            refresh_margin: Refresh the ID token this long before it expires
        """
        super().__init__()
        self.api_key = api_key
        self.identity_toolkit_url = identity_toolkit_url.rstrip("/")
        self.secure_token_url = secure_token_url
        self.timeout = timeout
        self.refresh_margin = refresh_margin
        self._tokens: _Tokens | None = None

    async def sign_up(self, email: str, password: str) -> Identity:
        data = await self._post(
            f"{self.identity_toolkit_url}/accounts:signUp",
            json={"email": email, "password": password, "returnSecureToken": True},
        )
        return self._establish(data)

    async def sign_in(self, email: str, password: str) -> Identity:
        data = await self._post(
            f"{self.identity_toolkit_url}/accounts:signInWithPassword",
            json={"email": email, "password": password, "returnSecureToken": True},
        )
        return self._establish(data)

    async def sign_out(self) -> None:
        self._tokens = None
        self._set_identity(None)

    async def delete_current_identity(self) -> None:
        id_token = await self.get_token()
        uid = self._identity.uid if self._identity else None
        await self._post(
            f"{self.identity_toolkit_url}/accounts:delete",
            json={"idToken": id_token},
        )
        logfire.info("Firebase account deleted", uid=uid)
        await self.sign_out()

    async def get_token(self) -> str:
        if self._tokens is None:
            raise IdentityProviderError(NO_CURRENT_USER_CODE, "No signed-in user")

        if datetime.now(timezone.utc) + self.refresh_margin >= self._tokens.expires_at:
            await self._refresh()
        return self._tokens.id_token

    async def _refresh(self) -> None:
        if self._tokens is None:
            raise IdentityProviderError(NO_CURRENT_USER_CODE, "No signed-in user")
        data = await self._post(
            self.secure_token_url,
            data={
                "grant_type": "refresh_token",
                "refresh_token": self._tokens.refresh_token,
            },
        )
        self._tokens = _Tokens(
            id_token=data["id_token"],
            refresh_token=data["refresh_token"],
            expires_at=token_expiry(data["id_token"], data.get("expires_in")),
        )
        logfire.info("Firebase ID token refreshed", uid=data.get("user_id"))

    def _establish(self, data: dict[str, Any]) -> Identity:
        self._tokens = _Tokens(
            id_token=data["idToken"],
            refresh_token=data["refreshToken"],
            expires_at=token_expiry(data["idToken"], data.get("expiresIn")),
        )
        identity = Identity(uid=UserId(data["localId"]), email=data.get("email", ""))
        self._set_identity(identity)
        return identity

    async def _post(
        self,
        url: str,
        json: dict[str, Any] | None = None,
        data: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    url, params={"key": self.api_key}, json=json, data=data
                )
        except httpx.HTTPError as e:
            logfire.error("Firebase auth HTTP error", url=url, error=str(e))
            raise IdentityProviderError(NETWORK_ERROR_CODE, str(e)) from e

        if response.status_code != 200:
            error = auth_error_from_response(response)
            logfire.error(
                "Firebase auth request failed",
                url=url,
                status_code=response.status_code,
                code=error.code,
            )
            raise error

        return response.json()


class MockFirebaseAuthClient(FirebaseAuthClient):
    """In-memory Firebase Authentication for testing.

    Accounts live in a dict keyed by email. ``fail_next`` makes the next call
    of an operation raise a given provider code.
    """

    def __init__(self) -> None:
        super().__init__()
        self.accounts: dict[str, tuple[UserId, str]] = {}
        self.calls: list[str] = []
        self._failures: dict[str, str] = {}

    def fail_next(self, operation: str, code: str) -> None:
        """Make the next call to ``operation`` fail with ``code``."""
        self._failures[operation] = code

    def has_account(self, uid: UserId) -> bool:
        return any(account_uid == uid for account_uid, _ in self.accounts.values())

    async def sign_up(self, email: str, password: str) -> Identity:
        self._enter("sign_up")
        if email in self.accounts:
            raise IdentityProviderError("auth/email-already-in-use", "EMAIL_EXISTS")
        if len(password) < 6:
            raise IdentityProviderError("auth/weak-password", "WEAK_PASSWORD")
        uid = UserId(f"mock-{uuid4().hex[:12]}")
        self.accounts[email] = (uid, password)
        identity = Identity(uid=uid, email=email)
        self._set_identity(identity)
        return identity

    async def sign_in(self, email: str, password: str) -> Identity:
        self._enter("sign_in")
        account = self.accounts.get(email)
        if account is None:
            raise IdentityProviderError("auth/user-not-found", "EMAIL_NOT_FOUND")
        uid, stored_password = account
        if stored_password != password:
            raise IdentityProviderError("auth/wrong-password", "INVALID_PASSWORD")
        identity = Identity(uid=uid, email=email)
        self._set_identity(identity)
        return identity

    async def sign_out(self) -> None:
        self._enter("sign_out")
        self._set_identity(None)

    async def delete_current_identity(self) -> None:
        self._enter("delete_current_identity")
        if self._identity is None:
            raise IdentityProviderError(NO_CURRENT_USER_CODE, "No signed-in user")
        self.accounts.pop(self._identity.email, None)
        self._set_identity(None)

    async def get_token(self) -> str:
        self._enter("get_token")
        if self._identity is None:
            raise IdentityProviderError(NO_CURRENT_USER_CODE, "No signed-in user")
        return f"mock-id-token-{self._identity.uid}"

    def _enter(self, operation: str) -> None:
        self.calls.append(operation)
        code = self._failures.pop(operation, None)
        if code:
            raise IdentityProviderError(code, f"Injected failure for {operation}")
