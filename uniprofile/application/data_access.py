"""Data access facade used by screens and the session store."""

from typing import Any, Mapping

from uniprofile.application.usecase.auth import (
    LoginRequest,
    LoginUseCase,
    LogoutUseCase,
    RegisterRequest,
    RegisterUseCase,
)
from uniprofile.application.usecase.profile import (
    FetchProfileRequest,
    FetchProfileUseCase,
    UpdateProfileRequest,
    UpdateProfileUseCase,
)
from uniprofile.domain.model import Identity, Profile
from uniprofile.domain.value import Result


class ProfileDataAccess:
    """Authentication and profile operations behind one object.

    Every method is a coroutine returning a ``Result``; provider errors are
    never raised to the caller. Missing (``None``) arguments are reported as
    validation failures like empty ones.
    """

    def __init__(
        self,
        register_use_case: RegisterUseCase,
        login_use_case: LoginUseCase,
        logout_use_case: LogoutUseCase,
        fetch_profile_use_case: FetchProfileUseCase,
        update_profile_use_case: UpdateProfileUseCase,
    ) -> None:
        self.register_use_case = register_use_case
        self.login_use_case = login_use_case
        self.logout_use_case = logout_use_case
        self.fetch_profile_use_case = fetch_profile_use_case
        self.update_profile_use_case = update_profile_use_case

    async def register(
        self, profile: Mapping[str, Any] | None, password: str | None
    ) -> Result[Profile]:
        return await self.register_use_case.execute(
            RegisterRequest(profile=dict(profile or {}), password=password)
        )

    async def login(self, email: str | None, password: str | None) -> Result[Identity]:
        return await self.login_use_case.execute(
            LoginRequest(email=email, password=password)
        )

    async def logout(self) -> Result[None]:
        return await self.logout_use_case.execute()

    async def fetch_profile(self, uid: str | None) -> Result[Profile]:
        return await self.fetch_profile_use_case.execute(FetchProfileRequest(uid=uid))

    async def update_profile(
        self, uid: str | None, changes: Mapping[str, Any] | None
    ) -> Result[dict[str, Any]]:
        return await self.update_profile_use_case.execute(
            UpdateProfileRequest(uid=uid, changes=dict(changes or {}))
        )
