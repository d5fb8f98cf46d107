"""Application layer DI providers."""

from dishka import Scope, provide

from uniprofile.application.data_access import ProfileDataAccess
from uniprofile.application.navigation import NavigationStateMachine
from uniprofile.application.session import SessionStore
from uniprofile.application.usecase.auth import (
    LoginUseCase,
    LogoutUseCase,
    RegisterUseCase,
)
from uniprofile.application.usecase.profile import (
    FetchProfileUseCase,
    UpdateProfileUseCase,
)
from uniprofile.config import NavigationSettings, SessionSettings
from uniprofile.domain.service import (
    AuthService,
    ErrorTranslator,
    IdentityProvider,
    ProfileService,
    ProfileValidator,
)
from uniprofile.domain.value import RetryPolicy
from uniprofile.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application provider - concrete, no mocks needed."""

    scope = Scope.APP

    # Auth use cases
    @provide
    def get_register_use_case(
        self,
        auth_service: AuthService,
        profile_service: ProfileService,
        validator: ProfileValidator,
        translator: ErrorTranslator,
    ) -> RegisterUseCase:
        """Provide register use case."""
        return RegisterUseCase(
            auth_service=auth_service,
            profile_service=profile_service,
            validator=validator,
            translator=translator,
        )

    @provide
    def get_login_use_case(
        self, auth_service: AuthService, translator: ErrorTranslator
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(auth_service=auth_service, translator=translator)

    @provide
    def get_logout_use_case(self, auth_service: AuthService) -> LogoutUseCase:
        """Provide logout use case."""
        return LogoutUseCase(auth_service=auth_service)

    # Profile use cases
    @provide
    def get_fetch_profile_use_case(
        self, profile_service: ProfileService, translator: ErrorTranslator
    ) -> FetchProfileUseCase:
        """Provide fetch profile use case."""
        return FetchProfileUseCase(
            profile_service=profile_service, translator=translator
        )

    @provide
    def get_update_profile_use_case(
        self,
        profile_service: ProfileService,
        validator: ProfileValidator,
        translator: ErrorTranslator,
    ) -> UpdateProfileUseCase:
        """Provide update profile use case."""
        return UpdateProfileUseCase(
            profile_service=profile_service,
            validator=validator,
            translator=translator,
        )

    @provide
    def get_data_access(
        self,
        register_use_case: RegisterUseCase,
        login_use_case: LoginUseCase,
        logout_use_case: LogoutUseCase,
        fetch_profile_use_case: FetchProfileUseCase,
        update_profile_use_case: UpdateProfileUseCase,
    ) -> ProfileDataAccess:
        """Provide data access facade."""
        return ProfileDataAccess(
            register_use_case=register_use_case,
            login_use_case=login_use_case,
            logout_use_case=logout_use_case,
            fetch_profile_use_case=fetch_profile_use_case,
            update_profile_use_case=update_profile_use_case,
        )

    # Long-lived state
    @provide
    def get_retry_policy(self, session_settings: SessionSettings) -> RetryPolicy:
        return RetryPolicy(
            max_attempts=session_settings.profile_load_attempts,
            delay=session_settings.profile_load_delay_seconds,
        )

    @provide
    def get_session_store(
        self,
        identity_provider: IdentityProvider,
        data_access: ProfileDataAccess,
        retry_policy: RetryPolicy,
    ) -> SessionStore:
        """Provide session store (not started)."""
        return SessionStore(
            identity_provider=identity_provider,
            data_access=data_access,
            retry_policy=retry_policy,
        )

    @provide
    def get_navigation_state_machine(
        self, session_store: SessionStore, navigation_settings: NavigationSettings
    ) -> NavigationStateMachine:
        """Provide navigation state machine (not started)."""
        return NavigationStateMachine(
            session_store=session_store, settings=navigation_settings
        )
