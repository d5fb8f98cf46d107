"""Application entrypoint.

Wires the container and owns the long-lived subscriptions:

    async with ProfileApplication() as app:
        app.navigation.subscribe(render)
        ...

Start order is navigation, then session, then the back handler, so the first
session report reaches the navigation machine. Everything is released in
reverse order on exit.
"""

from contextlib import AsyncExitStack
from types import TracebackType

from dishka import AsyncContainer
import logfire

from uniprofile.application.data_access import ProfileDataAccess
from uniprofile.application.navigation import (
    BackButtonSource,
    ExitPrompt,
    HardwareBackHandler,
    NavigationProps,
    NavigationStateMachine,
)
from uniprofile.application.session import SessionStore
from uniprofile.config import Settings
from uniprofile.util.di.container import create_container
from uniprofile.util.logging import setup_logging
from uniprofile.util.observability import configure_logfire


class ProfileApplication:
    """Top-level app object handed to the UI layer."""

    def __init__(
        self,
        container: AsyncContainer | None = None,
        back_source: BackButtonSource | None = None,
        exit_prompt: ExitPrompt | None = None,
        configure_observability: bool = True,
    ) -> None:
        """Initialize application.

        Args:
            container: DI container; the production container when omitted
            back_source: Hardware back button hook, if the platform has one
            exit_prompt: Exit confirmation dialog, required with ``back_source``
            configure_observability: Set up logging and Logfire on enter
        """
        if back_source is not None and exit_prompt is None:
            raise ValueError("exit_prompt is required when back_source is given")

        self._container = container
        self.back_source = back_source
        self.exit_prompt = exit_prompt
        self.configure_observability = configure_observability

        self._stack: AsyncExitStack | None = None
        self.settings: Settings | None = None
        self.navigation: NavigationStateMachine | None = None
        self.session: SessionStore | None = None
        self.data_access: ProfileDataAccess | None = None
        self.back_handler: HardwareBackHandler | None = None

    @property
    def props(self) -> NavigationProps:
        if self.navigation is None:
            raise RuntimeError("Application not started")
        return self.navigation.props

    async def __aenter__(self) -> "ProfileApplication":
        async with AsyncExitStack() as stack:
            container = self._container or create_container()
            stack.push_async_callback(container.close)

            self.settings = await container.get(Settings)
            if self.configure_observability:
                setup_logging(self.settings)
                configure_logfire(self.settings)

            self.data_access = await container.get(ProfileDataAccess)
            self.session = await container.get(SessionStore)
            self.navigation = await container.get(NavigationStateMachine)

            await stack.enter_async_context(self.navigation)
            await stack.enter_async_context(self.session)

            if self.back_source is not None:
                self.back_handler = HardwareBackHandler(
                    machine=self.navigation,
                    source=self.back_source,
                    prompt=self.exit_prompt,
                    locale=self.settings.locale,
                )
                await stack.enter_async_context(self.back_handler)

            logfire.info("Application started", environment=self.settings.environment)
            self._stack = stack.pop_all()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._stack is not None:
            stack, self._stack = self._stack, None
            await stack.aclose()
            logfire.info("Application stopped")
