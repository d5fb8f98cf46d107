"""Navigation state machine.

All navigation goes through :meth:`NavigationStateMachine.dispatch`, which
runs the pure reducer and notifies listeners. Session changes are folded in
the same way, so screens never see a half-applied transition.
"""

import asyncio
from typing import Callable

import logfire

from uniprofile.application.lifecycle import ManagedSubscription
from uniprofile.application.session import SessionSnapshot, SessionStore
from uniprofile.config import NavigationSettings
from uniprofile.domain.model import Profile
from uniprofile.domain.value import Result

from .reducer import reduce
from .state import (
    Action,
    GoBack,
    Navigate,
    NavigateReset,
    NavigationProps,
    NavigationState,
    Screen,
    SessionChanged,
    SplashElapsed,
)

NavigationListener = Callable[[NavigationState], None]


class NavigationStateMachine(ManagedSubscription):
    """Owns the navigation state for the lifetime of the app."""

    def __init__(self, session_store: SessionStore, settings: NavigationSettings) -> None:
        super().__init__()
        self.session_store = session_store
        self.settings = settings

        self._state = NavigationState()
        self._listeners: list[NavigationListener] = []
        self._auth_checked = asyncio.Event()
        self._splash_task: asyncio.Task | None = None
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def state(self) -> NavigationState:
        return self._state

    def dispatch(self, action: Action) -> NavigationState:
        """Apply an action and notify listeners if the state changed."""
        previous = self._state
        self._state = reduce(previous, action)

        if self._state.auth_checked:
            self._auth_checked.set()

        if self._state is previous:
            return self._state

        if self._state.current_screen != previous.current_screen:
            logfire.info(
                "Navigated",
                action=type(action).__name__,
                source=previous.current_screen.value,
                target=self._state.current_screen.value,
                depth=len(self._state.history),
            )
        for listener in list(self._listeners):
            listener(self._state)
        return self._state

    def navigate(self, target: Screen | str) -> None:
        """Push a screen.

        Raises:
            ValueError: If ``target`` is not a known screen
        """
        self.dispatch(Navigate(Screen(target)))

    def navigate_reset(self, target: Screen | str) -> None:
        self.dispatch(NavigateReset(Screen(target)))

    def go_back(self) -> None:
        self.dispatch(GoBack())

    async def refresh_profile(self) -> Result[Profile]:
        return await self.session_store.refresh_profile()

    @property
    def props(self) -> NavigationProps:
        state = self._state
        return NavigationProps(
            navigate=self.navigate,
            go_back=self.go_back,
            refresh_profile=self.refresh_profile,
            current_screen=state.current_screen,
            view=state.view,
            can_go_back=state.can_go_back,
            identity=state.identity,
            profile=state.profile,
            profile_loaded=state.profile_loaded,
            show_navbar=state.identity is not None,
        )

    def subscribe(self, listener: NavigationListener) -> Callable[[], None]:
        """Register a state listener.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def wait_for_splash(self) -> None:
        """Wait until the splash screen has been dismissed."""
        if self._splash_task is not None:
            await asyncio.shield(self._splash_task)

    def _acquire(self) -> None:
        self._unsubscribe = self.session_store.subscribe(self._on_session)
        self.dispatch(NavigateReset(Screen.REGISTER))
        self._splash_task = asyncio.get_running_loop().create_task(self._hold_splash())

    def _release(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._splash_task is not None and not self._splash_task.done():
            self._splash_task.cancel()

    def _on_session(self, snapshot: SessionSnapshot) -> None:
        self.dispatch(SessionChanged(snapshot))

    async def _hold_splash(self) -> None:
        # Splash stays for at least the minimum time and until auth resolved
        await asyncio.sleep(self.settings.splash_min_seconds)
        await self._auth_checked.wait()
        self.dispatch(SplashElapsed())
        logfire.info("Splash dismissed", screen=self._state.current_screen.value)
