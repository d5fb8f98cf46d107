"""Hardware back button handling."""

import asyncio
from typing import Awaitable, Callable, Protocol

import logfire

from uniprofile.application.lifecycle import ManagedSubscription

from .machine import NavigationStateMachine
from .state import ROOT_SCREENS

BackListener = Callable[[], bool]

EXIT_PROMPTS = {
    "es": ("Salir de la aplicación", "¿Estás seguro que quieres salir?"),
    "en": ("Exit application", "Are you sure you want to exit?"),
}


class BackButtonSource(Protocol):
    """Platform hook delivering hardware back presses."""

    def add_listener(self, handler: BackListener) -> Callable[[], None]: ...


class ExitPrompt(Protocol):
    """Platform confirmation dialog and app exit."""

    def confirm_exit(self, title: str, message: str) -> Awaitable[bool]: ...

    def exit_app(self) -> None: ...


class HardwareBackHandler(ManagedSubscription):
    """Consumes back presses for the whole app.

    On a root screen the user is asked whether to exit, and presses made
    while that question is open are consumed. Anywhere else the press
    navigates back.
    """

    def __init__(
        self,
        machine: NavigationStateMachine,
        source: BackButtonSource,
        prompt: ExitPrompt,
        locale: str = "es",
    ) -> None:
        super().__init__()
        self.machine = machine
        self.source = source
        self.prompt = prompt
        self.title, self.message = EXIT_PROMPTS.get(locale, EXIT_PROMPTS["es"])

        self._remove: Callable[[], None] | None = None
        self._prompts: set[asyncio.Task] = set()

    def handle_back(self) -> bool:
        """Handle one back press.

        Returns:
            Always True, the press never falls through to the platform
        """
        screen = self.machine.state.current_screen
        if screen in ROOT_SCREENS:
            if self._prompts:
                logfire.debug("Exit prompt already open", screen=screen.value)
                return True
            task = asyncio.get_running_loop().create_task(self._confirm_exit(screen))
            self._prompts.add(task)
            task.add_done_callback(self._prompts.discard)
        else:
            self.machine.go_back()
        return True

    async def wait_for_prompts(self) -> None:
        if self._prompts:
            await asyncio.gather(*list(self._prompts))

    async def _confirm_exit(self, screen) -> None:
        if await self.prompt.confirm_exit(self.title, self.message):
            logfire.info("Exiting from back press", screen=screen.value)
            self.prompt.exit_app()

    def _acquire(self) -> None:
        self._remove = self.source.add_listener(self.handle_back)

    def _release(self) -> None:
        if self._remove is not None:
            self._remove()
            self._remove = None
        for task in list(self._prompts):
            task.cancel()
