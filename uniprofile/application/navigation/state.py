"""Navigation state, actions and the props handed to screens."""

from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Union

from uniprofile.application.session import SessionSnapshot
from uniprofile.domain.model import Identity, Profile
from uniprofile.domain.value import Result
from uniprofile.domain.value.common import ValueObject


class Screen(str, Enum):
    """Screens the user can navigate to."""

    REGISTER = "Register"
    LOGIN = "Login"
    HOME = "Home"
    EDIT_PROFILE = "EditProfile"


# Back on these asks to exit instead of going back
ROOT_SCREENS = frozenset({Screen.HOME, Screen.LOGIN, Screen.REGISTER})

# Rendered only with a signed-in identity
AUTH_SCREENS = frozenset({Screen.HOME, Screen.EDIT_PROFILE})


class Phase(str, Enum):
    """Loading meta-state layered over the current screen."""

    SPLASH = "loading-splash"
    LOADING_PROFILE = "loading-profile"
    READY = "ready"


class View(str, Enum):
    """What is actually rendered after applying the resolution rules."""

    SPLASH = "Splash"
    LOADING_PROFILE = "LoadingProfile"
    REGISTER = "Register"
    LOGIN = "Login"
    HOME = "Home"
    EDIT_PROFILE = "EditProfile"


class NavigationState(ValueObject):
    """Immutable navigation state.

    ``history`` ends with ``current_screen``; it only grows on navigate,
    shrinks on back, and collapses to one entry on reset.
    """

    current_screen: Screen = Screen.REGISTER
    history: tuple[Screen, ...] = (Screen.REGISTER,)
    auth_checked: bool = False
    profile_loaded: bool = False
    splash_done: bool = False
    identity: Identity | None = None
    profile: Profile | None = None

    @property
    def can_go_back(self) -> bool:
        return len(self.history) > 1

    @property
    def phase(self) -> Phase:
        if not self.splash_done:
            return Phase.SPLASH
        if self.identity is not None and not self.profile_loaded:
            return Phase.LOADING_PROFILE
        return Phase.READY

    @property
    def view(self) -> View:
        """Screen resolution rule.

        Auth-only screens fall back to Login without an identity; with an
        identity whose profile is still loading, a placeholder is shown
        instead of any screen.
        """
        if not self.splash_done:
            return View.SPLASH
        if self.current_screen in AUTH_SCREENS and self.identity is None:
            return View.LOGIN
        if self.identity is not None and not self.profile_loaded:
            return View.LOADING_PROFILE
        return View(self.current_screen.value)


@dataclass(frozen=True)
class Navigate:
    target: Screen


@dataclass(frozen=True)
class NavigateReset:
    target: Screen


@dataclass(frozen=True)
class GoBack:
    pass


@dataclass(frozen=True)
class SessionChanged:
    snapshot: SessionSnapshot


@dataclass(frozen=True)
class SplashElapsed:
    pass


Action = Union[Navigate, NavigateReset, GoBack, SessionChanged, SplashElapsed]


@dataclass(frozen=True)
class NavigationProps:
    """Everything a screen needs: current state plus callbacks."""

    navigate: Callable[[Screen | str], None]
    go_back: Callable[[], None]
    refresh_profile: Callable[[], Awaitable[Result[Profile]]]
    current_screen: Screen
    view: View
    can_go_back: bool
    identity: Identity | None
    profile: Profile | None
    profile_loaded: bool
    # Bottom bar with Home / EditProfile, only while signed in
    show_navbar: bool
