"""App navigation."""

from .back_handler import BackButtonSource, ExitPrompt, HardwareBackHandler
from .machine import NavigationListener, NavigationStateMachine
from .reducer import reduce
from .state import (
    AUTH_SCREENS,
    ROOT_SCREENS,
    Action,
    GoBack,
    Navigate,
    NavigateReset,
    NavigationProps,
    NavigationState,
    Phase,
    Screen,
    SessionChanged,
    SplashElapsed,
    View,
)

__all__ = [
    "AUTH_SCREENS",
    "ROOT_SCREENS",
    "Action",
    "BackButtonSource",
    "ExitPrompt",
    "GoBack",
    "HardwareBackHandler",
    "Navigate",
    "NavigateReset",
    "NavigationListener",
    "NavigationProps",
    "NavigationState",
    "NavigationStateMachine",
    "Phase",
    "Screen",
    "SessionChanged",
    "SplashElapsed",
    "View",
    "reduce",
]
