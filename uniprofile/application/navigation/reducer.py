"""Pure navigation transitions."""

from uniprofile.application.session import SessionSnapshot

from .state import (
    Action,
    GoBack,
    Navigate,
    NavigateReset,
    NavigationState,
    Screen,
    SessionChanged,
    SplashElapsed,
)


def reduce(state: NavigationState, action: Action) -> NavigationState:
    """Apply one action to the navigation state.

    Args:
        state: Current state
        action: Action to apply

    Returns:
        The next state (``state`` itself when nothing changes)
    """
    if isinstance(action, Navigate):
        if action.target == state.current_screen:
            return state
        return state.model_copy(
            update={
                "current_screen": action.target,
                "history": state.history + (action.target,),
            }
        )

    if isinstance(action, NavigateReset):
        return _reset(state, action.target)

    if isinstance(action, GoBack):
        if len(state.history) > 1:
            history = state.history[:-1]
            return state.model_copy(
                update={"current_screen": history[-1], "history": history}
            )
        return _reset(state, Screen.HOME if state.identity else Screen.LOGIN)

    if isinstance(action, SplashElapsed):
        return state.model_copy(update={"splash_done": True})

    if isinstance(action, SessionChanged):
        return _apply_session(state, action.snapshot)

    raise TypeError(f"Unknown navigation action: {action!r}")


def _reset(state: NavigationState, target: Screen) -> NavigationState:
    return state.model_copy(update={"current_screen": target, "history": (target,)})


def _apply_session(state: NavigationState, snapshot: SessionSnapshot) -> NavigationState:
    """Fold a session snapshot into navigation.

    - identity gone (sign-out, rollback), first report without identity, or
      failed profile load: reset to Login
    - profile just loaded for an identity: reset to Home
    """
    # A failed load is treated as signed out while the sign-out completes
    identity = None if snapshot.load_failed else snapshot.identity
    first_report = not state.auth_checked

    next_state = state.model_copy(
        update={
            "auth_checked": True,
            "identity": identity,
            "profile": snapshot.profile if identity else None,
            "profile_loaded": bool(identity) and snapshot.profile_loaded,
        }
    )

    if identity is None:
        if state.identity is not None or first_report or snapshot.load_failed:
            return _reset(next_state, Screen.LOGIN)
        return next_state

    same_identity = state.identity is not None and state.identity.uid == identity.uid
    just_loaded = next_state.profile_loaded and not (
        same_identity and state.profile_loaded
    )
    if just_loaded:
        return _reset(next_state, Screen.HOME)
    return next_state
