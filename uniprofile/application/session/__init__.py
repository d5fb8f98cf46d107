"""Session tracking."""

from .store import SessionListener, SessionSnapshot, SessionStore

__all__ = ["SessionListener", "SessionSnapshot", "SessionStore"]
