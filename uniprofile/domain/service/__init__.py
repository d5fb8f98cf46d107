"""Domain services."""

from .auth_service import AuthService, IdentityProvider, StateListener, Unsubscribe
from .base import Service
from .error_translator import ErrorTranslator
from .profile_service import ProfileService
from .validation import ProfileValidator

__all__ = [
    "AuthService",
    "ErrorTranslator",
    "IdentityProvider",
    "ProfileService",
    "ProfileValidator",
    "Service",
    "StateListener",
    "Unsubscribe",
]
