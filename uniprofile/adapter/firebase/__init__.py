"""Firebase Authentication adapter."""

from .auth import FirebaseAuthClient, MockFirebaseAuthClient, RealFirebaseAuthClient

__all__ = ["FirebaseAuthClient", "RealFirebaseAuthClient", "MockFirebaseAuthClient"]
