"""Profile use cases."""

from .fetch_profile import FetchProfileRequest, FetchProfileUseCase
from .update_profile import UpdateProfileRequest, UpdateProfileUseCase

__all__ = [
    "FetchProfileRequest",
    "FetchProfileUseCase",
    "UpdateProfileRequest",
    "UpdateProfileUseCase",
]
