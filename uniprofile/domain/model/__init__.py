"""Domain model entities."""

from uniprofile.domain.model.profile import Identity, Profile

__all__ = [
    "Identity",
    "Profile",
]
