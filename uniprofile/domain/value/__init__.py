"""Domain value objects."""

from uniprofile.domain.value.identifiers import UserId
from uniprofile.domain.value.result import Failure, Result, Success
from uniprofile.domain.value.types import UPDATABLE_FIELDS, ProfileField, RetryPolicy

__all__ = [
    # Identifiers
    "UserId",
    # Results
    "Failure",
    "Result",
    "Success",
    # Types
    "ProfileField",
    "RetryPolicy",
    "UPDATABLE_FIELDS",
]
