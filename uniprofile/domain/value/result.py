"""Discriminated success/failure result returned by data access operations.

Callers branch on ``result.ok`` (or ``isinstance``) instead of catching
provider exceptions:

    result = await data_access.login(email, password)
    if result.ok:
        identity = result.value
    else:
        show_alert(result.message)
"""

from dataclasses import dataclass
from typing import ClassVar, Generic, TypeVar, Union

from uniprofile.domain.error import DomainError

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful outcome carrying a value."""

    value: T
    ok: ClassVar[bool] = True


@dataclass(frozen=True)
class Failure:
    """Failed outcome carrying a domain error."""

    error: DomainError
    ok: ClassVar[bool] = False

    @property
    def message(self) -> str:
        """User-facing message for the failure."""
        return self.error.message


Result = Union[Success[T], Failure]
