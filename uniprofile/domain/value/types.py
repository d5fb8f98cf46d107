"""Domain value types."""

from enum import Enum

from pydantic import Field

from uniprofile.domain.value.common import ValueObject


class ProfileField(str, Enum):
    """Fields of a profile record as stored in the document store."""

    NAME = "name"
    EMAIL = "email"
    UNIVERSITY_TITLE = "university_title"
    GRADUATION_YEAR = "graduation_year"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"


# Fields a signed-in user may change after registration
UPDATABLE_FIELDS = frozenset(
    {
        ProfileField.NAME.value,
        ProfileField.UNIVERSITY_TITLE.value,
        ProfileField.GRADUATION_YEAR.value,
    }
)


class RetryPolicy(ValueObject):
    """Bounded retry with a fixed delay between attempts."""

    max_attempts: int = Field(default=3, ge=1)
    delay: float = Field(default=1.0, ge=0)
