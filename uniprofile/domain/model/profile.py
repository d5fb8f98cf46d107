"""Profile record and the identity it belongs to."""

from datetime import datetime
from typing import Any, Mapping

from uniprofile.domain.model.common import DomainModel
from uniprofile.domain.value import ProfileField, UserId


class Identity(DomainModel):
    """Authenticated identity, owned by the identity provider.

    The core only holds it by reference; credentials and tokens stay inside
    the provider binding.
    """

    uid: UserId
    email: str = ""


class Profile(DomainModel):
    """Profile record, one-to-one with an identity.

    Fields missing from older records are back-filled on read, so callers
    always see every attribute: empty strings for text, ``None`` for the
    graduation year and timestamps.
    """

    uid: UserId
    name: str = ""
    email: str = ""
    university_title: str = ""
    graduation_year: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_document(cls, uid: UserId, document: Mapping[str, Any]) -> "Profile":
        """Build a profile from a stored document.

        Unknown keys (legacy ``specialty``/``group``/``section``/``age``) are
        ignored. Null or missing values fall back to the field defaults.
        """
        graduation_year = document.get(ProfileField.GRADUATION_YEAR.value)
        if isinstance(graduation_year, str):
            graduation_year = _parse_year(graduation_year)
        elif not isinstance(graduation_year, int) or isinstance(graduation_year, bool):
            graduation_year = None

        return cls(
            uid=uid,
            name=document.get(ProfileField.NAME.value) or "",
            email=document.get(ProfileField.EMAIL.value) or "",
            university_title=document.get(ProfileField.UNIVERSITY_TITLE.value) or "",
            graduation_year=graduation_year,
            created_at=_as_datetime(document.get(ProfileField.CREATED_AT.value)),
            updated_at=_as_datetime(document.get(ProfileField.UPDATED_AT.value)),
        )

    def to_document(self) -> dict[str, Any]:
        """Convert to the stored document shape (camelCase timestamps)."""
        return {
            ProfileField.NAME.value: self.name,
            ProfileField.EMAIL.value: self.email,
            ProfileField.UNIVERSITY_TITLE.value: self.university_title,
            ProfileField.GRADUATION_YEAR.value: self.graduation_year,
            ProfileField.CREATED_AT.value: self.created_at,
            ProfileField.UPDATED_AT.value: self.updated_at,
        }


def _as_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


def _parse_year(text: str) -> int | None:
    # isdigit() also accepts superscripts, which int() rejects
    text = text.strip()
    return int(text) if text.isdecimal() else None
