"""Profile field validation and normalization."""

import re
from datetime import date
from typing import Any, Callable, Mapping

from uniprofile.config import ProfileSettings
from uniprofile.domain.error import ValidationError
from uniprofile.domain.value import UPDATABLE_FIELDS, ProfileField

from .base import Service

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
YEAR_PATTERN = re.compile(r"^[+-]?\d+$")

REQUIRED = "required"


class ProfileValidator(Service):
    """Validates and normalizes profile fields.

    Each field rule returns the normalized value or raises ``ValueError``
    with a short message; the aggregate checks collect those messages into
    a single ``ValidationError`` keyed by field name.
    """

    def __init__(
        self,
        settings: ProfileSettings,
        today: Callable[[], date] = date.today,
    ) -> None:
        """Initialize validator.

        Args:
            settings: Profile settings (graduation year bounds)
            today: Clock used to compute the latest accepted graduation year
        """
        self.settings = settings
        self.today = today

    @property
    def max_graduation_year(self) -> int:
        return self.today().year + self.settings.graduation_year_horizon

    def name(self, value: Any) -> str:
        return self._text(value)

    def email(self, value: Any) -> str:
        email = self._text(value).lower()
        if not EMAIL_PATTERN.match(email):
            raise ValueError("invalid email format")
        return email

    def university_title(self, value: Any) -> str:
        title = self._text(value)
        if len(title) < 3:
            raise ValueError("must be at least 3 characters")
        return title

    def graduation_year(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError("must be a whole number")
        if isinstance(value, int):
            year = value
        elif isinstance(value, str):
            text = value.strip()
            if not text:
                raise ValueError(REQUIRED)
            if not YEAR_PATTERN.match(text):
                raise ValueError("must be a whole number")
            year = int(text)
        elif value is None:
            raise ValueError(REQUIRED)
        else:
            raise ValueError("must be a whole number")

        low, high = self.settings.min_graduation_year, self.max_graduation_year
        if not low <= year <= high:
            raise ValueError(f"must be between {low} and {high}")
        return year

    def password(self, value: Any) -> str:
        # Strength is the provider's call; only presence is checked here
        if not isinstance(value, str) or not value.strip():
            raise ValueError(REQUIRED)
        return value

    def registration(self, fields: Mapping[str, Any], password: Any) -> dict[str, Any]:
        """Validate a full registration.

        Args:
            fields: Raw profile fields (name, email, university_title,
                graduation_year)
            password: Raw password

        Returns:
            Normalized profile fields

        Raises:
            ValidationError: Listing every missing or invalid field
        """
        rules: list[tuple[str, Callable[[Any], Any]]] = [
            (ProfileField.NAME.value, self.name),
            (ProfileField.EMAIL.value, self.email),
            ("password", self.password),
            (ProfileField.UNIVERSITY_TITLE.value, self.university_title),
            (ProfileField.GRADUATION_YEAR.value, self.graduation_year),
        ]
        values = {**fields, "password": password}

        normalized: dict[str, Any] = {}
        errors: dict[str, str] = {}
        for field, rule in rules:
            try:
                normalized[field] = rule(values.get(field))
            except ValueError as e:
                errors[field] = str(e)

        if errors:
            raise ValidationError(errors)

        normalized.pop("password")
        return normalized

    def changes(self, changes: Mapping[str, Any]) -> dict[str, Any]:
        """Validate a partial update.

        Only the fields present in ``changes`` are checked.

        Raises:
            ValidationError: If no fields are given, a field is not
                updatable, or a present field is invalid
        """
        if not changes:
            raise ValidationError({"changes": "no fields to update"})

        rules: dict[str, Callable[[Any], Any]] = {
            ProfileField.NAME.value: self.name,
            ProfileField.UNIVERSITY_TITLE.value: self.university_title,
            ProfileField.GRADUATION_YEAR.value: self.graduation_year,
        }

        normalized: dict[str, Any] = {}
        errors: dict[str, str] = {}
        for field, value in changes.items():
            if field not in UPDATABLE_FIELDS:
                errors[field] = "cannot be updated"
                continue
            try:
                normalized[field] = rules[field](value)
            except ValueError as e:
                errors[field] = str(e)

        if errors:
            raise ValidationError(errors)
        return normalized

    @staticmethod
    def _text(value: Any) -> str:
        if value is None:
            raise ValueError(REQUIRED)
        if not isinstance(value, str):
            raise ValueError("must be text")
        text = value.strip()
        if not text:
            raise ValueError(REQUIRED)
        return text
