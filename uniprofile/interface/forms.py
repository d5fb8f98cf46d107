"""Screen form state.

Forms keep raw input values and per-field error messages. Form checks are
only a first pass before submit; the data access layer validates again.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar

from uniprofile.domain.model import Profile

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

FieldCheck = Callable[[str], str | None]


def _min_length(minimum: int, label: str) -> FieldCheck:
    def check(value: str) -> str | None:
        if not value.strip():
            return f"{label} is required"
        if len(value.strip()) < minimum:
            return f"{label} must be at least {minimum} characters"
        return None

    return check


def _email(value: str) -> str | None:
    if not value.strip():
        return "Email is required"
    if not EMAIL_PATTERN.match(value.strip()):
        return "Email is invalid"
    return None


def _password(value: str) -> str | None:
    if not value:
        return "Password is required"
    if len(value) < 6:
        return "Password must be at least 6 characters"
    return None


def _graduation_year(value: str) -> str | None:
    if not value.strip():
        return "Graduation year is required"
    if not value.strip().isdecimal():
        return "Graduation year must be a number"
    return None


@dataclass
class FormState:
    """Values and errors of one form.

    Editing a field clears its error and marks the form dirty.
    """

    checks: ClassVar[dict[str, FieldCheck]] = {}

    values: dict[str, str] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)
    dirty: bool = False
    submitting: bool = False

    def __post_init__(self) -> None:
        for name in self.checks:
            self.values.setdefault(name, "")

    def update_field(self, name: str, value: str) -> None:
        if name not in self.checks:
            raise KeyError(f"Unknown form field: {name}")
        self.values[name] = value
        self.errors.pop(name, None)
        self.dirty = True

    def validate(self) -> bool:
        """Run every field check; returns True when the form is valid."""
        self.errors = {}
        for name, check in self.checks.items():
            message = check(self.values.get(name, ""))
            if message:
                self.errors[name] = message
        return not self.errors

    def show_errors(self, field_errors: dict[str, str]) -> None:
        """Attach errors reported after submit to the matching fields."""
        for name, message in field_errors.items():
            if name in self.checks:
                self.errors[name] = message


@dataclass
class RegisterForm(FormState):
    checks: ClassVar[dict[str, FieldCheck]] = {
        "name": _min_length(2, "Name"),
        "email": _email,
        "password": _password,
        "university_title": _min_length(3, "University title"),
        "graduation_year": _graduation_year,
    }

    def submission(self) -> tuple[dict[str, Any], str]:
        """Profile fields and password to hand to registration."""
        profile = {k: v for k, v in self.values.items() if k != "password"}
        return profile, self.values["password"]


@dataclass
class LoginForm(FormState):
    checks: ClassVar[dict[str, FieldCheck]] = {
        "email": _email,
        "password": _password,
    }


@dataclass
class EditProfileForm(FormState):
    """Edit form seeded from the loaded profile.

    Only fields that differ from the profile are submitted.
    """

    checks: ClassVar[dict[str, FieldCheck]] = {
        "name": _min_length(2, "Name"),
        "university_title": _min_length(3, "University title"),
        "graduation_year": _graduation_year,
    }

    original: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_profile(cls, profile: Profile) -> "EditProfileForm":
        values = {
            "name": profile.name,
            "university_title": profile.university_title,
            "graduation_year": (
                str(profile.graduation_year)
                if profile.graduation_year is not None
                else ""
            ),
        }
        return cls(values=dict(values), original=dict(values))

    def changes(self) -> dict[str, str]:
        return {
            name: value
            for name, value in self.values.items()
            if value.strip() != self.original.get(name, "").strip()
        }

    def has_changes(self) -> bool:
        return bool(self.changes())

    def accept(self, applied: dict[str, Any]) -> None:
        """Reset the baseline after a successful update."""
        for name in self.checks:
            if name in applied:
                self.values[name] = str(applied[name])
        self.original = dict(self.values)
        self.dirty = False
