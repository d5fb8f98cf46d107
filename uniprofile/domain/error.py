"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    @property
    def message(self) -> str:
        """User-facing message for this error."""
        return str(self)


class ValidationError(DomainError):
    """Local pre-flight validation failure.

    Never reaches the remote store. Carries one message per offending field.
    """

    def __init__(self, field_errors: dict[str, str], message: str | None = None):
        self.field_errors = dict(field_errors)
        self.user_message = message
        super().__init__(
            "Invalid fields: "
            + ", ".join(f"{field} ({msg})" for field, msg in self.field_errors.items())
        )

    @property
    def fields(self) -> list[str]:
        """Names of the offending fields, in reporting order."""
        return list(self.field_errors)

    @property
    def message(self) -> str:
        return self.user_message or str(self)


class RemoteError(DomainError):
    """Identity provider or document store failure, already translated."""

    def __init__(self, code: str, message: str):
        self.code = code
        self._message = message
        super().__init__(message)

    @property
    def message(self) -> str:
        return self._message


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str, message: str | None = None):
        self.resource = resource
        self.identifier = identifier
        self.user_message = message
        super().__init__(f"{resource} not found: {identifier}")

    @property
    def message(self) -> str:
        return self.user_message or str(self)


class ExternalServiceError(DomainError):
    """Untranslated failure reported by an external provider.

    Adapters raise subclasses of this with a provider error code such as
    ``auth/wrong-password``; domain services turn it into ``RemoteError``.
    """

    def __init__(self, code: str, message: str | None = None):
        self.code = code
        self.provider_message = message
        super().__init__(message or code)
