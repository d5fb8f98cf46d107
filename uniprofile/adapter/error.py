"""Infrastructure layer errors."""

from uniprofile.domain.error import ExternalServiceError


class AdapterError(ExternalServiceError):
    """Base infrastructure error."""

    pass


class IdentityProviderError(AdapterError):
    """Identity provider error."""

    pass


class DocumentStoreError(AdapterError):
    """Document store error."""

    pass
