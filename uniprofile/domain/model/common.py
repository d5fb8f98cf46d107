"""Base model for all domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for all domain models.

    Domain models are immutable; state changes produce copies via
    ``model_copy(update=...)``.
    """

    model_config = ConfigDict(frozen=True)
