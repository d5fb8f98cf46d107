"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any

from uniprofile.domain.value import Result


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services.

    Use cases never raise domain errors; they are returned as ``Failure``.
    """

    @abstractmethod
    async def execute(self, request: Any) -> Result[Any]:
        pass
