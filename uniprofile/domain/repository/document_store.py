"""Document store interface."""

from abc import ABC, abstractmethod
from typing import Any, Optional


class DocumentStore(ABC):
    """Keyed-record store holding profile documents.

    Implementations live in the persistence layer. Records are plain dicts of
    primitive values and ``datetime`` timestamps. Failures are raised as
    ``DocumentStoreError`` with a ``firestore/*`` code.
    """

    @abstractmethod
    async def get(self, collection: str, key: str) -> Optional[dict[str, Any]]:
        """Fetch a record.

        Args:
            collection: Collection name (e.g. "users")
            key: Record key

        Returns:
            The record if it exists, None otherwise
        """
        pass

    @abstractmethod
    async def set(self, collection: str, key: str, record: dict[str, Any]) -> None:
        """Create or fully replace a record.

        Args:
            collection: Collection name
            key: Record key
            record: Complete record
        """
        pass

    @abstractmethod
    async def patch(
        self, collection: str, key: str, partial_record: dict[str, Any]
    ) -> None:
        """Update only the given fields of an existing record.

        Args:
            collection: Collection name
            key: Record key
            partial_record: Fields to overwrite; others are left untouched

        Raises:
            DocumentStoreError: With code ``firestore/not-found`` if the
                record does not exist
        """
        pass
