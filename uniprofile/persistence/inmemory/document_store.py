"""In-memory document store for testing."""

from copy import deepcopy
from typing import Any, Optional

from uniprofile.adapter.error import DocumentStoreError
from uniprofile.domain.repository.document_store import DocumentStore


class InMemoryDocumentStore(DocumentStore):
    """In-memory implementation of DocumentStore for testing.

    Records are deep-copied in and out so callers cannot mutate stored
    state. ``fail_next`` makes the next call of an operation raise a given
    store code.
    """

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self.calls: list[str] = []
        self._failures: dict[str, str] = {}

    def fail_next(self, operation: str, code: str) -> None:
        """Make the next call to ``operation`` fail with ``code``."""
        self._failures[operation] = code

    def raw(self, collection: str, key: str) -> Optional[dict[str, Any]]:
        """Stored record without going through the call log."""
        record = self._collections.get(collection, {}).get(key)
        return deepcopy(record) if record is not None else None

    async def get(self, collection: str, key: str) -> Optional[dict[str, Any]]:
        """Fetch a record."""
        self._enter("get")
        return self.raw(collection, key)

    async def set(self, collection: str, key: str, record: dict[str, Any]) -> None:
        """Create or replace a record."""
        self._enter("set")
        self._collections.setdefault(collection, {})[key] = deepcopy(record)

    async def patch(
        self, collection: str, key: str, partial_record: dict[str, Any]
    ) -> None:
        """Overwrite the given fields of an existing record."""
        self._enter("patch")
        record = self._collections.get(collection, {}).get(key)
        if record is None:
            raise DocumentStoreError("firestore/not-found", f"No document {key}")
        record.update(deepcopy(partial_record))

    def _enter(self, operation: str) -> None:
        self.calls.append(operation)
        code = self._failures.pop(operation, None)
        if code:
            raise DocumentStoreError(code, f"Injected failure for {operation}")
