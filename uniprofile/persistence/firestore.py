"""Firestore document store over the REST API."""

import re
from typing import Any, Awaitable, Callable, Optional

import httpx
import logfire

from uniprofile.adapter.error import DocumentStoreError
from uniprofile.domain.repository import DocumentStore
from uniprofile.persistence.codec import decode_fields, encode_fields

TokenSource = Callable[[], Awaitable[str]]

NETWORK_ERROR_CODE = "firestore/network-request-failed"

# Fallback when the error body carries no gRPC status
_STATUS_CODES = {
    400: "firestore/invalid-argument",
    401: "firestore/unauthenticated",
    403: "firestore/permission-denied",
    404: "firestore/not-found",
    409: "firestore/already-exists",
    429: "firestore/resource-exhausted",
    503: "firestore/unavailable",
}

_SIMPLE_FIELD = re.compile(r"^[A-Za-z_][A-Za-z_0-9]*$")


def field_path(name: str) -> str:
    """Quote a field name for ``updateMask.fieldPaths`` when needed."""
    if _SIMPLE_FIELD.match(name):
        return name
    escaped = name.replace("\\", "\\\\").replace("`", "\\`")
    return f"`{escaped}`"


def store_error_from_response(response: httpx.Response) -> DocumentStoreError:
    """Build a store error from a Firestore error response.

    Error bodies look like ``{"error": {"code": 403, "message": "...",
    "status": "PERMISSION_DENIED"}}``.
    """
    status = None
    message = response.text
    try:
        error = response.json()["error"]
        status = error.get("status")
        message = error.get("message", message)
    except (ValueError, KeyError, TypeError, AttributeError):
        pass

    if status:
        code = "firestore/" + str(status).lower().replace("_", "-")
    else:
        code = _STATUS_CODES.get(response.status_code, "firestore/unknown")
    return DocumentStoreError(code, message or None)


class FirestoreDocumentStore(DocumentStore):
    """Document store backed by Firestore's REST API.

    Documents are addressed as ``{documents_url}/{collection}/{key}`` and
    every request carries the signed-in identity's bearer token.
    """

    def __init__(
        self, documents_url: str, token_source: TokenSource, timeout: float = 10.0
    ) -> None:
        """Initialize Firestore document store.

        Args:
            documents_url: Base documents URL of the project database
            token_source: Coroutine function returning a bearer token
            timeout: Per-request timeout in seconds
        """
        self.documents_url = documents_url.rstrip("/")
        self.token_source = token_source
        self.timeout = timeout

    def document_url(self, collection: str, key: str) -> str:
        return f"{self.documents_url}/{collection}/{key}"

    async def get(self, collection: str, key: str) -> Optional[dict[str, Any]]:
        with logfire.span("firestore.get", collection=collection, key=key):
            response = await self._request(
                "GET", self.document_url(collection, key), allow_not_found=True
            )
            if response.status_code == 404:
                return None
            return decode_fields(response.json().get("fields", {}))

    async def set(self, collection: str, key: str, record: dict[str, Any]) -> None:
        with logfire.span("firestore.set", collection=collection, key=key):
            # PATCH without a mask replaces the whole document, creating it if needed
            await self._request(
                "PATCH",
                self.document_url(collection, key),
                json={"fields": encode_fields(record)},
            )

    async def patch(
        self, collection: str, key: str, partial_record: dict[str, Any]
    ) -> None:
        with logfire.span(
            "firestore.patch",
            collection=collection,
            key=key,
            fields=sorted(partial_record),
        ):
            params = [("updateMask.fieldPaths", field_path(f)) for f in partial_record]
            params.append(("currentDocument.exists", "true"))
            await self._request(
                "PATCH",
                self.document_url(collection, key),
                params=params,
                json={"fields": encode_fields(partial_record)},
            )

    async def _request(
        self,
        method: str,
        url: str,
        params: list[tuple[str, str]] | None = None,
        json: dict[str, Any] | None = None,
        allow_not_found: bool = False,
    ) -> httpx.Response:
        token = await self.token_source()
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.request(
                    method,
                    url,
                    params=params,
                    json=json,
                    headers={"Authorization": f"Bearer {token}"},
                )
        except httpx.HTTPError as e:
            logfire.error("Firestore HTTP error", method=method, url=url, error=str(e))
            raise DocumentStoreError(NETWORK_ERROR_CODE, str(e)) from e

        if response.status_code == 404 and allow_not_found:
            return response
        if response.status_code >= 400:
            error = store_error_from_response(response)
            logfire.error(
                "Firestore request failed",
                method=method,
                url=url,
                status_code=response.status_code,
                code=error.code,
            )
            raise error
        return response
