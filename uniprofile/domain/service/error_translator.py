"""Provider error code to user-facing message translation."""

from typing import Mapping

from uniprofile.domain.error import NotFoundError, ValidationError

from .base import Service
from .validation import REQUIRED

DEFAULT_LOCALE = "es"

_MESSAGES: dict[str, dict[str, str]] = {
    "es": {
        "auth/email-already-in-use": "Este email ya está registrado",
        "auth/weak-password": "La contraseña debe tener al menos 6 caracteres",
        "auth/invalid-email": "Email inválido",
        "auth/user-not-found": "Usuario no encontrado",
        "auth/wrong-password": "Contraseña incorrecta",
        "auth/invalid-credential": "Email o contraseña incorrectos",
        "auth/too-many-requests": "Demasiados intentos. Inténtalo más tarde",
        "auth/network-request-failed": "Error de conexión. Verifica tu internet",
        "auth/user-disabled": "Esta cuenta ha sido deshabilitada",
        "auth/requires-recent-login": "Tu sesión ha expirado. Inicia sesión de nuevo",
        "auth/no-current-user": "No hay una sesión activa",
        "firestore/permission-denied": "No tienes permiso para realizar esta acción",
        "firestore/unauthenticated": "Tu sesión ha expirado. Inicia sesión de nuevo",
        "firestore/unavailable": "Servicio no disponible. Inténtalo más tarde",
        "firestore/not-found": "Usuario no encontrado en la base de datos",
        "firestore/network-request-failed": "Error de conexión. Verifica tu internet",
        "validation/missing-fields": "Campos requeridos faltantes",
        "validation/invalid-fields": "Campos inválidos",
        "validation/uid-required": "UID de usuario requerido",
        "validation/no-changes": "No hay campos para actualizar",
    },
    "en": {
        "auth/email-already-in-use": "This email is already registered",
        "auth/weak-password": "Password must be at least 6 characters",
        "auth/invalid-email": "Invalid email",
        "auth/user-not-found": "User not found",
        "auth/wrong-password": "Wrong password",
        "auth/invalid-credential": "Wrong email or password",
        "auth/too-many-requests": "Too many attempts. Try again later",
        "auth/network-request-failed": "Connection error. Check your internet",
        "auth/user-disabled": "This account has been disabled",
        "auth/requires-recent-login": "Your session expired. Please sign in again",
        "auth/no-current-user": "There is no active session",
        "firestore/permission-denied": "You are not allowed to do this",
        "firestore/unauthenticated": "Your session expired. Please sign in again",
        "firestore/unavailable": "Service unavailable. Try again later",
        "firestore/not-found": "User not found in the database",
        "firestore/network-request-failed": "Connection error. Check your internet",
        "validation/missing-fields": "Missing required fields",
        "validation/invalid-fields": "Invalid fields",
        "validation/uid-required": "User ID is required",
        "validation/no-changes": "No fields to update",
    },
}

_DEFAULT_MESSAGE = {
    "es": "Ha ocurrido un error",
    "en": "Something went wrong",
}


class ErrorTranslator(Service):
    """Maps provider error codes to localized user-facing messages.

    Total: unknown codes fall back to the provider's raw message, then to a
    generic default. Never raises.
    """

    def __init__(self, locale: str = DEFAULT_LOCALE) -> None:
        self.locale = locale if locale in _MESSAGES else DEFAULT_LOCALE

    def translate(self, code: str | None, message: str | None = None) -> str:
        catalog = _MESSAGES[self.locale]
        if code and code in catalog:
            return catalog[code]
        if message:
            return message
        return _DEFAULT_MESSAGE[self.locale]

    def validation_message(self, field_errors: Mapping[str, str]) -> str:
        """One-line summary of a local validation failure.

        Lists missing fields when every problem is a missing value, otherwise
        every offending field.
        """
        catalog = _MESSAGES[self.locale]
        fields = list(field_errors)
        if fields == ["uid"]:
            return catalog["validation/uid-required"]
        if fields == ["changes"]:
            return catalog["validation/no-changes"]
        if fields and all(field_errors[f] == REQUIRED for f in fields):
            return f"{catalog['validation/missing-fields']}: {', '.join(fields)}"
        return f"{catalog['validation/invalid-fields']}: {', '.join(fields)}"

    def validation_error(self, field_errors: Mapping[str, str]) -> ValidationError:
        return ValidationError(
            dict(field_errors), message=self.validation_message(field_errors)
        )

    def not_found(self, resource: str, identifier: str) -> NotFoundError:
        return NotFoundError(
            resource, identifier, message=self.translate("firestore/not-found")
        )
