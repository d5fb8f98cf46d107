"""Application configuration."""

from typing import Literal

from pydantic import BaseModel, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FirebaseSettings(BaseModel):
    """Firebase project configuration.

    Mirrors the web config block of a Firebase app. Only ``api_key`` and
    ``project_id`` are needed by the REST bindings; the rest is carried so a
    single ``.env`` can serve every client of the project.
    """

    api_key: str = "CHANGE_ME"
    auth_domain: str = ""
    project_id: str = "CHANGE_ME"
    storage_bucket: str = ""
    messaging_sender_id: str = ""
    app_id: str = ""

    # Per-request timeout for Identity Toolkit and Firestore calls
    timeout: float = 10.0

    identity_toolkit_url: str = "https://identitytoolkit.googleapis.com/v1"
    secure_token_url: str = "https://securetoken.googleapis.com/v1/token"
    firestore_url: str = "https://firestore.googleapis.com/v1"

    @computed_field
    @property
    def documents_url(self) -> str:
        """Base URL of the project's default Firestore database documents."""
        return (
            f"{self.firestore_url}/projects/{self.project_id}"
            "/databases/(default)/documents"
        )


class NavigationSettings(BaseModel):
    """Navigation state machine configuration."""

    # Minimum time the splash stays up, counted from start
    splash_min_seconds: float = 4.0


class SessionSettings(BaseModel):
    """Session store configuration."""

    # Profile load retry policy after an identity change
    profile_load_attempts: int = 3
    profile_load_delay_seconds: float = 1.0


class ProfileSettings(BaseModel):
    """Profile record configuration."""

    collection: str = "users"
    min_graduation_year: int = 1950
    # Latest accepted graduation year is current year + horizon
    graduation_year_horizon: int = 10


class ObservabilitySettings(BaseModel):
    """Observability configuration for Logfire."""

    # Logfire API token (optional - if not set, logs only go to console)
    # Can be set via OBSERVABILITY__LOGFIRE_TOKEN env var
    logfire_token: str | None = None

    # If None, sends when a token is present
    send_to_logfire: bool | None = None


class Settings(BaseSettings):
    """Application settings.

    Provider credentials come from the environment or a ``.env`` file:

        FIREBASE__API_KEY=...
        FIREBASE__PROJECT_ID=my-project
        LOCALE=es
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # Allows FIREBASE__API_KEY syntax
    )

    environment: Literal["test", "development", "staging", "production"] = "development"
    debug: bool = False

    # Language of user-facing error messages
    locale: Literal["es", "en"] = "es"

    firebase: FirebaseSettings = FirebaseSettings()
    navigation: NavigationSettings = NavigationSettings()
    session: SessionSettings = SessionSettings()
    profile: ProfileSettings = ProfileSettings()
    observability: ObservabilitySettings = ObservabilitySettings()
