"""Observability configuration using Logfire.

Services, adapters and the state machines emit structured events and open
spans around remote calls:

    with logfire.span("profile_service.patch", uid=uid, fields=sorted(changes)):
        ...
    logfire.info("Navigated", source="Login", target="Home")
"""

import logfire

from uniprofile.config import Settings

SERVICE_NAME = "uniprofile"
SERVICE_VERSION = "0.1.0"

_httpx_instrumented = False


def should_send(settings: Settings) -> bool:
    """Whether events leave the device.

    An explicit ``OBSERVABILITY__SEND_TO_LOGFIRE`` wins; otherwise events
    are sent only when a token is configured.
    """
    if settings.observability.send_to_logfire is not None:
        return settings.observability.send_to_logfire
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for the running app.

    Args:
        settings: Application settings
    """
    send_to_logfire = should_send(settings)

    config_kwargs = {
        "service_name": SERVICE_NAME,
        "service_version": SERVICE_VERSION,
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
            min_log_level="info" if settings.environment != "production" else "warn",
        ),
    }
    if settings.observability.logfire_token:
        config_kwargs["token"] = settings.observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        locale=settings.locale,
        send_to_logfire=send_to_logfire,
    )


def instrument_httpx() -> None:
    """Trace outbound Identity Toolkit and Firestore requests.

    Safe to call from every container build; instruments only once.
    """
    global _httpx_instrumented
    if _httpx_instrumented:
        return
    logfire.instrument_httpx()
    _httpx_instrumented = True
    logfire.info("httpx instrumented")
