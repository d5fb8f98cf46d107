"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container

from uniprofile.util.di import select_providers


def create_container() -> AsyncContainer:
    """Build the production container.

    Settings are read from the environment (and ``.env``) when first
    requested, so placeholder credentials only fail once a provider binding
    is actually resolved.
    """
    return make_async_container(*select_providers())
