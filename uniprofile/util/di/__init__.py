"""Dependency injection module.

Core providers are concrete. Infrastructure components (``firebase``,
``persistence``) are declared as bases with one production and one mock
subclass; which one is used is decided per container.
"""

from typing import Type

from uniprofile.util.di.application import ProdApplicationProvider
from uniprofile.util.di.base import Component, ProviderBase
from uniprofile.util.di.core import ProdConfigProvider
from uniprofile.util.di.domain import ProdDomainProvider
from uniprofile.util.di.infrastructure import (
    FirebaseProvider,
    PersistenceProvider,
    ProdFirebaseProvider,
    ProdPersistenceProvider,
)

CORE_PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
]

COMPONENT_PROVIDERS: list[Type[ProviderBase]] = [
    FirebaseProvider,
    PersistenceProvider,
]

PROVIDERS = CORE_PROVIDERS + COMPONENT_PROVIDERS


def components() -> dict[Component, Type[ProviderBase]]:
    """Mockable component bases keyed by component name."""
    return {base.__mock_component__: base for base in COMPONENT_PROVIDERS}


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Get the provider class to instantiate for a base.

    Bases without subclasses are concrete and returned as-is.

    Raises:
        ValueError: If the component has no (or more than one) implementation
            of the requested kind
    """
    subclasses = base.__subclasses__()
    if not subclasses:
        return base

    matches = [c for c in subclasses if c.__is_mock__ == use_mock]
    kind = "mock" if use_mock else "production"
    name = base.__mock_component__ or base.__name__
    if not matches:
        raise ValueError(f"No {kind} implementation for {name}")
    if len(matches) > 1:
        raise ValueError(f"Ambiguous {kind} implementations for {name}: {matches}")
    return matches[0]


def select_providers(mocked: set[Component] | None = None) -> list[ProviderBase]:
    """Instantiate every provider, using mocks for the ``mocked`` components."""
    mocked = mocked or set()
    return [
        get_provider(base, use_mock=base.__mock_component__ in mocked)()
        for base in PROVIDERS
    ]


__all__ = [
    "COMPONENT_PROVIDERS",
    "CORE_PROVIDERS",
    "Component",
    "PROVIDERS",
    "ProviderBase",
    "components",
    "get_provider",
    "select_providers",
    # Core providers
    "ProdApplicationProvider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    # Infrastructure
    "FirebaseProvider",
    "PersistenceProvider",
    "ProdFirebaseProvider",
    "ProdPersistenceProvider",
]
