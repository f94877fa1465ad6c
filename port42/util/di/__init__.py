"""Dependency injection wiring for the API and the test suite."""

from typing import Type

from port42.util.di.adapter import ProdAdapterProvider
from port42.util.di.application import ProdApplicationProvider
from port42.util.di.base import Component, ProviderBase
from port42.util.di.core import ProdConfigProvider
from port42.util.di.domain import ProdDomainProvider
from port42.util.di.infrastructure import (
    PersistenceProvider,
    ProdPersistenceProvider,
)

# Order matters only for readability; dishka resolves by type
PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    ProdAdapterProvider,
    # Swapped for the in-memory store in tests
    PersistenceProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve a provider entry from PROVIDERS to the class to instantiate.

    Entries without subclasses are used as they are. An entry with
    subclasses is a swappable component such as persistence, and the
    subclass whose ``__is_mock__`` matches ``use_mock`` is returned.

    Raises:
        ValueError: If the component has no implementation of that kind
    """
    implementations = base.__subclasses__()
    if not implementations:
        return base

    for implementation in implementations:
        if getattr(implementation, "__is_mock__", False) == use_mock:
            return implementation

    kind = "mock" if use_mock else "production"
    name = getattr(base, "__mock_component__", base.__name__)
    raise ValueError(f"No {kind} implementation for {name}")


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "ProdAdapterProvider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "PersistenceProvider",
    "ProdPersistenceProvider",
]
