"""Dependency injection module.

Providers are listed once in PROVIDERS. A provider with subclasses is a
swappable component: one subclass is the production implementation and
one, marked ``__is_mock__ = True``, lives in the test suite.
"""

from typing import Type

from ctree.util.di.application import ProdApplicationProvider
from ctree.util.di.base import Component, ProviderBase
from ctree.util.di.core import ProdConfigProvider
from ctree.util.di.domain import ProdDomainProvider
from ctree.util.di.infrastructure import PersistenceProvider, ProdPersistenceProvider
from ctree.util.error import DependencyInjectionError

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Swappable in tests
    PersistenceProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve the provider class to instantiate for base.

    Args:
        base: Entry from PROVIDERS
        use_mock: Pick the test implementation of a swappable component

    Returns:
        base itself when it has no implementations, otherwise the matching
        subclass

    Raises:
        DependencyInjectionError: If no subclass matches use_mock
    """
    implementations = {
        getattr(cls, "__is_mock__", False): cls for cls in base.__subclasses__()
    }
    if not implementations:
        return base

    try:
        return implementations[use_mock]
    except KeyError:
        component = getattr(base, "__mock_component__", base.__name__)
        kind = "mock" if use_mock else "production"
        raise DependencyInjectionError(
            f"{component}: no {kind} provider registered"
        ) from None


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "PersistenceProvider",
    "ProdPersistenceProvider",
]
