"""Dependency injection module."""

from typing import Type

from yard.util.di.application import ProdApplicationProvider
from yard.util.di.base import Component, ProviderBase
from yard.util.di.clock import ClockProvider, ProdClockProvider
from yard.util.di.core import ProdConfigProvider
from yard.util.di.domain import ProdDomainProvider
from yard.util.di.infrastructure import (
    NotificationProvider,
    PersistenceProvider,
    ProdNotificationProvider,
    ProdPersistenceProvider,
    SourceAggregatorProvider,
)
from yard.util.error import DependencyInjectionError

# Single list - all providers treated uniformly
PROVIDERS: list[Type[ProviderBase]] = [
    # Core providers (not mockable)
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Mockable components
    ClockProvider,
    PersistenceProvider,
    NotificationProvider,
    # Feed sources (combines member and agent ledgers)
    SourceAggregatorProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Get appropriate provider class.

    - No subclasses: concrete provider, used directly
    - Has subclasses: mockable component, selected by __is_mock__ flag

    Args:
        base: Provider base class
        use_mock: Whether to use mock implementation

    Returns:
        Provider class (not instantiated)

    Raises:
        DependencyInjectionError: If requested implementation not found
    """
    subclasses = base.__subclasses__()

    if not subclasses:
        return base

    impl = next(
        (c for c in subclasses if getattr(c, "__is_mock__", False) == use_mock),
        None,
    )

    if not impl:
        kind = "mock" if use_mock else "production"
        component_name = getattr(base, "__mock_component__", base.__name__)
        raise DependencyInjectionError(f"No {kind} implementation for {component_name}")

    return impl


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "ClockProvider",
    "NotificationProvider",
    "PersistenceProvider",
    "SourceAggregatorProvider",
    "ProdClockProvider",
    "ProdNotificationProvider",
    "ProdPersistenceProvider",
]
