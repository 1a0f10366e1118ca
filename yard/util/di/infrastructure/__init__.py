"""Infrastructure providers."""

# Import bases
from .notification import NotificationProvider
from .persistence import PersistenceProvider
from .source import SourceAggregatorProvider

# Import implementations (needed for __subclasses__())
from .notification import ProdNotificationProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "NotificationProvider",
    "PersistenceProvider",
    "ProdNotificationProvider",
    "ProdPersistenceProvider",
    "SourceAggregatorProvider",
]
