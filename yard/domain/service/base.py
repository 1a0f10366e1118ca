"""Base service class for domain services."""


class Service:
    """Base class for ledger domain services.

    Services hold the rules that span entities; repositories only store.
    """

    pass
