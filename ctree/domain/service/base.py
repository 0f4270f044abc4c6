"""Base service class for domain services."""


class Service:
    """Base class for all domain services."""

    pass
