"""Base service class for domain services."""


class Service:
    """Base class for domain services.

    Services hold the delegate access rules and talk to repositories;
    use cases orchestrate them.
    """
