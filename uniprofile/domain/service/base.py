"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the rules that sit between the use cases and the
    provider bindings: validation, normalization and error translation.
    """

    pass
