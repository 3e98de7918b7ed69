"""Route request exceptions."""


class RouteValidationError(Exception):
    """Raised when a route request is rejected before any search runs.

    Covers a missing start or destination, identical endpoints, and ids
    that are not on the map. A request that is valid but has no connecting
    route is not an error.
    """

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)
