"""Map file exceptions."""


class MapLoadError(Exception):
    """Raised when a map file cannot be read or decoded."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)


class MapValidationError(Exception):
    """Raised when map data does not match the map schema."""

    def __init__(self, message: str, errors: list[dict] | None = None):
        self.errors = errors or []
        super().__init__(message)
