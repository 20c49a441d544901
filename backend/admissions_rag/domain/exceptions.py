"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class ValidationError(Exception):
    """Raised when caller-supplied input or configuration is invalid."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"Invalid {field}: {message}")


class DimensionMismatchError(Exception):
    """Raised when an embedding vector does not have the index dimension.

    Always fatal — a mismatch means two incompatible embedding models
    are being mixed, so retrying can never succeed.
    """

    def __init__(self, expected: int, actual: int, context: str = "vector"):
        self.expected = expected
        self.actual = actual
        self.context = context
        super().__init__(
            f"{context} has dimension {actual}, expected {expected}"
        )


class UpstreamUnavailableError(Exception):
    """Raised when the embedding service or storage cannot be reached in time.

    ``retryable`` is False for upstream failures that another attempt will
    not fix (e.g. a rejected API key).
    """

    def __init__(self, service: str, message: str, *, retryable: bool = True):
        self.service = service
        self.message = message
        self.retryable = retryable
        super().__init__(f"[{service}] upstream unavailable: {message}")
