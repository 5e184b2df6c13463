"""Domain errors raised by services. The API layer maps them to HTTP responses in app.main."""


class DomainError(Exception):
    """Base class for errors the core surfaces to callers unchanged."""


class NotFoundError(DomainError):
    def __init__(self, entity: str, entity_id: str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} with ID {entity_id} not found")


class InsufficientPointsError(DomainError):
    """Balance below the amount to spend. Carries both amounts for display."""

    def __init__(self, required: int, available: int) -> None:
        self.required = required
        self.available = available
        super().__init__(
            f"Not enough points. Required: {required}, Available: {available}"
        )


class ValidationError(DomainError):
    """Malformed input: non-positive duration/sets/reps/points, empty name, etc."""
