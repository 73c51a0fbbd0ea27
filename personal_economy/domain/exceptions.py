"""Domain exceptions."""


class RecordValidationError(ValueError):
    """Raised when a record violates the domain schema.

    Attributes:
        record_type: Name of the record type being validated.
        field: Offending field name.
    """

    def __init__(self, record_type: str, field: str, message: str) -> None:
        super().__init__(f"{record_type}.{field}: {message}")
        self.record_type = record_type
        self.field = field


__all__ = ["RecordValidationError"]
