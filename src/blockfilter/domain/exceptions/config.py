"""Configuration exceptions."""

from blockfilter.domain.exceptions.base import BlockFilterError


class InvalidConfigError(BlockFilterError, ValueError):
    """Configuration value is invalid.

    Attributes:
        field: Offending configuration field.
        reason: Why the value is invalid.
    """

    def __init__(self, field: str, reason: str) -> None:
        # FAIL-FIRST validation
        if not field:
            raise ValueError("field must not be empty")
        if not reason:
            raise ValueError("reason must not be empty")

        self.field = field
        self.reason = reason
        super().__init__(f"Invalid config field '{field}': {reason}")
