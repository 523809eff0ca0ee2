"""Program evaluation exceptions."""

from blockfilter.domain.exceptions.base import BlockFilterError


class EvaluationError(BlockFilterError, RuntimeError):
    """Compiled program could not produce a boolean for a context.

    Attributes:
        expression: Source expression of the failing program.
        reason: Why evaluation failed.
    """

    def __init__(self, expression: str, reason: str) -> None:
        if not reason:
            raise ValueError("reason must not be empty")

        self.expression = expression
        self.reason = reason
        super().__init__(f"evaluating {expression!r}: {reason}")
