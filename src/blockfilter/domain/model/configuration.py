"""Block filter configuration."""

from __future__ import annotations

from dataclasses import dataclass

from blockfilter.domain.exceptions.config import InvalidConfigError
from blockfilter.domain.model.enums import EvaluationErrorPolicy


@dataclass(frozen=True, slots=True)
class FilterConfig:
    """Configuration DTO for building a BlockFilter.

    Immutable configuration object with FAIL-FIRST validation.
    Empty expression = no-op program for that side.

    Attributes:
        include_expr: Expression an action must match. "" = match everything.
        exclude_expr: Expression vetoing included actions. "" = veto nothing.
        on_evaluation_error: Policy when a compiled program fails at runtime.
    """

    include_expr: str = ""
    exclude_expr: str = ""
    on_evaluation_error: EvaluationErrorPolicy = EvaluationErrorPolicy.PROPAGATE

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not isinstance(self.include_expr, str):
            raise InvalidConfigError(
                "include_expr", f"must be str, got {type(self.include_expr).__name__}"
            )
        if not isinstance(self.exclude_expr, str):
            raise InvalidConfigError(
                "exclude_expr", f"must be str, got {type(self.exclude_expr).__name__}"
            )
        if not isinstance(self.on_evaluation_error, EvaluationErrorPolicy):
            raise InvalidConfigError(
                "on_evaluation_error",
                f"must be EvaluationErrorPolicy, got {self.on_evaluation_error!r}",
            )
