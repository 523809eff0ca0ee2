"""No-op program: fixed output, never inspects the context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from blockfilter.domain.model.context import EvaluationContext


@dataclass(frozen=True, slots=True)
class NoopProgram:
    """Program returning `value` for every context.

    Include side uses value=True (match everything),
    exclude side uses value=False (veto nothing).

    Attributes:
        source: Expression it stands for ("" when none was given)
        value: Fixed evaluation result
    """

    source: str
    value: bool

    def is_noop(self) -> bool:
        """Always True."""
        return True

    def evaluate(self, context: EvaluationContext) -> bool:  # noqa: ARG002
        """Return the fixed value."""
        return self.value
