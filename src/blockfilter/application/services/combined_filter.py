"""Combined include/exclude decision."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from blockfilter.domain.exceptions.evaluation import EvaluationError
from blockfilter.domain.model.enums import EvaluationErrorPolicy, FilterSide

if TYPE_CHECKING:
    from blockfilter.domain.model.context import EvaluationContext
    from blockfilter.domain.ports.program import ProgramProtocol

logger = logging.getLogger(__name__)

# Value a failing program takes under NO_MATCH: the one that rejects the action
_NO_MATCH_VALUES = {FilterSide.INCLUDE: False, FilterSide.EXCLUDE: True}


class CombinedFilter:
    """Pairs one include and one exclude program.

    An action matches iff include matches and exclude does not.
    Immutable after construction; safe to share between threads.
    """

    __slots__ = ("_exclude", "_include", "_on_error")

    def __init__(
        self,
        include: ProgramProtocol,
        exclude: ProgramProtocol,
        *,
        on_evaluation_error: EvaluationErrorPolicy = EvaluationErrorPolicy.PROPAGATE,
    ) -> None:
        """Initialize filter.

        Args:
            include: Program an action must match
            exclude: Program vetoing included actions
            on_evaluation_error: What to do when a program fails to evaluate

        Raises:
            TypeError: If a program is None
        """
        if include is None:
            raise TypeError("include must not be None")
        if exclude is None:
            raise TypeError("exclude must not be None")

        self._include = include
        self._exclude = exclude
        self._on_error = on_evaluation_error

    @property
    def include(self) -> ProgramProtocol:
        return self._include

    @property
    def exclude(self) -> ProgramProtocol:
        return self._exclude

    @property
    def on_evaluation_error(self) -> EvaluationErrorPolicy:
        return self._on_error

    def is_noop(self) -> bool:
        """True if both programs are no-ops: filtering would change nothing."""
        return self._include.is_noop() and self._exclude.is_noop()

    def decide(self, context: EvaluationContext) -> bool:
        """Decide whether the context's action matches.

        Exclude is evaluated only when include matched.

        Raises:
            EvaluationError: If a program fails and policy is PROPAGATE
        """
        if not self._match(self._include, FilterSide.INCLUDE, context):
            return False
        return not self._match(self._exclude, FilterSide.EXCLUDE, context)

    def _match(
        self, program: ProgramProtocol, side: FilterSide, context: EvaluationContext
    ) -> bool:
        try:
            return program.evaluate(context)
        except EvaluationError as e:
            if self._on_error is EvaluationErrorPolicy.PROPAGATE:
                raise
            logger.debug(
                "%s program failed on %s::%s, treating as no match: %s",
                side.value,
                context.action.account,
                context.action.name,
                e.reason,
            )
            return _NO_MATCH_VALUES[side]
