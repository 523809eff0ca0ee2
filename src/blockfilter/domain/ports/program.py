"""Predicate program contract and compiler port.

Programs are a closed set of variants (no-op, compiled) behind one
evaluation contract. Callers never inspect the concrete type: they ask
is_noop() and evaluate().
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from blockfilter.domain.model.context import EvaluationContext


class ProgramProtocol(Protocol):
    """Contract for compiled predicate programs.

    Programs are immutable after compilation. evaluate() must not mutate
    program state, so one program may be evaluated from many threads.
    """

    @property
    def source(self) -> str:
        """Expression the program was compiled from."""
        ...

    def is_noop(self) -> bool:
        """True if the program has a fixed output for every context."""
        ...

    def evaluate(self, context: EvaluationContext) -> bool:
        """Evaluate the predicate for one action.

        Args:
            context: Action plus enclosing transaction's scheduled flag

        Returns:
            True if the action matches

        Raises:
            EvaluationError: If the program cannot produce a boolean
        """
        ...


class CompilerPort(ABC):
    """Port for compiling expressions into programs.

    Infrastructure layer must provide implementation.
    """

    @abstractmethod
    def compile_include(self, expression: str) -> ProgramProtocol:
        """Compile the include side.

        Empty expression yields a no-op program matching every action.

        Raises:
            ExpressionCompileError: If the expression is invalid
        """
        ...

    @abstractmethod
    def compile_exclude(self, expression: str) -> ProgramProtocol:
        """Compile the exclude side.

        Empty expression yields a no-op program matching no action.

        Raises:
            ExpressionCompileError: If the expression is invalid
        """
        ...
