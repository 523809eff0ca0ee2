"""Expression compilation exceptions."""

from __future__ import annotations

from enum import Enum, auto

from blockfilter.domain.exceptions.base import BlockFilterError


class CompileErrorKind(Enum):
    """Why an expression failed to compile."""

    SYNTAX = auto()  # not parseable
    UNKNOWN_FIELD = auto()  # references a name outside the field set
    UNSUPPORTED = auto()  # disallowed construct or function
    TYPE = auto()  # statically known to not produce a boolean


class ExpressionCompileError(BlockFilterError, SyntaxError):
    """Expression could not be compiled into a program.

    Inherits SyntaxError for semantic correctness.

    Attributes:
        expression: Source expression that failed.
        kind: Failure classification.
        reason: Compiler diagnostic.
    """

    def __init__(self, expression: str, kind: CompileErrorKind, reason: str) -> None:
        # FAIL-FIRST: validate required parameters
        if expression is None:
            raise TypeError("expression must not be None")
        if not reason:
            raise ValueError("reason must be non-empty string")

        self.expression = expression
        self.kind = kind
        self.reason = reason
        super().__init__(f"{kind.name.lower()} error in {expression!r}: {reason}")
