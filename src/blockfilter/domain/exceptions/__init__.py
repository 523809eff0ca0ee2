"""Domain exceptions."""

from blockfilter.domain.exceptions.base import BlockFilterError
from blockfilter.domain.exceptions.compile import CompileErrorKind, ExpressionCompileError
from blockfilter.domain.exceptions.config import InvalidConfigError
from blockfilter.domain.exceptions.construction import FilterConstructionError
from blockfilter.domain.exceptions.evaluation import EvaluationError

__all__ = [
    "BlockFilterError",
    "CompileErrorKind",
    "ExpressionCompileError",
    "FilterConstructionError",
    "EvaluationError",
    "InvalidConfigError",
]
