"""blockfilter - prune block transaction traces with include/exclude expressions."""

__version__ = "0.1.0"

from blockfilter.application.services.block_filter import BlockFilter, build
from blockfilter.domain.exceptions import (
    BlockFilterError,
    EvaluationError,
    ExpressionCompileError,
    FilterConstructionError,
)
from blockfilter.domain.model import (
    ActionRecord,
    Block,
    DeferredFailureRecord,
    EvaluationErrorPolicy,
    FilterConfig,
    FilterSide,
    PermissionLevel,
    TransactionRecord,
)

__all__ = [
    "ActionRecord",
    "Block",
    "BlockFilter",
    "BlockFilterError",
    "DeferredFailureRecord",
    "EvaluationError",
    "EvaluationErrorPolicy",
    "ExpressionCompileError",
    "FilterConfig",
    "FilterConstructionError",
    "FilterSide",
    "PermissionLevel",
    "TransactionRecord",
    "__version__",
    "build",
]
