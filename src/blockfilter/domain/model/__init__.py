"""Domain model: block records, evaluation context, configuration."""

from blockfilter.domain.model.action import ActionRecord, PermissionLevel
from blockfilter.domain.model.block import Block
from blockfilter.domain.model.configuration import FilterConfig
from blockfilter.domain.model.context import EvaluationContext
from blockfilter.domain.model.enums import EvaluationErrorPolicy, FilterSide
from blockfilter.domain.model.filter_stats import FilterStats
from blockfilter.domain.model.transaction import DeferredFailureRecord, TransactionRecord

__all__ = [
    "ActionRecord",
    "Block",
    "DeferredFailureRecord",
    "EvaluationContext",
    "EvaluationErrorPolicy",
    "FilterConfig",
    "FilterSide",
    "FilterStats",
    "PermissionLevel",
    "TransactionRecord",
]
