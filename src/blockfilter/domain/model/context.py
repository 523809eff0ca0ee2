"""Evaluation context handed to predicate programs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from blockfilter.domain.model.action import ActionRecord


@dataclass(frozen=True, slots=True)
class EvaluationContext:
    """One action paired with its enclosing transaction's scheduled flag.

    Ephemeral: built per evaluation, never retained by programs.

    Attributes:
        action: Action being evaluated
        trx_scheduled: Enclosing transaction's scheduled flag
    """

    action: ActionRecord
    trx_scheduled: bool
