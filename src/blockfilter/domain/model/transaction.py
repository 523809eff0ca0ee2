"""Transaction execution records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from blockfilter.domain.model.action import ActionRecord


@dataclass(slots=True)
class DeferredFailureRecord:
    """Actions of a scheduled transaction that executed, then rolled back.

    Attributes:
        actions: Rolled back actions, in execution order
    """

    actions: list[ActionRecord] = field(default_factory=list)


@dataclass(slots=True)
class TransactionRecord:
    """A transaction's full execution trace within a block.

    Attributes:
        id: Transaction id
        actions: Direct executed actions, in execution order
        deferred_failure: Rolled back actions of a failed deferred execution
        scheduled: True if triggered by prior deferred scheduling
    """

    id: str
    actions: list[ActionRecord] = field(default_factory=list)
    deferred_failure: DeferredFailureRecord | None = None
    scheduled: bool = False

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.id:
            raise ValueError("id must not be empty")
