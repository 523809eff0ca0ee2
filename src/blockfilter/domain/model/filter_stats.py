"""Filtering statistics read off a block."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from blockfilter.domain.model.block import Block


@dataclass(frozen=True, slots=True)
class FilterStats:
    """Snapshot of a block's filtering provenance and counters.

    Attributes:
        filtering_applied: True if a full filtering pass ran
        include_expr: Include expression used
        exclude_expr: Exclude expression used
        retained_transaction_count: Transactions kept
        matched_total_action_count: Matched direct actions
        matched_input_action_count: Matched direct input actions
    """

    filtering_applied: bool
    include_expr: str
    exclude_expr: str
    retained_transaction_count: int
    matched_total_action_count: int
    matched_input_action_count: int

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.retained_transaction_count < 0:
            raise ValueError(
                f"retained_transaction_count must be >= 0, got {self.retained_transaction_count}"
            )
        if self.matched_input_action_count > self.matched_total_action_count:
            raise ValueError(
                f"matched_input_action_count ({self.matched_input_action_count}) "
                f"must be <= matched_total_action_count ({self.matched_total_action_count})"
            )

    @classmethod
    def from_block(cls, block: Block) -> FilterStats:
        """Read stats from a block's provenance fields."""
        return cls(
            filtering_applied=block.filtering_applied,
            include_expr=block.include_expr,
            exclude_expr=block.exclude_expr,
            retained_transaction_count=block.retained_transaction_count,
            matched_total_action_count=block.matched_total_action_count,
            matched_input_action_count=block.matched_input_action_count,
        )
