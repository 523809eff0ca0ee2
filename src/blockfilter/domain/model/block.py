"""Block: the unit the block filter transforms."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from blockfilter.domain.model.transaction import TransactionRecord


@dataclass(slots=True)
class Block:
    """Native block with its transaction tree and filtering provenance.

    Before filtering, transactions live in `unfiltered_transactions`.
    After a full filtering pass they move to `filtered_transactions`
    (retained ones only) and `unfiltered_transactions` is emptied.

    Attributes:
        id: Block id
        number: Block height
        unfiltered_transactions: Pre-filter transactions
        filtered_transactions: Retained transactions, None until filtered
        filtering_applied: True once a full filtering pass ran
        include_expr: Include expression used (provenance)
        exclude_expr: Exclude expression used (provenance)
        retained_transaction_count: len(filtered_transactions)
        matched_total_action_count: Matched direct actions
        matched_input_action_count: Matched direct input actions
    """

    id: str
    number: int
    unfiltered_transactions: list[TransactionRecord] = field(default_factory=list)
    filtered_transactions: list[TransactionRecord] | None = None
    filtering_applied: bool = False
    include_expr: str = ""
    exclude_expr: str = ""
    retained_transaction_count: int = 0
    matched_total_action_count: int = 0
    matched_input_action_count: int = 0

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.id:
            raise ValueError("id must not be empty")
        if self.number < 0:
            raise ValueError(f"number must be >= 0, got {self.number}")

    @property
    def transactions(self) -> list[TransactionRecord]:
        """Transactions as seen by consumers: filtered if filtering applied."""
        if self.filtering_applied and self.filtered_transactions is not None:
            return self.filtered_transactions
        return self.unfiltered_transactions
