"""JSON reporter for machine-readable output.

Stdlib-only reporter for JSON output.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from blockfilter.application.reporters._base import BaseReporter
from blockfilter.domain.model.filter_stats import FilterStats

if TYPE_CHECKING:
    from blockfilter.domain.model.action import ActionRecord
    from blockfilter.domain.model.block import Block
    from blockfilter.domain.model.transaction import TransactionRecord


class JSONReporter(BaseReporter):
    """JSON reporter for machine-readable output.

    Outputs filtering provenance, counters and the visible transaction tree,
    for indexing pipelines or structured logging.
    """

    def __init__(self, *, indent: int | None = 2, include_transactions: bool = True) -> None:
        """Initialize reporter.

        Args:
            indent: JSON indentation (default: 2, None for compact)
            include_transactions: Emit the transaction tree, not only stats
        """
        self._indent = indent
        self._include_transactions = include_transactions

    def report(self, block: Block) -> str:
        """Report block as JSON string."""
        return json.dumps(self.to_dict(block), indent=self._indent)

    def to_dict(self, block: Block) -> dict[str, object]:
        """Convert block to JSON-serializable dict."""
        stats = FilterStats.from_block(block)
        data: dict[str, object] = {
            "block": {"id": block.id, "number": block.number},
            "filtering": {
                "applied": stats.filtering_applied,
                "include_expr": stats.include_expr,
                "exclude_expr": stats.exclude_expr,
            },
            "stats": {
                "retained_transaction_count": stats.retained_transaction_count,
                "matched_total_action_count": stats.matched_total_action_count,
                "matched_input_action_count": stats.matched_input_action_count,
            },
        }
        if self._include_transactions:
            data["transactions"] = [self._transaction_to_dict(t) for t in block.transactions]
        return data

    def _transaction_to_dict(self, trx: TransactionRecord) -> dict[str, object]:
        return {
            "id": trx.id,
            "scheduled": trx.scheduled,
            "actions": [self._action_to_dict(a) for a in trx.actions],
            "deferred_failure": (
                None
                if trx.deferred_failure is None
                else {"actions": [self._action_to_dict(a) for a in trx.deferred_failure.actions]}
            ),
        }

    def _action_to_dict(self, action: ActionRecord) -> dict[str, object]:
        return {
            "receiver": action.receiver,
            "account": action.account,
            "name": action.name,
            "authorization": [str(p) for p in action.authorization],
            "input": action.is_input(),
            "matched": action.matched,
        }
