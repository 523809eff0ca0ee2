"""Console reporter: filtered Block → rich formatted string."""

from __future__ import annotations

from dataclasses import dataclass
from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from blockfilter.application.reporters._base import BaseReporter
from blockfilter.domain.model.filter_stats import FilterStats

if TYPE_CHECKING:
    from blockfilter.domain.model.action import ActionRecord
    from blockfilter.domain.model.block import Block
    from blockfilter.domain.model.transaction import TransactionRecord


@dataclass(frozen=True, slots=True)
class ConsoleConfig:
    """Configuration for console reporter.

    Attributes:
        show_actions: Render per-transaction action tables.
        show_unmatched: Include unmatched actions in action tables.
        max_transactions: Max transactions to display. None = unlimited.
        width: Console width in characters.
    """

    show_actions: bool = True
    show_unmatched: bool = True
    max_transactions: int | None = None
    width: int = 120

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.max_transactions is not None and self.max_transactions < 0:
            raise ValueError(f"max_transactions must be >= 0, got {self.max_transactions}")
        if self.width < 40:
            raise ValueError(f"width must be >= 40, got {self.width}")


class ConsoleReporter(BaseReporter):
    """Console reporter: outputs rich formatted text.

    Output is str, not print(). Caller decides destination.
    """

    def __init__(self, config: ConsoleConfig | None = None) -> None:
        """Initialize reporter.

        Args:
            config: Reporter configuration. Uses defaults if None.
        """
        self._config = config or ConsoleConfig()

    def report(self, block: Block) -> str:
        """Format block filtering result as rich formatted string."""
        output = StringIO()
        console = Console(
            file=output, force_terminal=True, highlight=False, width=self._config.width
        )

        stats = FilterStats.from_block(block)
        self._render_header(console, block, stats)

        transactions = block.transactions
        if self._config.max_transactions is not None:
            transactions = transactions[: self._config.max_transactions]

        self._render_transactions(console, transactions)

        if self._config.show_actions:
            for trx in transactions:
                self._render_actions(console, trx)

        return output.getvalue()

    def _render_header(self, console: Console, block: Block, stats: FilterStats) -> None:
        console.print()
        console.rule("[bold]BLOCK FILTER RESULT[/bold]")
        console.print()
        console.print(f"[bold]Block:[/bold] #{block.number} {block.id}")

        if not stats.filtering_applied:
            console.print("[dim]Filtering not applied[/dim]")
            console.print()
            return

        console.print(f"[bold]Include:[/bold] {escape(stats.include_expr) or '(all)'}")
        console.print(f"[bold]Exclude:[/bold] {escape(stats.exclude_expr) or '(none)'}")
        console.print(
            f"[bold]Transactions:[/bold] {stats.retained_transaction_count} "
            f"[bold]Matched actions:[/bold] {stats.matched_total_action_count} "
            f"(input: {stats.matched_input_action_count})"
        )
        console.print()

    def _render_transactions(
        self, console: Console, transactions: list[TransactionRecord]
    ) -> None:
        if not transactions:
            return

        table = Table(show_header=True, header_style="bold", box=None)
        table.add_column("Transaction", style="cyan")
        table.add_column("Scheduled")
        table.add_column("Matched", justify="right", style="green")
        table.add_column("Actions", justify="right")
        table.add_column("Deferred matched", justify="right", style="yellow")

        for trx in transactions:
            deferred = trx.deferred_failure.actions if trx.deferred_failure else []
            table.add_row(
                trx.id,
                "yes" if trx.scheduled else "no",
                str(sum(1 for a in trx.actions if a.matched)),
                str(len(trx.actions)),
                str(sum(1 for a in deferred if a.matched)) if deferred else "-",
            )

        console.print(table)
        console.print()

    def _render_actions(self, console: Console, trx: TransactionRecord) -> None:
        rows = [("", a) for a in trx.actions]
        if trx.deferred_failure is not None:
            rows.extend(("deferred", a) for a in trx.deferred_failure.actions)
        if not self._config.show_unmatched:
            rows = [(kind, a) for kind, a in rows if a.matched]
        if not rows:
            return

        console.print(f"[bold]{trx.id}[/bold]")
        table = Table(show_header=True, header_style="bold", box=None)
        table.add_column("", width=1)
        table.add_column("Action", style="cyan")
        table.add_column("Receiver")
        table.add_column("Auth", style="dim")
        table.add_column("Kind", style="dim")

        for kind, action in rows:
            table.add_row(*_action_cells(action, kind))

        console.print(table)
        console.print()


def _action_cells(action: ActionRecord, kind: str) -> tuple[str, str, str, str, str]:
    """Cells for one action row. Kind: "" for direct actions, "deferred" otherwise."""
    marker = "[green]✓[/green]" if action.matched else " "
    labels = [kind] if kind else []
    labels.append("input" if action.is_input() else "inline")
    if action.is_notification():
        labels.append("notif")
    return (
        marker,
        f"{action.account}::{action.name}",
        action.receiver,
        ", ".join(str(p) for p in action.authorization),
        " ".join(labels),
    )
