"""Reporter protocol for output formatting.

Users extend blockfilter by implementing this Protocol.
NOT rich-specific - users can adapt to any output format.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from blockfilter.domain.model.block import Block


class ReporterProtocol(Protocol):
    """Contract for reporters of filtered blocks.

    blockfilter provides ConsoleReporter and JSONReporter.
    """

    def report(self, block: Block) -> str:
        """Render a block's filtering result.

        Args:
            block: Block after (or without) a filtering pass

        Returns:
            Rendered output. Caller decides destination.
        """
        ...
