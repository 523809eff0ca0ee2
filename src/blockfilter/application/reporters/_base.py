"""Base reporter class for output formatting.

Provides default implementation of ReporterProtocol.
Concrete reporters inherit from this.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from blockfilter.domain.model.block import Block


class BaseReporter(ABC):
    """Base class for reporters implementing ReporterProtocol.

    Output is str, not print(). Caller decides destination.

    Example:
        class CountReporter(BaseReporter):
            def report(self, block: Block) -> str:
                return f"{block.retained_transaction_count} transactions kept"
    """

    @abstractmethod
    def report(self, block: Block) -> str:
        """Render a block's filtering result.

        Args:
            block: Block after (or without) a filtering pass
        """
