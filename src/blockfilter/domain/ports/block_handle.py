"""Block handle port (interface)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from blockfilter.domain.model.block import Block


class BlockHandlePort(ABC):
    """Opaque block handle that materializes its native tree on demand.

    Infrastructure layer must provide implementation.
    """

    @abstractmethod
    def to_native(self) -> Block:
        """Return the native block tree.

        Must return the same object on every call: mutations made through
        it are what later readers of the handle observe.

        Returns:
            Decoded native Block
        """
        ...
