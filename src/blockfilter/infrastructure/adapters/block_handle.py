"""Lazily decoding block handle."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from blockfilter.domain.ports.block_handle import BlockHandlePort

if TYPE_CHECKING:
    from collections.abc import Callable

    from blockfilter.domain.model.block import Block


class LazyBlockHandle(BlockHandlePort):
    """Block handle holding an encoded payload, decoded on first access.

    The decoded tree is memoized: every to_native() call returns the same
    object, so in-place filtering is visible to all later readers.

    NOT thread-safe. Owner must serialize access.
    """

    __slots__ = ("_decoder", "_native", "_payload")

    def __init__(self, payload: object, decoder: Callable[[Any], Block]) -> None:
        """Initialize handle.

        Args:
            payload: Encoded block, opaque to the handle
            decoder: Materializes payload into a native Block

        Raises:
            TypeError: If decoder is not callable
        """
        if not callable(decoder):
            raise TypeError(f"decoder must be callable, got {type(decoder).__name__}")

        self._payload = payload
        self._decoder = decoder
        self._native: Block | None = None

    @property
    def decoded(self) -> bool:
        """True once the payload has been materialized."""
        return self._native is not None

    def to_native(self) -> Block:
        """Decode on first call, then return the memoized Block."""
        if self._native is None:
            self._native = self._decoder(self._payload)
        return self._native


class NativeBlockHandle(BlockHandlePort):
    """Handle over an already materialized Block."""

    __slots__ = ("_block",)

    def __init__(self, block: Block) -> None:
        if block is None:
            raise TypeError("block must not be None")
        self._block = block

    def to_native(self) -> Block:
        """Return the wrapped Block."""
        return self._block
