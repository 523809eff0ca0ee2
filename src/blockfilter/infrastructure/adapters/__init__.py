"""Block record adapters: handles and decoders."""

from blockfilter.infrastructure.adapters.block_handle import LazyBlockHandle, NativeBlockHandle
from blockfilter.infrastructure.adapters.mapping_codec import block_from_mapping

__all__ = [
    "LazyBlockHandle",
    "NativeBlockHandle",
    "block_from_mapping",
]
