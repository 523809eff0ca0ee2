"""Application services: combined decision and block transform."""

from blockfilter.application.services.block_filter import BlockFilter, build
from blockfilter.application.services.combined_filter import CombinedFilter

__all__ = [
    "BlockFilter",
    "CombinedFilter",
    "build",
]
