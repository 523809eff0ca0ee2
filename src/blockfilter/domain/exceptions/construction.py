"""Filter construction exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from blockfilter.domain.exceptions.base import BlockFilterError

if TYPE_CHECKING:
    from blockfilter.domain.exceptions.compile import ExpressionCompileError
    from blockfilter.domain.model.enums import FilterSide


class FilterConstructionError(BlockFilterError, ValueError):
    """Block filter could not be built.

    Fatal: the filter instance does not exist and must not be used.
    Preserves the compiler diagnostic via __cause__.

    Attributes:
        side: Which program (include/exclude) failed.
        cause: Underlying compile error.
    """

    def __init__(self, side: FilterSide, cause: ExpressionCompileError) -> None:
        if cause is None:
            raise TypeError("cause must not be None")

        self.side = side
        self.cause = cause
        super().__init__(f"{side.value} filter: {cause}")
        self.__cause__ = cause
