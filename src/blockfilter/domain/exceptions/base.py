"""Base exceptions for blockfilter domain."""


class BlockFilterError(Exception):
    """Root exception for all blockfilter errors.

    All domain exceptions inherit from this.
    Allows catching all blockfilter-specific errors.
    """
