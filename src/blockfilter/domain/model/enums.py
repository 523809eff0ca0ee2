"""Domain enumerations."""

from enum import Enum, auto


class FilterSide(Enum):
    """Which of the two filter programs an item belongs to."""

    INCLUDE = "include"
    EXCLUDE = "exclude"


class EvaluationErrorPolicy(Enum):
    """What the combined filter does when a program fails to evaluate."""

    PROPAGATE = auto()  # raise, block left untouched
    NO_MATCH = auto()  # failing program takes its "did not match" value
