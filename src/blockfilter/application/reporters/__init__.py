"""Reporters for filtered blocks.

ConsoleReporter renders with rich; JSONReporter uses stdlib json.
"""

from blockfilter.application.reporters._base import BaseReporter
from blockfilter.application.reporters.console import ConsoleConfig, ConsoleReporter
from blockfilter.application.reporters.json_reporter import JSONReporter

__all__ = [
    "BaseReporter",
    "ConsoleConfig",
    "ConsoleReporter",
    "JSONReporter",
]
