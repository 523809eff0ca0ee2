"""Domain ports (interfaces/protocols)."""

from blockfilter.domain.ports.block_handle import BlockHandlePort
from blockfilter.domain.ports.program import CompilerPort, ProgramProtocol
from blockfilter.domain.ports.reporter import ReporterProtocol

__all__ = [
    "BlockHandlePort",
    "CompilerPort",
    "ProgramProtocol",
    "ReporterProtocol",
]
