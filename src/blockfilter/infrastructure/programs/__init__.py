"""Infrastructure layer: predicate programs and their compiler.

Usage:
    from blockfilter.infrastructure.programs import ExpressionCompiler

    compiler = ExpressionCompiler()
    include = compiler.compile_include('action == "transfer" && input')
    exclude = compiler.compile_exclude('account == "spammer"')
"""

from blockfilter.infrastructure.programs.compiled import CompiledProgram
from blockfilter.infrastructure.programs.compiler import ExpressionCompiler
from blockfilter.infrastructure.programs.fields import FIELD_TYPES, ValueType
from blockfilter.infrastructure.programs.noop import NoopProgram

__all__ = [
    "FIELD_TYPES",
    "CompiledProgram",
    "ExpressionCompiler",
    "NoopProgram",
    "ValueType",
]
