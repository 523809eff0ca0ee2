"""Compiled program: tree-walking evaluator over a checked expression AST.

The AST is produced and validated by ExpressionCompiler. Only node kinds
accepted by the compiler reach the evaluator; anything else is a bug.
"""

from __future__ import annotations

import ast
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from blockfilter.domain.exceptions.evaluation import EvaluationError
from blockfilter.infrastructure.programs.fields import LITERAL_NAMES, resolve_field

if TYPE_CHECKING:
    from blockfilter.domain.model.context import EvaluationContext


class _EvalFailure(Exception):
    """Internal: evaluation failed, reason carried as message."""


@dataclass(frozen=True, slots=True)
class CompiledProgram:
    """Program backed by a checked expression.

    Immutable. evaluate() keeps all state on the call stack.

    Attributes:
        source: Original expression text
        tree: Checked AST (mode="eval")
        patterns: Regular expressions precompiled from literal matches() args
    """

    source: str
    tree: ast.Expression = field(repr=False)
    patterns: Mapping[str, re.Pattern[str]] = field(default_factory=dict, repr=False)

    def is_noop(self) -> bool:
        """Always False: output depends on the context."""
        return False

    def evaluate(self, context: EvaluationContext) -> bool:
        """Evaluate expression against context.

        Raises:
            EvaluationError: Missing data, incompatible operands, non-bool result
        """
        try:
            result = _Evaluator(context, self.patterns).eval(self.tree.body)
        except _EvalFailure as e:
            raise EvaluationError(self.source, str(e)) from None
        except (TypeError, ValueError) as e:
            raise EvaluationError(self.source, f"{type(e).__name__}: {e}") from e

        if not isinstance(result, bool):
            raise EvaluationError(
                self.source, f"result must be bool, got {type(result).__name__}"
            )
        return result


class _Evaluator:
    """Evaluates one expression for one context."""

    __slots__ = ("_context", "_patterns")

    def __init__(
        self, context: EvaluationContext, patterns: Mapping[str, re.Pattern[str]]
    ) -> None:
        self._context = context
        self._patterns = patterns

    def eval(self, node: ast.expr) -> object:
        match node:
            case ast.Constant(value=value):
                return value
            case ast.Name(id=name):
                if name in LITERAL_NAMES:
                    return LITERAL_NAMES[name]
                return resolve_field(self._context, name)
            case ast.BoolOp(op=op, values=values):
                return self._bool_op(op, values)
            case ast.UnaryOp(op=ast.Not(), operand=operand):
                return not self._as_bool(self.eval(operand), "!")
            case ast.UnaryOp(op=ast.USub(), operand=operand):
                return -self.eval(operand)  # type: ignore[operator]
            case ast.Compare(left=left, ops=ops, comparators=comparators):
                return self._compare(left, ops, comparators)
            case ast.List(elts=elts) | ast.Tuple(elts=elts):
                return [self.eval(e) for e in elts]
            case ast.Attribute(value=value, attr=attr):
                return self._member(self.eval(value), attr)
            case ast.Subscript(value=value, slice=index):
                return self._index(self.eval(value), self.eval(index))
            case ast.Call(func=ast.Name(id="size"), args=[arg]):
                return len(self.eval(arg))  # type: ignore[arg-type]
            case ast.Call(func=ast.Attribute(value=target, attr=method), args=[arg]):
                return self._method(self.eval(target), method, self.eval(arg))
            case _:
                raise _EvalFailure(f"unsupported node {type(node).__name__}")

    def _bool_op(self, op: ast.boolop, values: Sequence[ast.expr]) -> bool:
        symbol = "&&" if isinstance(op, ast.And) else "||"
        short_circuit = not isinstance(op, ast.And)
        for value in values:
            if self._as_bool(self.eval(value), symbol) is short_circuit:
                return short_circuit
        return not short_circuit

    def _compare(
        self, left: ast.expr, ops: Sequence[ast.cmpop], comparators: Sequence[ast.expr]
    ) -> bool:
        current = self.eval(left)
        for op, comparator in zip(ops, comparators, strict=True):
            right = self.eval(comparator)
            if not _compare_pair(op, current, right):
                return False
            current = right
        return True

    def _member(self, value: object, attr: str) -> object:
        if value is None:
            raise _EvalFailure(f"no such key: {attr} (value is null)")
        if not isinstance(value, Mapping):
            raise _EvalFailure(f"{type(value).__name__} has no field {attr!r}")
        if attr not in value:
            raise _EvalFailure(f"no such key: {attr}")
        return value[attr]

    def _index(self, value: object, index: object) -> object:
        if isinstance(value, Mapping):
            if index not in value:
                raise _EvalFailure(f"no such key: {index}")
            return value[index]
        if isinstance(value, Sequence) and not isinstance(value, str):
            if not isinstance(index, int) or isinstance(index, bool):
                raise _EvalFailure(f"list index must be int, got {type(index).__name__}")
            if not 0 <= index < len(value):
                raise _EvalFailure(f"index out of range: {index}")
            return value[index]
        raise _EvalFailure(f"{type(value).__name__} is not indexable")

    def _method(self, target: object, method: str, arg: object) -> bool:
        if not isinstance(target, str) or not isinstance(arg, str):
            raise _EvalFailure(
                f"{method}() requires string operands, got "
                f"{type(target).__name__} and {type(arg).__name__}"
            )
        match method:
            case "startsWith":
                return target.startswith(arg)
            case "endsWith":
                return target.endswith(arg)
            case "contains":
                return arg in target
            case "matches":
                pattern = self._patterns.get(arg)
                if pattern is None:
                    try:
                        pattern = re.compile(arg)
                    except re.error as e:
                        raise _EvalFailure(f"invalid regular expression {arg!r}: {e}") from e
                return pattern.search(target) is not None
            case _:
                raise _EvalFailure(f"unsupported method {method}")

    def _as_bool(self, value: object, operator: str) -> bool:
        if not isinstance(value, bool):
            raise _EvalFailure(f"operand of {operator} must be bool, got {type(value).__name__}")
        return value


def _compare_pair(op: ast.cmpop, left: object, right: object) -> bool:
    """Apply one comparison operator."""
    match op:
        case ast.Eq():
            return _equal(left, right)
        case ast.NotEq():
            return not _equal(left, right)
        case ast.Lt() | ast.LtE() | ast.Gt() | ast.GtE() if _mixes_bool(left, right):
            raise _EvalFailure(
                f"no comparison between {type(left).__name__} and {type(right).__name__}"
            )
        case ast.Lt():
            return left < right  # type: ignore[operator]
        case ast.LtE():
            return left <= right  # type: ignore[operator]
        case ast.Gt():
            return left > right  # type: ignore[operator]
        case ast.GtE():
            return left >= right  # type: ignore[operator]
        case ast.In():
            return _contains(right, left)
        case ast.NotIn():
            return not _contains(right, left)
        case _:
            raise _EvalFailure(f"unsupported operator {type(op).__name__}")


def _contains(container: object, item: object) -> bool:
    if container is None:
        raise _EvalFailure("'in' on null")
    if isinstance(container, str) and not isinstance(item, str):
        raise _EvalFailure(f"'in' on string requires string, got {type(item).__name__}")
    if isinstance(container, list):
        return any(_equal(item, element) for element in container)
    try:
        return item in container  # type: ignore[operator]
    except TypeError as e:
        raise _EvalFailure(f"'in' not supported: {e}") from e


def _mixes_bool(left: object, right: object) -> bool:
    """True if exactly one operand is a bool. Bools only equal bools."""
    return isinstance(left, bool) is not isinstance(right, bool)


def _equal(left: object, right: object) -> bool:
    if _mixes_bool(left, right):
        return False
    return left == right
