"""AST-based expression compiler.

Implements CompilerPort using Python's ast module over a CEL-flavoured
surface: `&&`, `||` and `!` are accepted alongside `and`, `or` and `not`,
and `true`, `false` and `null` are literals.

Compilation is FAIL-FIRST: syntax errors, unknown fields, unsupported
constructs and statically known type errors raise ExpressionCompileError.
"""

from __future__ import annotations

import ast
import keyword
import re
from typing import TYPE_CHECKING, NoReturn

from blockfilter.domain.exceptions.compile import CompileErrorKind, ExpressionCompileError
from blockfilter.domain.ports.program import CompilerPort
from blockfilter.infrastructure.programs.compiled import CompiledProgram
from blockfilter.infrastructure.programs.fields import FIELD_TYPES, LITERAL_NAMES, ValueType
from blockfilter.infrastructure.programs.noop import NoopProgram

if TYPE_CHECKING:
    from blockfilter.domain.ports.program import ProgramProtocol

# Stripped sources that compile to a no-op program for each side
INCLUDE_NOOP_SOURCES = frozenset({"", "true", "*"})
EXCLUDE_NOOP_SOURCES = frozenset({"", "false"})

STRING_METHODS = frozenset({"startsWith", "endsWith", "contains", "matches"})

_OPERAND_TYPES = frozenset({ValueType.BOOL, ValueType.DYN})
_CONTAINER_TYPES = frozenset({ValueType.LIST, ValueType.MAP, ValueType.STRING, ValueType.DYN})
_INDEXABLE_TYPES = frozenset({ValueType.LIST, ValueType.MAP, ValueType.DYN})
_NUMERIC_TYPES = frozenset({ValueType.INT, ValueType.DOUBLE, ValueType.DYN})
_NUMBERS = frozenset({ValueType.INT, ValueType.DOUBLE})


class ExpressionCompiler(CompilerPort):
    """Compiles filter expressions into programs.

    Stateless: one instance may compile any number of expressions.
    """

    def compile_include(self, expression: str) -> ProgramProtocol:
        """Compile include side. "", "true" and "*" match every action."""
        return self._compile(expression, INCLUDE_NOOP_SOURCES, noop_value=True)

    def compile_exclude(self, expression: str) -> ProgramProtocol:
        """Compile exclude side. "" and "false" veto nothing."""
        return self._compile(expression, EXCLUDE_NOOP_SOURCES, noop_value=False)

    def compile(self, expression: str) -> CompiledProgram:
        """Compile expression without no-op detection.

        Args:
            expression: Filter expression

        Returns:
            CompiledProgram

        Raises:
            ExpressionCompileError: If expression is invalid
        """
        if not isinstance(expression, str):
            raise TypeError(f"expression must be str, got {type(expression).__name__}")

        python_source = to_python_source(expression)
        if not python_source:
            raise ExpressionCompileError(expression, CompileErrorKind.SYNTAX, "empty expression")

        try:
            tree = ast.parse(python_source, mode="eval")
        except SyntaxError as e:
            raise ExpressionCompileError(
                expression, CompileErrorKind.SYNTAX, e.msg or "invalid syntax"
            ) from e

        checker = _TypeChecker(expression)
        result_type = checker.check(tree.body)
        if result_type not in _OPERAND_TYPES:
            raise ExpressionCompileError(
                expression,
                CompileErrorKind.TYPE,
                f"expression must evaluate to bool, got {result_type.value}",
            )

        return CompiledProgram(source=expression, tree=tree, patterns=checker.patterns)

    def _compile(
        self, expression: str | None, noop_sources: frozenset[str], *, noop_value: bool
    ) -> ProgramProtocol:
        source = expression or ""
        if source.strip() in noop_sources:
            return NoopProgram(source=source, value=noop_value)
        return self.compile(source)


def to_python_source(expression: str) -> str:
    """Rewrite CEL logical operators to Python keywords outside string literals.

    `&&` -> and, `||` -> or, `!` (not part of `!=`) -> not.
    Member names that are Python keywords become subscripts: `.from` -> `["from"]`.
    Line breaks and tabs outside strings become spaces.
    """
    out: list[str] = []
    quote: str | None = None
    i = 0
    n = len(expression)

    while i < n:
        ch = expression[i]

        if quote is not None:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(expression[i + 1])
                i += 2
                continue
            if ch == quote:
                quote = None
            i += 1
            continue

        pair = expression[i : i + 2]
        if ch in "'\"":
            quote = ch
            out.append(ch)
        elif pair == "&&":
            out.append(" and ")
            i += 1
        elif pair == "||":
            out.append(" or ")
            i += 1
        elif ch == "!" and pair != "!=":
            out.append(" not ")
        elif ch == "." and (member := _member_name(expression, i + 1)) is not None:
            out.append(f'["{member}"]')
            i += len(member) + 1
            continue
        elif ch in "\r\n\t":
            out.append(" ")
        else:
            out.append(ch)
        i += 1

    return "".join(out).strip()


def _member_name(expression: str, start: int) -> str | None:
    """Identifier starting at `start` if it is a Python keyword, else None."""
    end = start
    while end < len(expression) and (expression[end].isalnum() or expression[end] == "_"):
        end += 1
    name = expression[start:end]
    if name.isidentifier() and keyword.iskeyword(name):
        return name
    return None


class _TypeChecker:
    """Validates node kinds and infers static value types.

    Collects literal regular expressions so they compile once.
    """

    def __init__(self, expression: str) -> None:
        self._expression = expression
        self.patterns: dict[str, re.Pattern[str]] = {}

    def check(self, node: ast.expr) -> ValueType:
        match node:
            case ast.Constant(value=value):
                return self._constant_type(value)
            case ast.Name(id=name):
                if name in LITERAL_NAMES:
                    return self._constant_type(LITERAL_NAMES[name])
                if name not in FIELD_TYPES:
                    self._fail(
                        CompileErrorKind.UNKNOWN_FIELD,
                        f"undeclared reference to {name!r} "
                        f"(known fields: {', '.join(sorted(FIELD_TYPES))})",
                    )
                return FIELD_TYPES[name]
            case ast.BoolOp(op=op, values=values):
                symbol = "&&" if isinstance(op, ast.And) else "||"
                for value in values:
                    self._expect(self.check(value), _OPERAND_TYPES, f"operand of {symbol}")
                return ValueType.BOOL
            case ast.UnaryOp(op=ast.Not(), operand=operand):
                self._expect(self.check(operand), _OPERAND_TYPES, "operand of !")
                return ValueType.BOOL
            case ast.UnaryOp(op=ast.USub(), operand=operand):
                return self._expect(self.check(operand), _NUMERIC_TYPES, "operand of -")
            case ast.Compare(left=left, ops=ops, comparators=comparators):
                return self._check_compare(left, ops, comparators)
            case ast.List(elts=elts) | ast.Tuple(elts=elts):
                for elt in elts:
                    self.check(elt)
                return ValueType.LIST
            case ast.Attribute(value=value):
                self._expect(self.check(value), {ValueType.MAP, ValueType.DYN}, "member access")
                return ValueType.DYN
            case ast.Subscript(value=value, slice=index):
                self._expect(self.check(value), _INDEXABLE_TYPES, "index")
                self.check(index)
                return ValueType.DYN
            case ast.Call():
                return self._check_call(node)
            case _:
                self._fail(
                    CompileErrorKind.UNSUPPORTED,
                    f"unsupported construct: {type(node).__name__}",
                )

    def _check_compare(
        self, left: ast.expr, ops: list[ast.cmpop], comparators: list[ast.expr]
    ) -> ValueType:
        left_type = self.check(left)
        for op, comparator in zip(ops, comparators, strict=True):
            right_type = self.check(comparator)
            if isinstance(op, ast.In | ast.NotIn):
                self._expect(right_type, _CONTAINER_TYPES, "right side of 'in'")
            elif not isinstance(op, ast.Eq | ast.NotEq | ast.Lt | ast.LtE | ast.Gt | ast.GtE):
                self._fail(
                    CompileErrorKind.UNSUPPORTED,
                    f"unsupported operator: {type(op).__name__}",
                )
            elif ValueType.BOOL in (left_type, right_type) and {left_type, right_type} & _NUMBERS:
                self._fail(
                    CompileErrorKind.TYPE,
                    f"no comparison between {left_type.value} and {right_type.value}",
                )
            left_type = right_type
        return ValueType.BOOL

    def _check_call(self, node: ast.Call) -> ValueType:
        if node.keywords:
            self._fail(CompileErrorKind.UNSUPPORTED, "keyword arguments are not supported")

        match node.func:
            case ast.Name(id="size"):
                self._expect_arity("size", node.args)
                self._expect(self.check(node.args[0]), _CONTAINER_TYPES, "argument of size()")
                return ValueType.INT
            case ast.Attribute(value=target, attr=method) if method in STRING_METHODS:
                self._expect_arity(method, node.args)
                self._expect(
                    self.check(target), {ValueType.STRING, ValueType.DYN}, f"target of {method}()"
                )
                arg = node.args[0]
                self._expect(
                    self.check(arg), {ValueType.STRING, ValueType.DYN}, f"argument of {method}()"
                )
                if method == "matches" and isinstance(arg, ast.Constant):
                    self._precompile(arg.value)
                return ValueType.BOOL
            case ast.Name(id=name) | ast.Attribute(attr=name):
                self._fail(CompileErrorKind.UNSUPPORTED, f"undeclared function {name!r}")
            case _:
                self._fail(CompileErrorKind.UNSUPPORTED, "unsupported call target")

    def _precompile(self, pattern: str) -> None:
        try:
            self.patterns[pattern] = re.compile(pattern)
        except re.error as e:
            self._fail(CompileErrorKind.SYNTAX, f"invalid regular expression {pattern!r}: {e}")

    def _expect_arity(self, name: str, args: list[ast.expr]) -> None:
        if len(args) != 1:
            self._fail(
                CompileErrorKind.TYPE,
                f"{name}() takes exactly 1 argument, got {len(args)}",
            )

    def _expect(
        self, actual: ValueType, allowed: frozenset[ValueType] | set[ValueType], what: str
    ) -> ValueType:
        if actual not in allowed:
            expected = " or ".join(sorted(t.value for t in allowed if t is not ValueType.DYN))
            self._fail(CompileErrorKind.TYPE, f"{what} must be {expected}, got {actual.value}")
        return actual

    def _constant_type(self, value: object) -> ValueType:
        match value:
            case bool():
                return ValueType.BOOL
            case str():
                return ValueType.STRING
            case int():
                return ValueType.INT
            case float():
                return ValueType.DOUBLE
            case None:
                return ValueType.NULL
            case _:
                self._fail(CompileErrorKind.UNSUPPORTED, f"unsupported literal {value!r}")

    def _fail(self, kind: CompileErrorKind, reason: str) -> NoReturn:
        raise ExpressionCompileError(self._expression, kind, reason)
