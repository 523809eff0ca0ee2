"""Block filter: prunes a block's transactions to those with matching actions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from blockfilter.application.services.combined_filter import CombinedFilter
from blockfilter.domain.exceptions.compile import ExpressionCompileError
from blockfilter.domain.exceptions.construction import FilterConstructionError
from blockfilter.domain.model.configuration import FilterConfig
from blockfilter.domain.model.context import EvaluationContext
from blockfilter.domain.model.enums import EvaluationErrorPolicy, FilterSide
from blockfilter.infrastructure.programs.compiler import ExpressionCompiler

if TYPE_CHECKING:
    from blockfilter.domain.model.action import ActionRecord
    from blockfilter.domain.model.block import Block
    from blockfilter.domain.model.transaction import TransactionRecord
    from blockfilter.domain.ports.block_handle import BlockHandlePort
    from blockfilter.domain.ports.program import CompilerPort, ProgramProtocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _TransactionMatch:
    """Decisions for one retained transaction, computed before any mutation."""

    transaction: TransactionRecord
    actions: tuple[ActionRecord, ...]
    deferred_actions: tuple[ActionRecord, ...]


class BlockFilter:
    """Rewrites blocks in place, keeping transactions with matching actions.

    Built once, immutable afterwards. One instance may serve many threads,
    each on its own block.

    NOT internally synchronized: transform() mutates the block it is given.
    The caller must hold exclusive access to that block for the whole call;
    no other reader or writer of the same block may run concurrently.
    """

    __slots__ = ("_filter",)

    def __init__(self, combined: CombinedFilter) -> None:
        """Initialize from an already built CombinedFilter.

        Use build() or from_config() to compile from expressions.
        """
        if combined is None:
            raise TypeError("combined must not be None")
        self._filter = combined

    @classmethod
    def from_config(cls, config: FilterConfig, compiler: CompilerPort | None = None) -> BlockFilter:
        """Compile both expressions and build the filter.

        FAIL-FIRST: any compile error aborts construction.

        Args:
            config: Expressions and evaluation error policy
            compiler: Expression compiler. Default: ExpressionCompiler.

        Returns:
            Ready BlockFilter

        Raises:
            FilterConstructionError: If either expression fails to compile
        """
        if compiler is None:
            compiler = ExpressionCompiler()

        include = _compile_side(compiler, FilterSide.INCLUDE, config.include_expr)
        exclude = _compile_side(compiler, FilterSide.EXCLUDE, config.exclude_expr)

        block_filter = cls(
            CombinedFilter(include, exclude, on_evaluation_error=config.on_evaluation_error)
        )
        logger.info(
            "block filter built: include=%r exclude=%r noop=%s",
            include.source,
            exclude.source,
            block_filter.is_noop(),
        )
        return block_filter

    @property
    def include_program(self) -> ProgramProtocol:
        return self._filter.include

    @property
    def exclude_program(self) -> ProgramProtocol:
        return self._filter.exclude

    def is_noop(self) -> bool:
        """True if transform() leaves every block untouched."""
        return self._filter.is_noop()

    def transform(self, handle: BlockHandlePort) -> None:
        """Filter the handle's block in place.

        When both programs are no-ops the handle is never decoded.
        Otherwise the decoded block is rewritten, so later to_native()
        calls on the handle observe the filtered form.

        Raises:
            EvaluationError: If a program fails under PROPAGATE policy.
                The block is left unmodified.
        """
        if self._filter.is_noop():
            return

        self._apply(handle.to_native())

    def transform_block(self, block: Block) -> None:
        """Filter an already materialized block in place.

        Same contract as transform().
        """
        if self._filter.is_noop():
            return

        self._apply(block)

    def _apply(self, block: Block) -> None:
        # Decide everything first: an evaluation error leaves the block untouched
        matches = self._plan(block.unfiltered_transactions)

        block.filtering_applied = True
        block.include_expr = self._filter.include.source
        block.exclude_expr = self._filter.exclude.source

        retained: list[TransactionRecord] = []
        total_count = 0
        input_count = 0

        for entry in matches:
            for action in entry.actions:
                action.matched = True
                total_count += 1
                if action.is_input():
                    input_count += 1

            for action in entry.deferred_actions:
                action.matched = True

            retained.append(entry.transaction)

        unfiltered_count = len(block.unfiltered_transactions)
        block.unfiltered_transactions = []
        block.filtered_transactions = retained
        block.retained_transaction_count = len(retained)
        block.matched_total_action_count = total_count
        block.matched_input_action_count = input_count

        logger.debug(
            "block #%d filtered: %d/%d transactions retained, %d actions matched (%d input)",
            block.number,
            len(retained),
            unfiltered_count,
            total_count,
            input_count,
        )

    def _plan(self, transactions: list[TransactionRecord]) -> list[_TransactionMatch]:
        """Evaluate every action without mutating anything.

        Returns:
            One entry per retained transaction, in original order
        """
        matches: list[_TransactionMatch] = []

        for trx in transactions:
            actions = tuple(a for a in trx.actions if self._decide(a, trx))

            deferred_actions: tuple[ActionRecord, ...] = ()
            if trx.deferred_failure is not None:
                # Context uses the parent transaction's scheduled flag
                deferred_actions = tuple(
                    a for a in trx.deferred_failure.actions if self._decide(a, trx)
                )

            if actions or deferred_actions:
                matches.append(_TransactionMatch(trx, actions, deferred_actions))

        return matches

    def _decide(self, action: ActionRecord, trx: TransactionRecord) -> bool:
        return self._filter.decide(EvaluationContext(action=action, trx_scheduled=trx.scheduled))


def build(
    include_expr: str | None,
    exclude_expr: str | None,
    *,
    on_evaluation_error: EvaluationErrorPolicy = EvaluationErrorPolicy.PROPAGATE,
    compiler: CompilerPort | None = None,
) -> BlockFilter:
    """Build a BlockFilter from include and exclude expressions.

    Empty or None include matches every action; empty or None exclude
    vetoes nothing. Both empty = no-op filter.

    Raises:
        FilterConstructionError: Tagged with the failing side
    """
    config = FilterConfig(
        include_expr=include_expr or "",
        exclude_expr=exclude_expr or "",
        on_evaluation_error=on_evaluation_error,
    )
    return BlockFilter.from_config(config, compiler)


def _compile_side(compiler: CompilerPort, side: FilterSide, expression: str) -> ProgramProtocol:
    try:
        if side is FilterSide.INCLUDE:
            return compiler.compile_include(expression)
        return compiler.compile_exclude(expression)
    except ExpressionCompileError as e:
        raise FilterConstructionError(side, e) from e
