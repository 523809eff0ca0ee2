"""Test factories for creating domain objects.

Centralized factory functions to avoid duplication across test modules.
All factories follow the same pattern: accept simplified parameters,
return fully constructed domain objects.
"""

from collections.abc import Mapping

from blockfilter.domain.model.action import ActionRecord, PermissionLevel
from blockfilter.domain.model.block import Block
from blockfilter.domain.model.context import EvaluationContext
from blockfilter.domain.model.transaction import DeferredFailureRecord, TransactionRecord

DEFAULT_BLOCK_ID = "00000064a1b2c3d4"
DEFAULT_BLOCK_NUMBER = 100


def make_action(
    account: str = "eosio.token",
    name: str = "transfer",
    *,
    receiver: str | None = None,
    actors: tuple[str, ...] = ("alice",),
    data: Mapping[str, object] | None = None,
    action_ordinal: int = 1,
    creator_action_ordinal: int = 0,
) -> ActionRecord:
    """Create an ActionRecord for tests.

    Args:
        account: Contract account
        name: Action name
        receiver: Receiver (default: account, i.e. not a notification)
        actors: Actors authorizing with "active" permission
        data: Action payload
        action_ordinal: Position in transaction
        creator_action_ordinal: 0 = input action

    Returns:
        ActionRecord instance, unmatched
    """
    return ActionRecord(
        receiver=receiver if receiver is not None else account,
        account=account,
        name=name,
        authorization=tuple(PermissionLevel(actor=a, permission="active") for a in actors),
        data=data,
        action_ordinal=action_ordinal,
        creator_action_ordinal=creator_action_ordinal,
    )


def make_inline_action(account: str = "eosio.token", name: str = "transfer") -> ActionRecord:
    """Create a non-input action (created by action ordinal 1)."""
    return make_action(account, name, action_ordinal=2, creator_action_ordinal=1)


def make_transaction(
    trx_id: str = "trx1",
    actions: list[ActionRecord] | None = None,
    *,
    deferred: list[ActionRecord] | None = None,
    scheduled: bool = False,
) -> TransactionRecord:
    """Create a TransactionRecord for tests.

    Args:
        trx_id: Transaction id
        actions: Direct actions (default: none)
        deferred: Deferred failure actions. None = no deferred failure section.
        scheduled: Scheduled flag

    Returns:
        TransactionRecord instance
    """
    deferred_failure = None
    if deferred is not None:
        deferred_failure = DeferredFailureRecord(actions=list(deferred))
    return TransactionRecord(
        id=trx_id,
        actions=list(actions) if actions is not None else [],
        deferred_failure=deferred_failure,
        scheduled=scheduled,
    )


def make_block(
    transactions: list[TransactionRecord] | None = None,
    *,
    block_id: str = DEFAULT_BLOCK_ID,
    number: int = DEFAULT_BLOCK_NUMBER,
) -> Block:
    """Create an unfiltered Block for tests."""
    return Block(
        id=block_id,
        number=number,
        unfiltered_transactions=list(transactions) if transactions is not None else [],
    )


def make_context(
    action: ActionRecord | None = None, *, scheduled: bool = False
) -> EvaluationContext:
    """Create an EvaluationContext for tests."""
    return EvaluationContext(
        action=action if action is not None else make_action(),
        trx_scheduled=scheduled,
    )


def make_example_block() -> Block:
    """Block of the reference scenario.

    T1: transfer (input) + issue (inline), not scheduled
    T2: spammer transfer (input), not scheduled
    T3: scheduled, no direct actions, deferred failure with one transfer
    """
    return make_block(
        [
            make_transaction(
                "T1",
                [
                    make_action("eosio.token", "transfer"),
                    make_action("eosio.token", "issue", action_ordinal=2, creator_action_ordinal=1),
                ],
            ),
            make_transaction("T2", [make_action("spammer", "transfer")]),
            make_transaction(
                "T3",
                [],
                deferred=[make_action("eosio.token", "transfer")],
                scheduled=True,
            ),
        ]
    )


def block_to_mapping(block: Block) -> dict[str, object]:
    """Mapping shape accepted by block_from_mapping."""

    def action(a: ActionRecord) -> dict[str, object]:
        return {
            "receiver": a.receiver,
            "account": a.account,
            "name": a.name,
            "authorization": [
                {"actor": p.actor, "permission": p.permission} for p in a.authorization
            ],
            "data": a.data,
            "action_ordinal": a.action_ordinal,
            "creator_action_ordinal": a.creator_action_ordinal,
        }

    return {
        "id": block.id,
        "number": block.number,
        "transactions": [
            {
                "id": t.id,
                "scheduled": t.scheduled,
                "actions": [action(a) for a in t.actions],
                "deferred_failure": (
                    None
                    if t.deferred_failure is None
                    else {"actions": [action(a) for a in t.deferred_failure.actions]}
                ),
            }
            for t in block.unfiltered_transactions
        ],
    }
