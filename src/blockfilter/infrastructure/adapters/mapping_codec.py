"""Decode blocks from their JSON-like mapping shape.

Shape (keys not listed are ignored):

    {
        "id": "...", "number": 1,
        "transactions": [
            {
                "id": "...", "scheduled": false,
                "actions": [
                    {
                        "receiver": "...", "account": "...", "name": "...",
                        "authorization": [{"actor": "...", "permission": "..."}],
                        "data": {...},
                        "action_ordinal": 1, "creator_action_ordinal": 0
                    }
                ],
                "deferred_failure": {"actions": [...]}
            }
        ]
    }
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from blockfilter.domain.model.action import ActionRecord, PermissionLevel
from blockfilter.domain.model.block import Block
from blockfilter.domain.model.transaction import DeferredFailureRecord, TransactionRecord


def block_from_mapping(data: Mapping[str, object]) -> Block:
    """Decode a Block from a mapping.

    FAIL-FIRST: missing required keys raise KeyError, wrong shapes TypeError.

    Args:
        data: Block mapping (e.g. from json.loads)

    Returns:
        Native Block, unfiltered
    """
    if not isinstance(data, Mapping):
        raise TypeError(f"block must be a mapping, got {type(data).__name__}")

    return Block(
        id=str(data["id"]),
        number=int(data["number"]),  # type: ignore[call-overload]
        unfiltered_transactions=[
            _transaction_from_mapping(t) for t in _sequence(data, "transactions")
        ],
    )


def _transaction_from_mapping(data: Mapping[str, object]) -> TransactionRecord:
    deferred = data.get("deferred_failure")
    deferred_failure = None
    if deferred is not None:
        if not isinstance(deferred, Mapping):
            raise TypeError(f"deferred_failure must be a mapping, got {type(deferred).__name__}")
        deferred_failure = DeferredFailureRecord(
            actions=[_action_from_mapping(a) for a in _sequence(deferred, "actions")]
        )

    return TransactionRecord(
        id=str(data["id"]),
        actions=[_action_from_mapping(a) for a in _sequence(data, "actions")],
        deferred_failure=deferred_failure,
        scheduled=bool(data.get("scheduled", False)),
    )


def _action_from_mapping(data: Mapping[str, object]) -> ActionRecord:
    payload = data.get("data")
    if payload is not None and not isinstance(payload, Mapping):
        raise TypeError(f"action data must be a mapping, got {type(payload).__name__}")

    account = str(data["account"])
    creator = data.get("creator_action_ordinal", 0)
    return ActionRecord(
        receiver=str(data.get("receiver", account)),
        account=account,
        name=str(data["name"]),
        authorization=tuple(
            PermissionLevel(actor=str(p["actor"]), permission=str(p["permission"]))
            for p in _sequence(data, "authorization")
        ),
        data=payload,
        action_ordinal=int(data.get("action_ordinal", 1)),  # type: ignore[call-overload]
        creator_action_ordinal=int(creator),  # type: ignore[call-overload]
    )


def _sequence(data: Mapping[str, object], key: str) -> Sequence[Mapping[str, object]]:
    """Optional list field. Missing = empty."""
    value = data.get(key, ())
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise TypeError(f"{key} must be a list, got {type(value).__name__}")
    return value  # type: ignore[return-value]
