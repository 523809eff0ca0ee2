"""Field surface exposed to filter expressions.

Maps identifiers used in expressions to values of the evaluation context.
Declared types drive static checks at compile time.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from blockfilter.domain.model.action import PermissionLevel
    from blockfilter.domain.model.context import EvaluationContext


class ValueType(Enum):
    """Static value types known to the compiler. DYN = not known until runtime."""

    BOOL = "bool"
    STRING = "string"
    INT = "int"
    DOUBLE = "double"
    LIST = "list"
    MAP = "map"
    NULL = "null"
    DYN = "dyn"


FIELD_TYPES: Mapping[str, ValueType] = {
    "receiver": ValueType.STRING,
    "account": ValueType.STRING,
    "action": ValueType.STRING,
    "auth": ValueType.LIST,
    "data": ValueType.MAP,
    "input": ValueType.BOOL,
    "notif": ValueType.BOOL,
    "scheduled": ValueType.BOOL,
}

# CEL spellings of literals, usable as bare identifiers
LITERAL_NAMES: Mapping[str, object] = {
    "true": True,
    "false": False,
    "null": None,
}


def tokenize_authorization(authorization: tuple[PermissionLevel, ...]) -> list[str]:
    """Flatten authorizations to tokens: "actor@permission" then "actor" for each."""
    tokens: list[str] = []
    for level in authorization:
        tokens.append(str(level))
        tokens.append(level.actor)
    return tokens


def resolve_field(context: EvaluationContext, name: str) -> object:
    """Resolve field value for context.

    Exhaustive match on FIELD_TYPES keys.

    Raises:
        KeyError: If name is not a declared field
    """
    action = context.action
    match name:
        case "receiver":
            return action.receiver
        case "account":
            return action.account
        case "action":
            return action.name
        case "auth":
            return tokenize_authorization(action.authorization)
        case "data":
            return action.data
        case "input":
            return action.is_input()
        case "notif":
            return action.is_notification()
        case "scheduled":
            return context.trx_scheduled
        case _:
            raise KeyError(name)
