"""Action execution record."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class PermissionLevel:
    """Authorization entry: actor@permission.

    Attributes:
        actor: Account that authorized the action
        permission: Permission name used (e.g. "active")
    """

    actor: str
    permission: str

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.actor:
            raise ValueError("actor must not be empty")
        if not self.permission:
            raise ValueError("permission must not be empty")

    def __str__(self) -> str:
        """Format as actor@permission."""
        return f"{self.actor}@{self.permission}"


@dataclass(slots=True)
class ActionRecord:
    """One contract action's execution result within a transaction.

    Mutable: `matched` is set by the block transform.
    All other fields are identity/content and never touched by filtering.

    Attributes:
        receiver: Account whose code executed the action
        account: Contract account the action belongs to
        name: Action name
        authorization: Permission levels that authorized the action
        data: Decoded action payload (None if not decodable)
        action_ordinal: 1-based position within the transaction
        creator_action_ordinal: Ordinal of the action that created this one.
            0 = directly requested by the transaction.
        matched: Set by filtering when the action matches the combined predicate
    """

    receiver: str
    account: str
    name: str
    authorization: tuple[PermissionLevel, ...] = ()
    data: Mapping[str, object] | None = None
    action_ordinal: int = 1
    creator_action_ordinal: int = 0
    matched: bool = field(default=False, compare=False)

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.account:
            raise ValueError("account must not be empty")
        if not self.name:
            raise ValueError("name must not be empty")
        if self.action_ordinal < 1:
            raise ValueError(f"action_ordinal must be >= 1, got {self.action_ordinal}")
        if self.creator_action_ordinal < 0:
            raise ValueError(
                f"creator_action_ordinal must be >= 0, got {self.creator_action_ordinal}"
            )

    def is_input(self) -> bool:
        """True if the action was directly requested, not a side-effect."""
        return self.creator_action_ordinal == 0

    def is_notification(self) -> bool:
        """True if executed by another account's code (require_recipient)."""
        return self.receiver != self.account
