"""
STG Invariants.

Canonical constitutional invariant:

    There shall exist no action without a valid prior window open.

Records here are audit-verification data only. Functions are pure.
"""
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from .gate_engine import is_scope_authorized


@dataclass(frozen=True)
class WindowOpenRecord:
    """A lawful window open. Frozen."""
    window_id: str
    scope: str
    issued_at: int
    expires_at: int


@dataclass(frozen=True)
class ActionRecord:
    """A completed action. Frozen."""
    window_id: Optional[str]
    scope: str
    completed_at: int


def verify_action_authorization(
    action: ActionRecord,
    opens: Sequence[WindowOpenRecord],
) -> bool:
    """Verify one action against the recorded window opens.

    Args:
        action: The completed action
        opens: All recorded window opens

    Returns:
        True if some open covers the action's window, time and scope
    """
    if action.window_id is None:
        return False
    return any(
        open_record.window_id == action.window_id
        and open_record.issued_at <= action.completed_at
        and action.completed_at <= open_record.expires_at
        and is_scope_authorized(action.scope, open_record.scope)
        for open_record in opens
    )


def find_unauthorized_actions(
    actions: Iterable[ActionRecord],
    opens: Sequence[WindowOpenRecord],
) -> List[ActionRecord]:
    """Return every action with no covering window open."""
    return [
        action for action in actions
        if not verify_action_authorization(action, opens)
    ]
