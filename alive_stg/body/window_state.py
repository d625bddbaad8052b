"""
STG window state.

Runtime-owned, enforcement-critical. Snapshots are frozen; transitions
build a whole new snapshot so no partial update is ever observable.

INVARIANT: CLOSED => scope, window_id, expires_at are all None.
"""

from dataclasses import dataclass
from typing import Optional

from alive_stg.core.gate_types import WindowStatus


@dataclass(frozen=True)
class WindowState:
    """Read-only snapshot of the gate window."""
    status: WindowStatus
    opened_at: Optional[int]
    expires_at: Optional[int]
    scope: Optional[str]
    window_id: Optional[str]
    cooldown_until: int

    @property
    def is_open(self) -> bool:
        return self.status == WindowStatus.OPEN

    def is_expired(self, now: int) -> bool:
        return self.expires_at is not None and now > self.expires_at


def initial_state() -> WindowState:
    """CLOSED state used at runtime construction."""
    return WindowState(
        status=WindowStatus.CLOSED,
        opened_at=None,
        expires_at=None,
        scope=None,
        window_id=None,
        cooldown_until=0,
    )


def opened_state(
    now: int,
    expires_at: int,
    scope: str,
    window_id: str,
    cooldown_until: int,
) -> WindowState:
    """Fully-specified OPEN state. Caller supplies every field."""
    return WindowState(
        status=WindowStatus.OPEN,
        opened_at=now,
        expires_at=expires_at,
        scope=scope,
        window_id=window_id,
        cooldown_until=cooldown_until,
    )


def closed_state(prior: WindowState, cooldown_until: Optional[int] = None) -> WindowState:
    """CLOSED state derived from the prior one.

    Cooldown is never shortened: without an explicit value the prior
    deadline is carried over verbatim, otherwise the later one wins.
    """
    cooldown = prior.cooldown_until
    if cooldown_until is not None and cooldown_until > cooldown:
        cooldown = cooldown_until
    return WindowState(
        status=WindowStatus.CLOSED,
        opened_at=prior.opened_at,
        expires_at=None,
        scope=None,
        window_id=None,
        cooldown_until=cooldown,
    )
