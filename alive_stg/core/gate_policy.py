"""
STG Policy.

STGPolicy is immutable constitutional law.
It may be replaced only by constructing a new policy.

The policy hash is derived from content, never supplied.
"""
import hashlib
import math
from dataclasses import dataclass
from typing import Iterable


class InvalidPolicy(ValueError):
    """Raised when policy parameters fail validation.

    Not retryable. Indicates a configuration programming error.
    """
    pass


@dataclass(frozen=True)
class STGPolicy:
    """Gate policy. Frozen.

    Attributes:
        epsilon_prediction_error: Minimum prediction error to open
        delta_novelty: Minimum novelty to open
        max_window_duration_ms: Maximum window lifetime
        max_compute_budget: Compute budget per window
        cooldown_duration_ms: Cooldown after a window
        allowed_scopes: Closed world of legal scopes
        policy_hash: SHA-256 of the canonical policy content
    """
    epsilon_prediction_error: float
    delta_novelty: float
    max_window_duration_ms: int
    max_compute_budget: int
    cooldown_duration_ms: int
    allowed_scopes: frozenset
    policy_hash: str

    def allows_scope(self, scope: str) -> bool:
        return scope in self.allowed_scopes


def compute_policy_hash(
    epsilon_prediction_error: float,
    delta_novelty: float,
    max_window_duration_ms: int,
    max_compute_budget: int,
    cooldown_duration_ms: int,
    allowed_scopes: frozenset,
) -> str:
    """Compute SHA-256 hash over the canonical policy content.

    Scopes are sorted so the hash does not depend on input order.

    Returns:
        Hex-encoded SHA-256 hash
    """
    hasher = hashlib.sha256()
    hasher.update(repr(float(epsilon_prediction_error)).encode('utf-8'))
    hasher.update(b'\x00')
    hasher.update(repr(float(delta_novelty)).encode('utf-8'))
    hasher.update(b'\x00')
    hasher.update(str(max_window_duration_ms).encode('utf-8'))
    hasher.update(b'\x00')
    hasher.update(str(max_compute_budget).encode('utf-8'))
    hasher.update(b'\x00')
    hasher.update(str(cooldown_duration_ms).encode('utf-8'))
    for scope in sorted(allowed_scopes):
        hasher.update(b'\x00')
        hasher.update(scope.encode('utf-8'))
    return hasher.hexdigest()


def _require_non_negative(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidPolicy(f"{name} must be a number, got {type(value).__name__}")
    if math.isnan(value) or math.isinf(value):
        raise InvalidPolicy(f"{name} must be finite, got {value}")
    if value < 0:
        raise InvalidPolicy(f"{name} must be >= 0, got {value}")


def create_policy(
    epsilon_prediction_error: float,
    delta_novelty: float,
    max_window_duration_ms: int,
    max_compute_budget: int,
    cooldown_duration_ms: int,
    allowed_scopes: Iterable[str],
) -> STGPolicy:
    """Construct a validated, immutable policy.

    Args:
        epsilon_prediction_error: Minimum prediction error (>= 0)
        delta_novelty: Minimum novelty (>= 0)
        max_window_duration_ms: Maximum window duration (>= 0)
        max_compute_budget: Compute budget (>= 0)
        cooldown_duration_ms: Cooldown duration (>= 0)
        allowed_scopes: Non-empty iterable of non-empty scope strings

    Returns:
        STGPolicy with derived policy_hash

    Raises:
        InvalidPolicy: On any validation failure
    """
    _require_non_negative("epsilon_prediction_error", epsilon_prediction_error)
    _require_non_negative("delta_novelty", delta_novelty)
    _require_non_negative("max_window_duration_ms", max_window_duration_ms)
    _require_non_negative("max_compute_budget", max_compute_budget)
    _require_non_negative("cooldown_duration_ms", cooldown_duration_ms)

    if allowed_scopes is None or isinstance(allowed_scopes, str):
        raise InvalidPolicy("allowed_scopes must be an iterable of scope strings")
    scopes = frozenset(allowed_scopes)
    if not scopes:
        raise InvalidPolicy("allowed_scopes must not be empty")
    for scope in scopes:
        if not isinstance(scope, str) or not scope.strip():
            raise InvalidPolicy(f"Invalid scope in allowed_scopes: {scope!r}")

    policy_hash = compute_policy_hash(
        epsilon_prediction_error,
        delta_novelty,
        max_window_duration_ms,
        max_compute_budget,
        cooldown_duration_ms,
        scopes,
    )
    return STGPolicy(
        epsilon_prediction_error=epsilon_prediction_error,
        delta_novelty=delta_novelty,
        max_window_duration_ms=max_window_duration_ms,
        max_compute_budget=max_compute_budget,
        cooldown_duration_ms=cooldown_duration_ms,
        allowed_scopes=scopes,
        policy_hash=policy_hash,
    )
