"""
Genesis output channel — read-only telemetry.

Genesis output is opaque, untrusted text. It is wrapped in a typed
envelope for display and nothing else.

THIS MODULE DOES NOT PARSE, CLASSIFY OR FILTER TEXT.
IT NEVER TRIGGERS COGNITION OR EXECUTION.
"""

from dataclasses import dataclass
from typing import Optional

from alive_stg.body.clock import Clock, now_ms

GENESIS_SOURCE = "genesis"


@dataclass(frozen=True)
class GenesisUtterance:
    """Opaque Genesis output. Still untrusted after wrapping."""
    source: str
    text: str
    timestamp: int


def emit_genesis_utterance(text: str, clock: Optional[Clock] = None) -> GenesisUtterance:
    """Wrap raw Genesis text in an envelope, unchanged.

    Args:
        text: Raw Genesis output
        clock: Time source (epoch ms)

    Returns:
        GenesisUtterance carrying the exact text

    Raises:
        TypeError: text is not a string
    """
    if not isinstance(text, str):
        raise TypeError(f"Genesis utterance must be str, got {type(text).__name__}")
    return GenesisUtterance(
        source=GENESIS_SOURCE,
        text=text,
        timestamp=(clock or now_ms)(),
    )
