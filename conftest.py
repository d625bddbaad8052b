"""
Test configuration.

Sets environment variables needed for test collection:
- ALIVE_BUILD_PROFILE: TEST unlocks AuditLog.clear(). Strictly test-only,
  production builds default to PRODUCTION and keep the log sealed.

Fixtures:
- fake_clock: manually advanced epoch-ms clock (no sleeps in tests)
"""
import os

import pytest

os.environ.setdefault("ALIVE_BUILD_PROFILE", "TEST")


class FakeClock:
    def __init__(self, start: int = 1_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> int:
        self.now += ms
        return self.now


@pytest.fixture
def fake_clock():
    return FakeClock()
