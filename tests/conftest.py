from datetime import datetime, timezone

import pytest

EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)
EPOCH_MS = 1704067200000


class FakeClock:
    """Millisecond clock that stays where it is put."""

    def __init__(self, now: int) -> None:
        self.now = now
        self.reads = 0

    def __call__(self) -> int:
        self.reads += 1
        return self.now


class SteppingClock:
    """Returns ``start`` for the first ``hold`` reads, then ``start + 1``."""

    def __init__(self, start: int, hold: int) -> None:
        self.start = start
        self.hold = hold
        self.reads = 0

    def __call__(self) -> int:
        self.reads += 1
        if self.reads <= self.hold:
            return self.start
        return self.start + 1


@pytest.fixture
def epoch() -> datetime:
    return EPOCH


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock(EPOCH_MS + 5_000)


@pytest.fixture(autouse=True)
def no_host_identity(monkeypatch):
    """Keep tests off the real network interfaces."""
    monkeypatch.setattr("flakeid.generator.machine_id", lambda: (7, 9))
