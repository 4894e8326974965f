from __future__ import annotations

import pytest

from .virtual_terminal import VirtualTerminal


class FakeClock:
    """Monotonic time source that only moves when told to."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def terminal() -> VirtualTerminal:
    return VirtualTerminal(rows=24, columns=80)


@pytest.fixture(autouse=True)
def _clean_clockwatch_env(monkeypatch):
    for name in (
        "CLOCKWATCH_MAX_FPS",
        "CLOCKWATCH_LOG_FILE",
        "CLOCKWATCH_LOG_LEVEL",
        "CLOCKWATCH_WRITE_LOG",
    ):
        monkeypatch.delenv(name, raising=False)
