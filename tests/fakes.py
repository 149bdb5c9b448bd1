# tests/fakes.py

from __future__ import annotations


class FakeClock:
    """
    Deterministic millisecond clock for RecordStore ids.

    Returns `start`, then advances by `step` on every call. A step of 0
    simulates several records created within the same millisecond.
    """

    def __init__(self, start: int = 1_700_000_000_000, step: int = 1) -> None:
        self.now = start
        self.step = step
        self.calls = 0

    def __call__(self) -> int:
        self.calls += 1
        value = self.now
        self.now += self.step
        return value
