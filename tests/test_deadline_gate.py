"""Unit tests for DeadlineGate using a controllable clock."""

from datetime import timedelta

import pytest

from restartable.core.managers.deadline_gate import DeadlineGate


@pytest.fixture
def clock():
    """Manually advanced monotonic clock."""
    class FakeClock:
        def __init__(self):
            self.now = 100.0

        def __call__(self):
            return self.now

        def advance(self, seconds):
            self.now += seconds

    return FakeClock()


class TestDeadlineGate:
    """Expiry is derived once from the start instant."""

    def test_expiry_fixed_at_construction(self, clock):
        gate = DeadlineGate(timedelta(seconds=2), clock)

        assert gate.started_at == 100.0
        assert gate.expires_at == 102.0

        clock.advance(1.5)
        assert gate.expires_at == 102.0
        assert gate.remaining() == pytest.approx(0.5)
        assert gate.expired() is False

    def test_remaining_never_negative(self, clock):
        gate = DeadlineGate(timedelta(seconds=1), clock)

        clock.advance(3)

        assert gate.remaining() == 0.0
        assert gate.expired() is True

    def test_expired_at_exact_deadline(self, clock):
        gate = DeadlineGate(timedelta(seconds=1), clock)

        clock.advance(1)

        assert gate.expired() is True

    def test_zero_deadline_is_expired_immediately(self, clock):
        gate = DeadlineGate(timedelta(0), clock)

        assert gate.remaining() == 0.0
        assert gate.expired() is True

    def test_elapsed_tracks_clock(self, clock):
        gate = DeadlineGate(timedelta(seconds=10), clock)

        clock.advance(0.25)
        first = gate.elapsed()
        clock.advance(0.5)
        second = gate.elapsed()

        assert first == timedelta(seconds=0.25)
        assert second == timedelta(seconds=0.75)
        assert second >= first
