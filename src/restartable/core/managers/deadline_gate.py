from datetime import timedelta
from typing import Callable


class DeadlineGate:
    """Bounds the total duration of a retry session.

    The absolute expiry is derived once from the start instant, so repeated
    attempts do not accumulate drift. `clock` must be monotonic and return
    seconds; the controller passes the running event loop's `time`.
    """

    def __init__(self, deadline: timedelta, clock: Callable[[], float]) -> None:
        self.deadline = deadline
        self._clock = clock
        self.started_at = clock()
        self.expires_at = self.started_at + deadline.total_seconds()

    def remaining(self) -> float:
        """Seconds left before expiry, never negative."""
        return max(0.0, self.expires_at - self._clock())

    def expired(self) -> bool:
        return self._clock() >= self.expires_at

    def elapsed(self) -> timedelta:
        return timedelta(seconds=max(0.0, self._clock() - self.started_at))
