from datetime import timedelta
from typing import Any, Optional

from restartable.core.models.metrics import Metrics
from restartable.core.models.outcome import Rejected


class RestartableError(Exception):
    """Base exception for retry session failures.

    Attributes:
        message: Human-readable error description
        diagnostic: Technical diagnostic information for debugging
    """
    def __init__(self, message: str, diagnostic: Optional[str] = None):
        self.message = message
        self.diagnostic = diagnostic
        super().__init__(message)


class RestartTimeoutError(RestartableError, TimeoutError):
    """Raised when the deadline elapsed before any operation value was accepted.

    Attributes:
        metrics: Partial metrics at the moment the session gave up
        deadline: Configured session deadline
        last_rejection: Rejection of the final attempt if it completed after the
            deadline expired; None when the deadline preempted an in-flight attempt
    """
    def __init__(
        self,
        metrics: Metrics,
        deadline: timedelta,
        last_rejection: Optional[Rejected[Any]] = None,
        diagnostic: Optional[str] = None,
    ):
        self.metrics = metrics
        self.deadline = deadline
        self.last_rejection = last_rejection
        message = (
            f"No accepted value after {metrics.restart_count} restart(s); "
            f"{metrics.elapsed_seconds:.3f}s elapsed (limit: {deadline.total_seconds()}s)"
        )
        if diagnostic is None and last_rejection is not None:
            diagnostic = f"last rejection: {last_rejection.reason!r}"
        super().__init__(message=message, diagnostic=diagnostic)

    @property
    def restart_count(self) -> int:
        return self.metrics.restart_count

    @property
    def elapsed(self) -> timedelta:
        return self.metrics.elapsed


class InvalidOutcomeError(RestartableError, TypeError):
    """Raised when a predicate returns something other than Accepted or Rejected.

    Attributes:
        outcome: The offending return value
    """
    def __init__(self, outcome: Any):
        self.outcome = outcome
        message = (
            "Predicate must return Accepted or Rejected, "
            f"got {type(outcome).__name__}"
        )
        super().__init__(message=message, diagnostic=repr(outcome))
