"""Protocol for classifying operation faults.

An operation that raises instead of returning a value is either retried
(the exception is treated like a predicate rejection) or fatal (the exception
ends the session and reaches the caller unchanged). Which one applies is a
decision of the caller, so the controller only talks to this port.
"""

from typing import Protocol


class FaultPolicyPort(Protocol):
    """Decides whether an operation-level exception ends the session."""

    def is_fatal(self, exc: Exception) -> bool:  # pragma: no cover - protocol
        """Return True to propagate `exc`, False to restart the operation.

        Args:
            exc: Exception raised by the awaited operation. Only `Exception`
                subclasses are ever passed; `CancelledError` and other
                `BaseException`s always propagate without classification.
        """
        ...
