from typing import Any, Callable

from restartable.core.models.outcome import Accepted, PredicateOutcome, Rejected


def accept_when(
    condition: Callable[[Any], bool],
    reason: Any = "predicate rejected value",
) -> Callable[[Any], PredicateOutcome]:
    """
    Build a predicate from a boolean check.
    - Values for which `condition(value)` is true are accepted unchanged.
    - Other values are rejected with `reason`; a callable reason is called
      with the rejected value to build a per-value diagnostic.

    Example: accept_when(lambda status: status == 200, reason=lambda s: f"status {s}")
    """

    def predicate(value: Any) -> PredicateOutcome:
        if condition(value):
            return Accepted(value=value)
        return Rejected(reason=reason(value) if callable(reason) else reason)

    return predicate
