"""Callable contracts supplied by the caller of a retry session.

Both collaborators are plain callables; any function, lambda, bound method or
object with `__call__` satisfies them.
"""

from typing import Awaitable, Protocol, TypeVar

from restartable.core.models.outcome import PredicateOutcome

V_co = TypeVar("V_co", covariant=True)
V_contra = TypeVar("V_contra", contravariant=True)


class OperationFactory(Protocol[V_co]):
    """Produces a fresh awaitable on every call.

    Called once when the session starts and once per restart. Each returned
    awaitable is owned by a single attempt and may be cancelled before it
    finishes, so it must not rely on state left behind by a previous one.
    """

    def __call__(self) -> Awaitable[V_co]:  # pragma: no cover - protocol
        ...


class Predicate(Protocol[V_contra]):
    """Classifies the value produced by an operation.

    Must be synchronous and free of observable side effects; it runs inline
    on the event loop between two attempts.
    """

    def __call__(self, value: V_contra) -> PredicateOutcome:  # pragma: no cover - protocol
        ...
