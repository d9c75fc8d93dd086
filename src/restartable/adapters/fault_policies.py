from typing import Callable, Type


class RetryAllFaults:
    """Default policy: every operation exception is absorbed and the operation restarted."""

    def is_fatal(self, exc: Exception) -> bool:
        return False


class FatalExceptionTypes:
    """Exceptions of the configured types end the session; all others are retried.

    Example:
        FatalExceptionTypes(PermissionError, ValueError)
    """

    def __init__(self, *exception_types: Type[Exception]) -> None:
        if not exception_types:
            raise ValueError("FatalExceptionTypes needs at least one exception type")
        self.exception_types: tuple[Type[Exception], ...] = tuple(exception_types)

    def is_fatal(self, exc: Exception) -> bool:
        return isinstance(exc, self.exception_types)


class FaultPredicate:
    """Wraps an arbitrary `exc -> bool` classifier (True means fatal)."""

    def __init__(self, classify: Callable[[Exception], bool]) -> None:
        self._classify = classify

    def is_fatal(self, exc: Exception) -> bool:
        return bool(self._classify(exc))
