from typing import Any, Generic, TypeVar, Union

from pydantic import BaseModel

R = TypeVar("R")
E = TypeVar("E")


class Accepted(BaseModel, Generic[R]):
    """The predicate accepted an operation value; `value` is handed to the caller."""

    value: R

    model_config = {
        "frozen": True,
        "arbitrary_types_allowed": True,
    }


class Rejected(BaseModel, Generic[E]):
    """The predicate rejected an operation value and the operation is restarted.

    `reason` is for diagnostics only. When a retryable operation fault is
    absorbed, the reason is the exception the operation raised.
    """

    reason: E

    model_config = {
        "frozen": True,
        "arbitrary_types_allowed": True,
    }


PredicateOutcome = Union[Accepted[Any], Rejected[Any]]
