from datetime import timedelta
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

R = TypeVar("R")


class Metrics(BaseModel):
    """Summary of one retry session, built once the session has terminated.

    Attributes:
        elapsed: Monotonic time from session start to acceptance or timeout
        restart_count: Rejected outcomes that caused the factory to be called again
    """

    elapsed: timedelta = Field(ge=timedelta(0))
    restart_count: int = Field(default=0, ge=0)

    model_config = {
        "frozen": True,
        "extra": "forbid",
    }

    @property
    def elapsed_seconds(self) -> float:
        return self.elapsed.total_seconds()


class Success(BaseModel, Generic[R]):
    """Accepted value of a session together with its metrics."""

    value: R
    metrics: Metrics

    model_config = {
        "frozen": True,
        "arbitrary_types_allowed": True,
    }

    @property
    def elapsed(self) -> timedelta:
        return self.metrics.elapsed

    @property
    def restart_count(self) -> int:
        return self.metrics.restart_count
