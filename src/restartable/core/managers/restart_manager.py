"""Restartable: drives one retry session to a terminal outcome.

Responsibilities:
1. Ask the factory for an operation and schedule it as a task.
2. Race the task against the session deadline (the only suspension point).
3. Classify the completed attempt: operation fault (fatal or retryable) or
   predicate outcome (accepted or rejected).
4. Restart immediately on rejection while the deadline allows it.
5. Cancel the in-flight task when the deadline or the caller interrupts the
   session, without waiting longer than the configured grace for it.
6. Build Metrics once, at termination.

The attempt loop itself is a tenacity `AsyncRetrying` with no wait, a retry
condition covering rejections and retryable faults, and a stop condition
bound to the deadline gate.
"""

from __future__ import annotations

import asyncio
import uuid
from datetime import timedelta
from typing import Any, Generator, Generic, NoReturn, Optional, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    retry_if_result,
    wait_none,
)

from restartable.adapters.fault_policies import RetryAllFaults
from restartable.adapters.logging_adapter import LoggingAdapter
from restartable.core.config import RestartConfig
from restartable.core.exceptions import InvalidOutcomeError, RestartTimeoutError
from restartable.core.interfaces.fault_policy import FaultPolicyPort
from restartable.core.interfaces.logging import LoggingPort
from restartable.core.interfaces.operation import OperationFactory, Predicate
from restartable.core.logging_config import session_id_var
from restartable.core.managers.deadline_gate import DeadlineGate
from restartable.core.models.metrics import Metrics, Success
from restartable.core.models.outcome import Accepted, PredicateOutcome, Rejected

R = TypeVar("R")


def _coerce_config(deadline: float | timedelta | RestartConfig) -> RestartConfig:
    if isinstance(deadline, RestartConfig):
        return deadline
    return RestartConfig(deadline=deadline)


def _rejection(retry_state: RetryCallState) -> Rejected[Any]:
    """The rejection recorded for a finished attempt (a retryable fault counts)."""
    outcome = retry_state.outcome
    if outcome.failed:
        return Rejected(reason=outcome.exception())
    return outcome.result()


class Restartable(Generic[R]):
    """Restarts operations from `factory` until `predicate` accepts a value.

    The object is awaitable; every `await` (or `run()` call) is an independent
    session with its own deadline gate and metrics:

        success = await Restartable(fetch, is_ready, deadline=2.0)
        success.value, success.metrics.restart_count

    Terminal outcomes:
        * ``Success`` is returned when the predicate accepts a value.
        * ``RestartTimeoutError`` is raised when the deadline elapses first.
        * The operation's own exception is raised unchanged when the fault
          policy classifies it as fatal.

    Attributes:
        config: Immutable session configuration (deadline, cancel grace)
    """

    def __init__(
        self,
        factory: OperationFactory[Any],
        predicate: Predicate[Any],
        deadline: float | timedelta | RestartConfig,
        *,
        fault_policy: Optional[FaultPolicyPort] = None,
        logger: Optional[LoggingPort] = None,
    ) -> None:
        self._factory = factory
        self._predicate = predicate
        self.config = _coerce_config(deadline)
        self._fault_policy = fault_policy or RetryAllFaults()
        self._logger = logger or LoggingAdapter("restartable")

    def __await__(self) -> Generator[Any, None, Success[R]]:
        return self.run().__await__()

    async def run(self) -> Success[R]:
        """Run one session; see the class docstring for terminal outcomes."""
        loop = asyncio.get_running_loop()
        gate = DeadlineGate(self.config.deadline, loop.time)
        token = session_id_var.set(uuid.uuid4().hex[:12])
        try:
            return await self._drive(gate)
        finally:
            session_id_var.reset(token)

    async def _drive(self, gate: DeadlineGate) -> Success[R]:
        self._logger.debug(
            "[session:start] deadline=%.3fs", self.config.deadline.total_seconds()
        )

        def expire(retry_state: RetryCallState) -> NoReturn:
            # Rejected after expiry: the attempt is terminal, not a restart
            restart_count = retry_state.attempt_number - 1
            metrics = Metrics(elapsed=gate.elapsed(), restart_count=restart_count)
            last_rejection = _rejection(retry_state)
            self._logger.debug(
                "[session:timeout] last attempt rejected restarts=%s elapsed=%.3fs reason=%r",
                restart_count,
                metrics.elapsed_seconds,
                last_rejection.reason,
            )
            raise RestartTimeoutError(
                metrics, self.config.deadline, last_rejection=last_rejection
            )

        retrying = AsyncRetrying(
            wait=wait_none(),
            retry=(
                retry_if_result(lambda outcome: isinstance(outcome, Rejected))
                | retry_if_exception(self._is_retryable_fault)
            ),
            stop=lambda retry_state: gate.expired(),
            before_sleep=self._log_restart,
            retry_error_callback=expire,
        )

        async for attempt in retrying:
            restart_count = attempt.retry_state.attempt_number - 1
            task = asyncio.ensure_future(self._factory())

            if not await self._race(task, gate):
                metrics = Metrics(elapsed=gate.elapsed(), restart_count=restart_count)
                await self._abandon(task)
                self._logger.debug(
                    "[session:timeout] in-flight attempt cancelled restarts=%s elapsed=%.3fs",
                    restart_count,
                    metrics.elapsed_seconds,
                )
                raise RestartTimeoutError(metrics, self.config.deadline)

            with attempt:
                value = task.result()
            if not attempt.retry_state.outcome.failed:
                attempt.retry_state.set_result(self._evaluate(value))

        accepted: Accepted[R] = attempt.retry_state.outcome.result()
        metrics = Metrics(
            elapsed=gate.elapsed(),
            restart_count=attempt.retry_state.attempt_number - 1,
        )
        self._logger.debug(
            "[session:accepted] restarts=%s elapsed=%.3fs",
            metrics.restart_count,
            metrics.elapsed_seconds,
        )
        return Success(value=accepted.value, metrics=metrics)

    async def _race(self, task: asyncio.Future, gate: DeadlineGate) -> bool:
        """Wait until `task` is done or the deadline expires.

        Returns True if the task finished by the time the controller resumed,
        including when it finished on the same loop turn as the expiry.
        """
        try:
            await asyncio.wait({task}, timeout=gate.remaining())
        except asyncio.CancelledError:
            await self._abandon(task)
            raise
        return task.done()

    async def _abandon(self, task: asyncio.Future) -> None:
        """Cancel `task`, giving it at most `cancel_grace` to unwind.

        An operation that is still running after the grace (slow cleanup, or
        one that suppresses the cancellation) is left to finish on its own;
        its outcome is collected by a done callback and discarded.
        """
        task.cancel()
        grace = self.config.cancel_grace.total_seconds()
        await asyncio.wait({task}, timeout=grace)
        if task.done():
            self._reap(task)
            return
        self._logger.debug(
            "[attempt:abandoned] operation still unwinding after %.3fs grace", grace
        )
        task.add_done_callback(self._reap)

    def _reap(self, task: asyncio.Future) -> None:
        if not task.cancelled() and task.exception() is not None:
            self._logger.debug(
                "[attempt:abandoned] operation raised while cancelling error=%r",
                task.exception(),
            )

    def _is_retryable_fault(self, exc: BaseException) -> bool:
        if isinstance(exc, Exception) and not self._fault_policy.is_fatal(exc):
            return True
        self._logger.debug("[session:fatal] operation error=%r", exc)
        return False

    def _log_restart(self, retry_state: RetryCallState) -> None:
        self._logger.debug(
            "[session:restart] restarts=%s reason=%r",
            retry_state.attempt_number,
            _rejection(retry_state).reason,
        )

    def _evaluate(self, value: Any) -> PredicateOutcome:
        outcome = self._predicate(value)
        if not isinstance(outcome, (Accepted, Rejected)):
            raise InvalidOutcomeError(outcome)
        return outcome


async def restart(
    factory: OperationFactory[Any],
    predicate: Predicate[Any],
    deadline: float | timedelta | RestartConfig,
    *,
    fault_policy: Optional[FaultPolicyPort] = None,
    logger: Optional[LoggingPort] = None,
) -> Success[Any]:
    """Run a single retry session; functional form of `Restartable`."""
    return await Restartable(
        factory,
        predicate,
        deadline,
        fault_policy=fault_policy,
        logger=logger,
    ).run()
