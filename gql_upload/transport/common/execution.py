import asyncio
import enum
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generator, List, Optional

from graphql import ExecutionResult

log = logging.getLogger(__name__)


class ExecutionState(enum.Enum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class OutcomeKind(enum.Enum):
    SUCCESS = "success"
    PARTIAL_FAILURE = "partial_failure"
    FAILURE = "failure"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class ExecutionOutcome:
    """Terminal outcome of an execution.

    A PARTIAL_FAILURE carries both the GraphQL result received with
    the error and the error itself.
    """

    kind: OutcomeKind
    result: Optional[ExecutionResult] = None
    error: Optional[BaseException] = None

    def unwrap(self) -> ExecutionResult:
        """Return the result of a successful execution, raise otherwise."""
        if self.kind is OutcomeKind.SUCCESS:
            assert self.result is not None
            return self.result
        if self.kind is OutcomeKind.CANCELLED:
            raise asyncio.CancelledError()
        assert self.error is not None
        raise self.error


def partial_result_of(error: BaseException) -> Optional[ExecutionResult]:
    """GraphQL result carried by an error, if both data and errors are present.

    Empty data or empty errors still count as present.
    """
    result = getattr(error, "result", None)

    if isinstance(result, ExecutionResult):
        if result.data is not None and result.errors is not None:
            return result
    elif isinstance(result, dict):
        if result.get("data") is not None and result.get("errors") is not None:
            return ExecutionResult(
                data=result["data"],
                errors=result["errors"],
                extensions=result.get("extensions"),
            )

    return None


class ExecutionHandle:
    """Single-shot cancellable execution of a request.

    :meth:`start` sends the request at once in a new task. The handle can be
    awaited to get the :class:`ExecutionOutcome`, or observed with
    :meth:`subscribe`. :meth:`cancel` aborts the request if it has not
    settled yet, in which case no event is emitted.
    """

    def __init__(self, send: Callable[[], Awaitable[ExecutionResult]]):
        self._send = send
        self.state: ExecutionState = ExecutionState.IDLE
        self.aborted: bool = False
        self._task: Optional["asyncio.Task[None]"] = None
        self._outcome: Optional[ExecutionOutcome] = None
        self._observers: List[Any] = []
        self._torn_down: bool = False

    @property
    def settled(self) -> bool:
        return self._outcome is not None

    def start(self) -> "ExecutionHandle":
        if self.state is not ExecutionState.IDLE:
            raise RuntimeError("An execution can only be started once")

        self.state = ExecutionState.IN_FLIGHT
        self._task = asyncio.ensure_future(self._run())
        self._task.add_done_callback(self._on_task_done)
        return self

    def _on_task_done(self, task: "asyncio.Task[None]") -> None:
        # A task cancelled before its first step never enters _run
        if task.cancelled():
            self._settle(ExecutionOutcome(OutcomeKind.CANCELLED))

    def cancel(self) -> bool:
        """Abort the execution.

        Has no effect if the execution has already settled.

        :return: True if an in-flight request was aborted
        """
        if self.state is ExecutionState.IDLE:
            self._settle(ExecutionOutcome(OutcomeKind.CANCELLED))
            return False

        self._teardown()
        return self.aborted

    async def _run(self) -> None:
        try:
            result = await self._send()
        except asyncio.CancelledError:
            log.debug("Execution cancelled")
            self._settle(ExecutionOutcome(OutcomeKind.CANCELLED))
        except Exception as e:
            partial = partial_result_of(e)
            if partial is not None:
                self._settle(ExecutionOutcome(OutcomeKind.PARTIAL_FAILURE, partial, e))
            else:
                self._settle(ExecutionOutcome(OutcomeKind.FAILURE, error=e))
        else:
            self._settle(ExecutionOutcome(OutcomeKind.SUCCESS, result))
        finally:
            self._teardown()

    def _settle(self, outcome: ExecutionOutcome) -> None:
        if self._outcome is not None:
            return

        self._outcome = outcome
        self.state = {
            OutcomeKind.SUCCESS: ExecutionState.COMPLETED,
            OutcomeKind.PARTIAL_FAILURE: ExecutionState.FAILED,
            OutcomeKind.FAILURE: ExecutionState.FAILED,
            OutcomeKind.CANCELLED: ExecutionState.CANCELLED,
        }[outcome.kind]

        for observer in self._observers:
            self._notify(observer, outcome)
        self._observers.clear()

    def _teardown(self) -> None:
        if self._torn_down:
            return
        self._torn_down = True

        if not self.settled and self._task is not None and not self._task.done():
            self._abort()

    def _abort(self) -> None:
        assert self._task is not None
        log.debug("Aborting in-flight request")
        self.aborted = True
        self._task.cancel()

    def subscribe(
        self,
        on_next: Optional[Callable[[ExecutionResult], None]] = None,
        on_error: Optional[Callable[[BaseException], None]] = None,
        on_complete: Optional[Callable[[], None]] = None,
    ) -> None:
        """Observe the outcome as next / error / complete events.

        A successful result emits next then complete, a partial failure
        emits next then error, a failure emits error and a cancelled
        execution emits nothing.
        """
        observer = (on_next, on_error, on_complete)

        if self._outcome is not None:
            self._notify(observer, self._outcome)
        else:
            self._observers.append(observer)

    @staticmethod
    def _notify(observer, outcome: ExecutionOutcome) -> None:
        on_next, on_error, on_complete = observer

        if outcome.kind is OutcomeKind.CANCELLED:
            return

        # Exceptions raised by a callback are logged, the other callbacks
        # and observers are still notified
        try:
            if outcome.result is not None and on_next is not None:
                on_next(outcome.result)
        except Exception:
            log.exception("Exception in on_next observer callback")

        try:
            if outcome.kind is OutcomeKind.SUCCESS:
                if on_complete is not None:
                    on_complete()
            elif on_error is not None:
                assert outcome.error is not None
                on_error(outcome.error)
        except Exception:
            log.exception("Exception in terminal observer callback")

    async def outcome(self) -> ExecutionOutcome:
        if self._outcome is None:
            assert self._task is not None, "Execution not started"
            try:
                await asyncio.shield(self._task)
            except asyncio.CancelledError:
                if not self._task.cancelled():
                    raise
                self._settle(ExecutionOutcome(OutcomeKind.CANCELLED))
        assert self._outcome is not None
        return self._outcome

    async def result(self) -> ExecutionResult:
        """Wait for the result, raising the error of a failed execution."""
        outcome = await self.outcome()
        return outcome.unwrap()

    def __await__(self) -> Generator[Any, None, ExecutionOutcome]:
        return self.outcome().__await__()
