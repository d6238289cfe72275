import abc
from typing import Optional

from ..operation import Operation
from .common.execution import ExecutionHandle
from .common.http_config import HttpOverrides


class AsyncTransport(abc.ABC):
    @abc.abstractmethod
    async def connect(self):
        """Coroutine used to create a connection to the specified address"""
        raise NotImplementedError(
            "Any AsyncTransport subclass must implement connect method"
        )  # pragma: no cover

    @abc.abstractmethod
    async def close(self):
        """Coroutine used to Close an established connection"""
        raise NotImplementedError(
            "Any AsyncTransport subclass must implement close method"
        )  # pragma: no cover

    @abc.abstractmethod
    def execute(
        self,
        operation: Operation,
        overrides: Optional[HttpOverrides] = None,
    ) -> ExecutionHandle:
        """Start the execution of the provided operation on a remote server.

        The returned handle is already started. It can be awaited to get
        the outcome, or cancelled.
        """
        raise NotImplementedError(
            "Any AsyncTransport subclass must implement execute method"
        )  # pragma: no cover
