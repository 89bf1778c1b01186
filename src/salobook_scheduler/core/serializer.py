'''
Runs async operations one at a time, in the order they were enqueued.
'''
import asyncio
from collections import deque
from typing import Awaitable, Callable, TypeVar

from ..common.logger import log
from ..models.enums import SerializerState

T = TypeVar("T")


class Serializer:
    """
    A FIFO, single-flight task queue.

    IDLE --enqueue--> RUNNING (runs at once)
    RUNNING --enqueue--> RUNNING (waits in the queue)
    RUNNING --operation settles--> RUNNING with the next queued operation,
                                   or IDLE when the queue is empty

    Every caller gets back its own operation's result or exception. A
    failing operation does not affect the ones queued behind it.
    """
    def __init__(self, name: str = "serializer"):
        self.name = name
        self._state = SerializerState.IDLE
        self._waiting: deque[asyncio.Future] = deque()

    @property
    def state(self) -> SerializerState:
        return self._state

    @property
    def pending(self) -> int:
        """Number of operations waiting for their turn."""
        return sum(1 for turn in self._waiting if not turn.done())

    async def enqueue(self, operation: Callable[[], Awaitable[T]]) -> T:
        if self._state == SerializerState.RUNNING:
            turn = asyncio.get_running_loop().create_future()
            self._waiting.append(turn)
            try:
                await turn
            except asyncio.CancelledError:
                # the turn was already handed to us, pass it on
                if turn.done() and not turn.cancelled():
                    self._hand_off()
                raise
        else:
            self._state = SerializerState.RUNNING

        try:
            return await operation()
        except Exception as e:
            log.warning(f"[{self.name}] queued operation failed: {e}")
            raise
        finally:
            self._hand_off()

    def _hand_off(self) -> None:
        """Wakes the next live waiter, or goes IDLE when there is none."""
        while self._waiting:
            turn = self._waiting.popleft()
            if not turn.done():
                # state stays RUNNING, ownership moves to the waiter
                turn.set_result(None)
                return
        self._state = SerializerState.IDLE
