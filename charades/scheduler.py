"""Cooperative single-threaded task queue driven by a game clock."""

import heapq
import itertools
from typing import Callable


class TaskHandle:
    """Returned by Scheduler.call_later; cancel() keeps the callback from running."""

    __slots__ = ("due_ms", "callback", "cancelled")

    def __init__(self, due_ms: int, callback: Callable[[], None]):
        self.due_ms = due_ms
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class Scheduler:
    """
    Runs delayed callbacks in due-time order as the host moves the clock
    forward. Callbacks run to completion one at a time; a callback may
    schedule further tasks, which run in the same advance() if they fall due
    inside the window.
    """

    def __init__(self, now_ms: int = 0):
        self.now_ms = now_ms
        self._queue: list[tuple[int, int, TaskHandle]] = []
        self._counter = itertools.count()

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TaskHandle:
        if delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")
        handle = TaskHandle(self.now_ms + delay_ms, callback)
        heapq.heappush(self._queue, (handle.due_ms, next(self._counter), handle))
        return handle

    def advance(self, elapsed_ms: int) -> int:
        """Move the clock forward and run every task that falls due. Returns tasks run."""
        if elapsed_ms < 0:
            raise ValueError("elapsed_ms must be >= 0")
        target = self.now_ms + elapsed_ms
        ran = self._run_until(target)
        self.now_ms = target
        return ran

    def run_pending(self) -> int:
        """Run tasks already due at the current time."""
        return self._run_until(self.now_ms)

    def pending_count(self) -> int:
        return sum(1 for _, _, h in self._queue if not h.cancelled)

    def _run_until(self, target: int) -> int:
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            due_ms, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self.now_ms = due_ms
            handle.cancelled = True
            handle.callback()
            ran += 1
        return ran
