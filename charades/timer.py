"""Once-per-second countdown for time-limited games."""

from typing import Callable, Optional

from charades.errors import InvalidConfiguration
from charades.rules import TICK_INTERVAL_MS
from charades.scheduler import Scheduler, TaskHandle


class CountdownTimer:
    """Ticks every game-clock second until it reaches zero or is cancelled."""

    def __init__(
        self,
        scheduler: Scheduler,
        on_tick: Callable[[int], None],
        on_expired: Callable[[], None],
    ):
        self._scheduler = scheduler
        self._on_tick = on_tick
        self._on_expired = on_expired
        self._handle: Optional[TaskHandle] = None
        self._active = False
        self.remaining_seconds = 0

    @property
    def running(self) -> bool:
        return self._active

    def start(self, total_seconds: int) -> None:
        if total_seconds <= 0:
            raise InvalidConfiguration("total_seconds must be positive")
        self.cancel()
        self.remaining_seconds = total_seconds
        self._active = True
        self._schedule()

    def tick(self) -> None:
        """One elapsed second. Expires at zero, otherwise reports and reschedules."""
        if not self._active:
            return
        self._clear_handle()
        self.remaining_seconds -= 1
        if self.remaining_seconds <= 0:
            self._active = False
            self._on_expired()
            return
        self._on_tick(self.remaining_seconds)
        # on_tick may have cancelled us
        if self._active:
            self._schedule()

    def cancel(self) -> None:
        self._active = False
        self._clear_handle()

    def _schedule(self) -> None:
        self._handle = self._scheduler.call_later(TICK_INTERVAL_MS, self.tick)

    def _clear_handle(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
