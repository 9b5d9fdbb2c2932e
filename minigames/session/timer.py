from __future__ import annotations

import logging
from collections.abc import Callable

from minigames.scheduler import Cancellable, Scheduler

logger = logging.getLogger(__name__)

TICK_SECONDS = 1.0


class TimerController:
    """Whole-session countdown, one tick per second.

    `on_tick(remaining)` runs after every tick; `on_expire()` runs once when the
    countdown reaches zero. After `cancel()` no further callbacks fire, even if a
    tick was already queued on the scheduler.
    """

    def __init__(
        self,
        *,
        seconds: int,
        scheduler: Scheduler,
        on_expire: Callable[[], None],
        on_tick: Callable[[int], None] | None = None,
    ) -> None:
        self.remaining: int | None = seconds if seconds > 0 else None
        self._scheduler = scheduler
        self._on_expire = on_expire
        self._on_tick = on_tick
        self._handle: Cancellable | None = None
        self._active = False

    @property
    def enabled(self) -> bool:
        return self.remaining is not None

    @property
    def active(self) -> bool:
        return self._active

    def start(self) -> None:
        if not self.enabled or self._active:
            return
        self._active = True
        self._schedule()

    def _schedule(self) -> None:
        self._handle = self._scheduler.call_later(TICK_SECONDS, self.tick)

    def tick(self) -> None:
        if not self._active or self.remaining is None:
            return
        self.remaining = max(0, self.remaining - 1)
        if self._on_tick is not None:
            self._on_tick(self.remaining)
        # on_tick may have finished the session and cancelled us.
        if not self._active:
            return
        if self.remaining == 0:
            self._active = False
            self._handle = None
            logger.debug("Session timer expired")
            self._on_expire()
            return
        self._schedule()

    def cancel(self) -> None:
        self._active = False
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
