"""
One-shot named alarms on top of the running asyncio event loop.
"""

from __future__ import annotations

__all__ = ["LoopAlarms", "epoch_ms"]

import asyncio
import logging
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)


def epoch_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class LoopAlarms:
    """Named one-shot timers keyed by alarm name.

    Alarms live only as long as the event loop; entries that outlive the
    process are still caught by the caller's read-time expiry check.

    Args:
        on_alarm: Called with the alarm name when an alarm fires.
        clock: Returns the current time in epoch milliseconds.
    """

    def __init__(
        self,
        on_alarm: Callable[[str], object] | None = None,
        *,
        clock: Callable[[], float] = epoch_ms,
    ) -> None:
        self.on_alarm = on_alarm
        self._clock = clock
        self._handles: dict[str, asyncio.TimerHandle] = {}

    def create(self, name: str, when_ms: float) -> None:
        self.clear(name)
        delay = max(0.0, (when_ms - self._clock()) / 1000)
        loop = asyncio.get_running_loop()
        self._handles[name] = loop.call_later(delay, self._fire, name)
        logger.debug("Alarm %r set to fire in %.1fs", name, delay)

    def clear(self, name: str) -> bool:
        handle = self._handles.pop(name, None)
        if handle is None:
            return False
        handle.cancel()
        return True

    def clear_all(self) -> None:
        for handle in self._handles.values():
            handle.cancel()
        self._handles.clear()

    def pending(self) -> list[str]:
        """Names of alarms that have not fired yet."""
        return list(self._handles)

    def _fire(self, name: str) -> None:
        self._handles.pop(name, None)
        if self.on_alarm is not None:
            self.on_alarm(name)

    def __len__(self) -> int:
        return len(self._handles)
