from typing import Protocol


class AlarmScheduler(Protocol):
    """One-shot named alarms.

    Creating an alarm with the name of a pending alarm replaces it. When an
    alarm fires, the scheduler calls back with its name.
    """

    def create(self, name: str, when_ms: float) -> None:
        """Schedules ``name`` to fire at or after epoch millisecond ``when_ms``."""
        ...

    def clear(self, name: str) -> bool:
        """Cancels a pending alarm.

        Returns:
            True if an alarm with that name was pending.
        """
        ...

    def clear_all(self) -> None:
        """Cancels every pending alarm."""
        ...
