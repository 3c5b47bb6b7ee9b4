"""Protocol for the scheduler's time source."""

from typing import Protocol


class Clock(Protocol):
    """Monotonic time source that can suspend the caller."""

    def monotonic(self) -> float:
        """Return seconds from an arbitrary fixed origin."""
        ...

    async def sleep(self, seconds: float) -> None:
        """Suspend the caller for the given number of seconds."""
        ...
