"""Clock abstraction so time-dependent code can be tested without waiting."""

from abc import ABC, abstractmethod


class Time(ABC):
    """Abstract clock."""

    @abstractmethod
    def now(self) -> float:
        """Current time in seconds (monotonic within one process)."""
        ...
