"""Clock abstraction for testing.

This module provides an ABC for reading a monotonic clock so that durations
measured by the process runner are deterministic in tests.
"""

import time
from abc import ABC, abstractmethod


class Time(ABC):
    """Abstract clock operations for dependency injection."""

    @abstractmethod
    def monotonic(self) -> float:
        """Return the current value of a monotonic clock, in seconds."""
        ...


class RealTime(Time):
    """Production implementation using time.monotonic()."""

    def monotonic(self) -> float:
        return time.monotonic()
