"""
Injectable wall clock.

Times are integer milliseconds since the Unix epoch.
"""
import time
from typing import Callable

Clock = Callable[[], int]


def system_clock() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)
