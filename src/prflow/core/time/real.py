"""Production clock."""

import time

from prflow.core.time.abc import Time


class RealTime(Time):
    """Clock backed by time.monotonic()."""

    def now(self) -> float:
        return time.monotonic()
