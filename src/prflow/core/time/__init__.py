"""Clock abstraction."""

from prflow.core.time.abc import Time
from prflow.core.time.real import RealTime

__all__ = ["Time", "RealTime"]
