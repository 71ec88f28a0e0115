"""
Helpers shared by the entity services.

Counter emission is best effort: a failing metrics sink is logged and
otherwise ignored so it can never change the outcome of an operation.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from ..core.metrics import CounterSink

logger = logging.getLogger(__name__)


def utc_now() -> str:
    """Current instant as an ISO-8601 UTC string with microseconds."""
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


class BaseService:
    def __init__(self, metrics: CounterSink, clock: Optional[Callable[[], str]] = None) -> None:
        self.metrics = metrics
        self.clock = clock or utc_now

    def _count(self, name: str) -> None:
        try:
            self.metrics.increment(name)
        except Exception:
            logger.warning("Failed to increment counter %s", name, exc_info=True)

    def _touch(self, previous: Optional[str]) -> str:
        # Timestamps share one ISO format, so string order is time order.
        # Never move ``updated_at`` backwards if the clock steps back.
        now = self.clock()
        if previous is not None and previous > now:
            return previous
        return now
