"""
Operational alerts.

An alert is an ERROR level log line plus an increment of
``alerts.triggered.total`` and of a per type counter
``alerts.triggered.<type>``.  Like every other counter emission,
alerting is best effort and never raises.
"""

import logging

from ..core import metrics as m

logger = logging.getLogger(__name__)

DATABASE_CONNECTION = "DATABASE_CONNECTION"


class AlertService:
    """Service for raising operational alerts."""

    def __init__(self, metrics: m.CounterSink) -> None:
        self.metrics = metrics

    def log_alert(self, alert_type: str, message: str) -> None:
        try:
            self.metrics.increment(m.ALERTS_TRIGGERED)
            self.metrics.increment(f"alerts.triggered.{alert_type.lower()}")
        except Exception:
            logger.warning("Failed to record alert metrics for %s", alert_type, exc_info=True)
        logger.error("ALERT - Type: %s - Message: %s", alert_type, message)

    def alert_database_connection_issue(self, error: str) -> None:
        self.log_alert(DATABASE_CONNECTION, f"Database connection issue: {error}")
