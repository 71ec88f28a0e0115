"""
In-process counters for operational metrics.

Services receive a ``CounterSink`` and call ``increment(name)`` on it;
they never reach for a process wide registry themselves.  The
application wires a ``MetricsRegistry`` instance, tests usually pass a
spy.  Counter names follow a ``<resource>.<event>.total`` scheme.
"""

import threading
from typing import Dict, Protocol


class CounterSink(Protocol):
    def increment(self, name: str) -> None:
        ...


USERS_CREATED = "users.created.total"
USERS_UPDATED = "users.updated.total"
USERS_DELETED = "users.deleted.total"
USERS_NOT_FOUND = "users.not_found.total"
USERS_EMAIL_CONFLICT = "users.email_conflict.total"

PRODUCTS_CREATED = "products.created.total"
PRODUCTS_UPDATED = "products.updated.total"
PRODUCTS_DELETED = "products.deleted.total"
PRODUCTS_NOT_FOUND = "products.not_found.total"

ALERTS_TRIGGERED = "alerts.triggered.total"

DEFAULT_COUNTERS: Dict[str, str] = {
    USERS_CREATED: "Total number of users created",
    USERS_UPDATED: "Total number of users updated",
    USERS_DELETED: "Total number of users deleted",
    USERS_NOT_FOUND: "Total number of user not found errors",
    USERS_EMAIL_CONFLICT: "Total number of email conflict errors",
    PRODUCTS_CREATED: "Total number of products created",
    PRODUCTS_UPDATED: "Total number of products updated",
    PRODUCTS_DELETED: "Total number of products deleted",
    PRODUCTS_NOT_FOUND: "Total number of product not found errors",
    ALERTS_TRIGGERED: "Total number of alerts triggered",
}


class MetricsRegistry:
    """Thread-safe registry of named monotonic counters.

    Known counters are registered with a description up front so that
    they are reported as zero before the first increment.  Incrementing
    an unknown name registers it on the fly.
    """

    def __init__(self, counters: Dict[str, str] | None = None) -> None:
        self._lock = threading.Lock()
        self._values: Dict[str, int] = {}
        self._descriptions: Dict[str, str] = {}
        for name, description in (counters if counters is not None else DEFAULT_COUNTERS).items():
            self.register(name, description)

    def register(self, name: str, description: str = "") -> None:
        with self._lock:
            self._values.setdefault(name, 0)
            self._descriptions[name] = description

    def increment(self, name: str, amount: int = 1) -> None:
        if amount < 0:
            raise ValueError("Counters can only be incremented")
        with self._lock:
            self._values[name] = self._values.get(name, 0) + amount

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._values

    def get(self, name: str) -> int:
        with self._lock:
            return self._values.get(name, 0)

    def describe(self, name: str) -> str:
        return self._descriptions.get(name, "")

    def snapshot(self) -> Dict[str, int]:
        """Return a copy of all counter values keyed by name."""
        with self._lock:
            return dict(sorted(self._values.items()))
