"""
Availability State

Process-wide record of the last successful poll. Written by the availability
checker, read by the status endpoint.
"""

import threading
from collections import namedtuple
from datetime import datetime, timezone

AvailabilityState = namedtuple("AvailabilityState", ["available", "last_polled"])


def utc_now():
    return datetime.now(timezone.utc)


class AvailabilityStore:
    """
    Lock-guarded holder for the current AvailabilityState.

    Readers get an immutable snapshot, so they never wait on a poll that is
    still in flight.
    """

    def __init__(self, available=False, last_polled=None):
        self._lock = threading.Lock()
        self._state = AvailabilityState(available, last_polled or utc_now())

    def get(self):
        with self._lock:
            return self._state

    def set(self, available, polled_at=None):
        state = AvailabilityState(bool(available), polled_at or utc_now())
        with self._lock:
            self._state = state
        return state
