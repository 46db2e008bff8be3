# coding: utf-8

"""
Activity Indicator

Process-wide reentrant counter reporting whether any face login operation is
talking to the network. Listeners (typically a UI busy indicator) are told when
the first operation starts and when the last one finishes, so overlapping
operations keep the indicator active until all of them complete.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Callable, List, Optional

ActivityListener = Callable[[bool], None]


class ActivityIndicator:
    """Reentrant network activity counter with change listeners"""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._count = 0
        self._lock = threading.RLock()
        self._listeners: List[ActivityListener] = []

    @property
    def count(self) -> int:
        with self._lock:
            return self._count

    @property
    def is_active(self) -> bool:
        with self._lock:
            return self._count > 0

    def add_listener(self, listener: ActivityListener):
        """Register a callback invoked with True/False on activity changes"""
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def remove_listener(self, listener: ActivityListener):
        """Unregister a previously added callback"""
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def begin(self):
        """Mark one more operation in flight"""
        with self._lock:
            self._count += 1
            if self._count == 1:
                self._notify(True)

    def end(self):
        """Mark one operation finished; never drops below zero"""
        with self._lock:
            self._count -= 1
            if self._count <= 0:
                self._count = 0
                self._notify(False)

    @contextmanager
    def track(self):
        """Bracket a block with begin()/end(), including error exits"""
        self.begin()
        try:
            yield self
        finally:
            self.end()

    def reset(self):
        """Force the counter back to idle"""
        with self._lock:
            was_active = self._count > 0
            self._count = 0
            if was_active:
                self._notify(False)

    def _notify(self, is_active: bool):
        # Held under the lock so listeners observe transitions in order
        for listener in list(self._listeners):
            try:
                listener(is_active)
            except Exception as e:
                self.logger.error(f"Activity listener {listener!r} failed: {e}")


default_indicator = ActivityIndicator()


def get_activity_indicator() -> ActivityIndicator:
    """Return the process-wide activity indicator"""
    return default_indicator
