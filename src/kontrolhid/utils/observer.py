"""Thread-safe observer list.

Keyboard events are delivered on the scheduler's worker thread while
observers come and go from the application thread. The list is guarded
by a lock that is released before any callback runs, so an observer
may unregister itself from inside its callback.
"""

import logging
from threading import Lock
from typing import Any

logger = logging.getLogger(__name__)


class ObserverManager[T: object]:
    """
    Ordered set of observers notified by method name.

    Example:
        ```python
        observers = ObserverManager[KontrolObserver](observer_type_name="kontrol")
        observers.register(printer)
        observers.notify("on_kontrol_event", event)
        ```
    """

    def __init__(self, lock: Lock | None = None, observer_type_name: str = "observer"):
        """
        Args:
            lock: Lock to share with the owner, or None for a private one
            observer_type_name: Used in log messages ("kontrol observer ...")
        """
        self._observers: list[T] = []
        self._lock = lock or Lock()
        self._name = observer_type_name

    def register(self, observer: T) -> None:
        """Add `observer`; registering twice has no effect."""
        with self._lock:
            if observer in self._observers:
                logger.debug(f"{self._name} observer already registered: {observer}")
                return
            self._observers.append(observer)
        logger.info(f"Registered {self._name} observer: {observer}")

    def unregister(self, observer: T) -> None:
        with self._lock:
            if observer not in self._observers:
                logger.warning(f"Attempted to unregister unknown {self._name} observer: {observer}")
                return
            self._observers.remove(observer)
        logger.debug(f"Unregistered {self._name} observer: {observer}")

    def notify(self, method: str, *args: Any, **kwargs: Any) -> None:
        """
        Call `method` on every observer registered at the time of the call.

        A failing observer is logged and skipped; the rest are still called.
        """
        with self._lock:
            snapshot = tuple(self._observers)

        for observer in snapshot:
            callback = getattr(observer, method, None)
            if callback is None:
                logger.error(f"{self._name} observer {observer} has no method '{method}'")
                continue
            try:
                callback(*args, **kwargs)
            except Exception as e:
                logger.error(
                    f"Error notifying {self._name} observer {observer} via {method}: {e}",
                    exc_info=True,
                )

    def clear(self) -> None:
        with self._lock:
            count = len(self._observers)
            self._observers.clear()
        if count:
            logger.info(f"Cleared {count} {self._name} observer(s)")

    def __contains__(self, observer: T) -> bool:
        with self._lock:
            return observer in self._observers

    def __len__(self) -> int:
        with self._lock:
            return len(self._observers)
