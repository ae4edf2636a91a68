"""Single worker thread running deferred tasks in order."""

import logging
import queue
import threading
from collections.abc import Callable

logger = logging.getLogger(__name__)

Task = Callable[[], None]

_STOP = object()


class TaskScheduler:
    """
    Runs tasks on one worker thread in FIFO order.

    Decoded keyboard events are dispatched through here so that the HID
    reader thread never waits for observer code. Delayed tasks are put on
    the queue by a timer once their delay has passed.
    """

    def __init__(self, name: str = "kontrolhid-scheduler"):
        self._name = name
        self._queue: queue.Queue = queue.Queue()
        self._worker: threading.Thread | None = None
        self._timers: set[threading.Timer] = set()
        # Guards _running, _timers and every put on the queue
        self._lock = threading.Lock()
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        with self._lock:
            if self._running:
                logger.warning("TaskScheduler is already running")
                return

            self._running = True
            self._worker = threading.Thread(target=self._run, name=self._name, daemon=True)
            self._worker.start()
        logger.debug("TaskScheduler started")

    def schedule(self, task: Task, delay_ms: int = 0) -> None:
        """
        Run `task` on the worker thread.

        Args:
            task: Function without arguments
            delay_ms: Minimum delay before the task runs (milliseconds)
        """
        with self._lock:
            if not self._running:
                logger.debug("Dropping task: scheduler not running")
                return

            if delay_ms <= 0:
                self._queue.put(task)
                return

            timer = threading.Timer(delay_ms / 1000, self._enqueue_delayed, args=(task,))
            timer.daemon = True
            self._timers.add(timer)
            timer.start()

    def stop(self, timeout: float = 1.0) -> None:
        """Cancel pending delayed tasks, run what is queued and join the worker."""
        with self._lock:
            if not self._running:
                return
            self._running = False

            for timer in self._timers:
                timer.cancel()
            self._timers.clear()

            # Nothing can be queued after this
            self._queue.put(_STOP)
            worker = self._worker
            self._worker = None

        if worker and worker is not threading.current_thread():
            worker.join(timeout=timeout)
        logger.debug("TaskScheduler stopped")

    def _enqueue_delayed(self, task: Task) -> None:
        with self._lock:
            # A timer cleared by stop() must not fire into a later start()
            timer = threading.current_thread()
            if self._running and timer in self._timers:
                self._timers.discard(timer)
                self._queue.put(task)

    def _run(self) -> None:
        while True:
            task = self._queue.get()
            if task is _STOP:
                break
            try:
                task()
            except Exception as e:
                logger.error(f"Error in scheduled task {task}: {e}", exc_info=True)

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
