"""Background keep-alive loop for live streams.

The ARGUS TV server stops a live stream that is not signalled as in use
for a while. This loop calls a tick function on a fixed cadence for the
lifetime of the adapter.

Usage:
    loop = KeepAliveScheduler(stream_service.keep_streams_alive, interval_seconds=30)
    loop.start()
    # ... application runs ...
    loop.stop()
"""

import logging
import threading
from collections.abc import Callable
from datetime import UTC, datetime

from arguslive.core.cancellation import CancelSignal

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 30.0


class KeepAliveScheduler:
    """Daemon thread running tick(cancel) every interval_seconds.

    The stop event is handed to tick as its cancel signal, so stop()
    interrupts a tick between remote calls. Exceptions from tick are logged
    and never end the loop. No backoff.
    """

    def __init__(
        self,
        tick: Callable[[CancelSignal], None],
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
    ):
        if interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive: {interval_seconds}")
        self._tick = tick
        self._interval = interval_seconds
        self._thread: threading.Thread | None = None
        self._stop_event = threading.Event()
        self._lock = threading.Lock()
        self._running = False
        self._last_run: datetime | None = None

    @property
    def is_running(self) -> bool:
        return self._running and self._thread is not None and self._thread.is_alive()

    @property
    def last_run(self) -> datetime | None:
        """Time the last tick finished."""
        return self._last_run

    @property
    def interval_seconds(self) -> float:
        return self._interval

    def start(self) -> bool:
        """Start the loop.

        Returns:
            True if started, False if already running or a previous thread
            has not exited yet
        """
        with self._lock:
            if self._thread is not None and self._thread.is_alive():
                return False

            self._stop_event.clear()
            self._running = True
            self._thread = threading.Thread(
                target=self._run_loop,
                name="argus-keepalive",
                daemon=True,
            )
            self._thread.start()
        logger.info("[KEEPALIVE] Started (every %.0fs)", self._interval)
        return True

    def stop(self, timeout: float = 10.0) -> bool:
        """Stop the loop.

        Returns:
            True if stopped, False if the thread did not finish in time
        """
        with self._lock:
            self._running = False
            thread = self._thread
            if thread is None or not thread.is_alive():
                return True

            self._stop_event.set()
            thread.join(timeout=timeout)
            if thread.is_alive():
                logger.warning("[KEEPALIVE] Thread did not stop in time")
                return False

        logger.info("[KEEPALIVE] Stopped")
        return True

    def run_once(self) -> None:
        """Run one tick in the calling thread."""
        self._run_tick()

    def _run_loop(self) -> None:
        # wait() returns True once stop() sets the event
        while not self._stop_event.wait(self._interval):
            self._run_tick()

    def _run_tick(self) -> None:
        try:
            self._tick(self._stop_event)
        except Exception as e:
            logger.exception("[KEEPALIVE] Tick failed: %s", e)
        finally:
            self._last_run = datetime.now(UTC)
