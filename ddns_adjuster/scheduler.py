import logging
import signal
import threading

from ddns_adjuster.errors import DDNSError

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 300
STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class Scheduler:
    """Run a cycle every `interval` seconds on a background thread.

    The main thread waits for SIGINT/SIGTERM in run(). A stop request is only
    observed between cycles; a cycle that has already started runs to the end.
    With halt_on_error a failed cycle stops the loop, otherwise the error is
    logged and the next tick runs as usual.
    """

    def __init__(self, cycle, interval=DEFAULT_INTERVAL, halt_on_error=False, run_immediately=False):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.cycle = cycle
        self.interval = interval
        self.halt_on_error = halt_on_error
        self.run_immediately = run_immediately
        self.failed = False
        self._stop_event = threading.Event()
        self._thread = None

    def _run_cycle(self):
        try:
            self.cycle()
        except DDNSError as e:
            logger.error(f"check and update failed :- {e}")
            if self.halt_on_error:
                self.failed = True
                self._stop_event.set()
        except Exception:
            logger.exception("unexpected error during check and update, stopping")
            self.failed = True
            self._stop_event.set()

    def _loop(self):
        if self.run_immediately:
            self._run_cycle()
        while not self._stop_event.wait(self.interval):
            self._run_cycle()

    def start(self):
        self._thread = threading.Thread(target=self._loop, name='ddns-ticker', daemon=True)
        self._thread.start()

    def stop(self, timeout=None):
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
        logger.info("Stopped")

    def _handle_signal(self, signum, frame):
        logger.info(f"Received {signal.Signals(signum).name}")
        self._stop_event.set()

    def run(self, signals=STOP_SIGNALS):
        """Start ticking and block until a stop signal arrives.

        Returns 0 on a clean shutdown and 1 when a cycle failed with
        halt_on_error set. Must be called from the main thread.
        """
        previous = {signum: signal.signal(signum, self._handle_signal) for signum in signals}
        try:
            self.start()
            # short waits so the main thread keeps servicing signal handlers
            while not self._stop_event.wait(0.5):
                pass
        finally:
            # keep our handlers installed while the cycle in progress finishes
            self.stop()
            for signum, handler in previous.items():
                signal.signal(signum, handler)
        return 1 if self.failed else 0
