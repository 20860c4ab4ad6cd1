"""Warmup-then-interval probe scheduler for a single endpoint."""

import logging
from datetime import datetime

from PySide6.QtCore import QEventLoop, QObject, Qt, QThreadPool, QTimer, Signal

from tcping.models import Continuous, Count, Endpoint, ProbeEvent, RunMode
from tcping.probe import Prober
from tcping.workers import ProbeWorker

logger = logging.getLogger(__name__)

IDLE = "idle"
WARMUP = "warmup"
LOOPING = "looping"
DONE = "done"
CANCELLED = "cancelled"


class ProbeScheduler(QObject):
    """Issues one warmup probe, then timed probes at a fixed interval.

    Key features:
    - Strictly sequential: at most one connection attempt is in flight
    - Interval wait runs before every post-warmup probe; probe time adds to it
    - Count(n) mode stops after n probes, Continuous runs until cancel()
    - Generation ID discards a probe still in flight when the run is cancelled

    Every probe (warmup included) is emitted through probe_completed as soon
    as it finishes. The post-warmup outcomes are kept in history, which is
    emitted once through finished when the run is done or cancelled.

    Thread-safe: All state access on the Qt thread that owns the scheduler.
    """

    # Signals
    probe_completed = Signal(object)  # ProbeEvent
    finished = Signal(object)  # tuple of ProbeOutcome (the history)
    state_changed = Signal(str)

    def __init__(
        self,
        prober: Prober,
        endpoint: Endpoint,
        mode: RunMode | None = None,
        interval_ms: int = 1000,
        timeout_s: float = 4,
        clock=datetime.now,
        parent=None,
    ):
        """Initialize scheduler for one endpoint.

        Args:
            prober: Prober used for every attempt
            endpoint: Resolved target, fixed for the whole run
            mode: Count(n) or Continuous(); defaults to Count(4)
            interval_ms: Delay before each post-warmup probe in milliseconds
            timeout_s: Connect timeout per attempt in seconds
            clock: Callable read as each attempt starts, to stamp its event
            parent: Qt parent object
        """
        super().__init__(parent)

        if interval_ms < 0:
            raise ValueError("interval_ms must not be negative")
        if timeout_s <= 0:
            raise ValueError("timeout_s must be positive")

        self.prober = prober
        self.endpoint = endpoint
        self.mode = mode if mode is not None else Count(4)
        self.interval_ms = interval_ms
        self.timeout_s = timeout_s
        self._clock = clock

        self._state = IDLE
        self._history = []

        # Generation ID for invalidating a probe that outlives the run
        self._generation_id = 0
        self._in_flight = 0
        self._probe_started = None

        # Single worker thread keeps the probe stream sequential
        self.thread_pool = QThreadPool(self)
        self.thread_pool.setMaxThreadCount(1)

        # Timer for the interval wait before each probe
        self.timer = QTimer(self)
        self.timer.setSingleShot(True)
        self.timer.setTimerType(Qt.PreciseTimer)
        self.timer.timeout.connect(self._issue_probe)

    @property
    def state(self) -> str:
        return self._state

    @property
    def history(self) -> tuple:
        """Snapshot of post-warmup outcomes collected so far."""
        return tuple(self._history)

    @property
    def is_running(self) -> bool:
        return self._state in (WARMUP, LOOPING)

    @property
    def is_finished(self) -> bool:
        return self._state in (DONE, CANCELLED)

    @property
    def in_flight(self) -> bool:
        """True while a worker is still connecting, even a cancelled one."""
        return self._in_flight > 0

    def start(self):
        """Start the run with the warmup probe."""
        if self._state != IDLE:
            return

        mode_desc = "continuous" if isinstance(self.mode, Continuous) else f"count={self.mode.n}"
        logger.info(
            "Run started: endpoint=%s, %s, interval=%dms, timeout=%ss",
            self.endpoint,
            mode_desc,
            self.interval_ms,
            self.timeout_s,
        )

        self._set_state(WARMUP)
        self._issue_probe()

    def cancel(self):
        """Stop the run and publish the history collected so far.

        A pending interval wait is dropped and a probe still in flight is
        left uncounted. Does nothing once the run has finished.
        """
        if self.is_finished:
            return

        self.timer.stop()
        self._generation_id += 1  # Invalidate in-flight worker
        logger.info(
            "Run cancelled: %d probes recorded (generation_id=%d)",
            len(self._history),
            self._generation_id,
        )
        self._finish(CANCELLED)

    def run_blocking(self) -> tuple:
        """Run to completion in a local event loop and return the history."""
        loop = QEventLoop()
        self.finished.connect(loop.quit)
        try:
            self.start()
            if not self.is_finished:
                loop.exec()
        finally:
            self.finished.disconnect(loop.quit)
        return self.history

    def _set_state(self, state: str):
        logger.debug("State: %s -> %s", self._state, state)
        self._state = state
        self.state_changed.emit(state)

    def _issue_probe(self):
        """Hand one attempt to the worker thread."""
        if not self.is_running:
            return

        # Events are stamped with the time the attempt started
        self._probe_started = self._clock()
        worker = ProbeWorker(self.prober, self.endpoint, self.timeout_s, self._generation_id)
        worker.signals.outcome_ready.connect(self._on_outcome_ready)
        worker.signals.finished.connect(self._on_worker_finished)
        self._in_flight += 1

        self.thread_pool.start(worker)

    def _on_outcome_ready(self, outcome, generation_id: int):
        """Record and publish a finished probe, then schedule the next one.

        Args:
            outcome: ProbeOutcome from the worker
            generation_id: Generation ID when the worker was started
        """
        if generation_id != self._generation_id:
            logger.debug(
                "Ignoring stale outcome: generation_id=%d (current=%d)",
                generation_id,
                self._generation_id,
            )
            return

        if not self.is_running:
            return

        warmup = self._state == WARMUP
        if not warmup:
            self._history.append(outcome)

        self.probe_completed.emit(
            ProbeEvent(endpoint=self.endpoint, outcome=outcome, warmup=warmup, ts=self._probe_started)
        )

        # A receiver of probe_completed may have cancelled the run
        if not self.is_running:
            return

        if warmup:
            self._set_state(LOOPING)

        if self.mode.is_done(len(self._history)):
            logger.info("Run done: %d probes recorded", len(self._history))
            self._finish(DONE)
        else:
            self.timer.start(self.interval_ms)

    def _on_worker_finished(self, generation_id: int):
        self._in_flight = max(0, self._in_flight - 1)
        logger.debug("Worker finished: generation_id=%d", generation_id)

    def _finish(self, state: str):
        self._set_state(state)
        self.finished.emit(self.history)
