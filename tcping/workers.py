"""Worker classes for running probes off the event-loop thread."""

import logging

from PySide6.QtCore import QObject, QRunnable, Signal

from tcping.models import Endpoint, ProbeFailure
from tcping.probe import Prober

logger = logging.getLogger(__name__)


class WorkerSignals(QObject):
    """Signals for communicating between worker threads and main thread."""

    outcome_ready = Signal(object, int)  # Emits (ProbeOutcome, generation_id)
    finished = Signal(int)  # Emits generation_id when worker completes


class ProbeWorker(QRunnable):
    """Worker that executes prober.attempt() in a background thread."""

    def __init__(self, prober: Prober, endpoint: Endpoint, timeout_s: float, generation_id: int):
        super().__init__()
        self.prober = prober
        self.endpoint = endpoint
        self.timeout_s = timeout_s
        self.generation_id = generation_id
        self.signals = WorkerSignals()

    def run(self):
        """Execute one probe attempt in a background thread."""
        try:
            logger.debug(
                "Worker starting: endpoint=%s, generation_id=%d", self.endpoint, self.generation_id
            )

            # Blocks for up to timeout_s while the handshake is pending
            outcome = self.prober.attempt(self.endpoint, self.timeout_s)

        except Exception as e:
            # A broken prober must not stall the run; report it as a failed probe
            logger.exception(
                "Worker exception: endpoint=%s, generation_id=%d, error=%s",
                self.endpoint,
                self.generation_id,
                str(e),
            )
            outcome = ProbeFailure(str(e) or type(e).__name__)

        try:
            self.signals.outcome_ready.emit(outcome, self.generation_id)
            logger.debug(
                "Worker completed: endpoint=%s, generation_id=%d, ok=%s",
                self.endpoint,
                self.generation_id,
                outcome.ok,
            )
        finally:
            # Always signal completion
            self.signals.finished.emit(self.generation_id)
