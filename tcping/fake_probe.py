"""Fake prober for tcping testing and simulation."""

import random
from collections import deque
from collections.abc import Iterable

from tcping.models import Endpoint, ProbeFailure, ProbeOutcome, ProbeSuccess


class FakeProber:
    """Generates simulated probe outcomes without touching the network.

    Scripted outcomes are returned first, in order; after that outcomes are
    drawn from a seeded random source.
    """

    def __init__(self, seed: int | None = None, script: Iterable[ProbeOutcome] | None = None):
        """Initialize with optional random seed and scripted outcomes."""
        # Isolated random instance so concurrent fakes don't share state
        self._random = random.Random(seed)
        self._script = deque(script or ())
        self.calls = []

        # Simulation parameters
        self.base_latency = 15.0  # Base handshake latency in ms
        self.latency_variance = 3.0
        self.failure_probability = 0.02
        self.failure_cause = "connection timed out"

    def attempt(self, endpoint: Endpoint, timeout: float | None = None) -> ProbeOutcome:
        """Return the next scripted outcome, or a simulated one."""
        self.calls.append(endpoint)

        if self._script:
            return self._script.popleft()

        if self._random.random() < self.failure_probability:
            return ProbeFailure(self.failure_cause)

        latency = self.base_latency + self._random.gauss(0, self.latency_variance)
        return ProbeSuccess(max(0.1, latency))
