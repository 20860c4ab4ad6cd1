"""Data models for tcping probes and run results."""

import math
import socket
from dataclasses import dataclass
from datetime import datetime
from typing import Union


@dataclass(frozen=True)
class Endpoint:
    """A resolved TCP endpoint the prober connects to.

    IPv6 endpoints keep flowinfo and scope_id from resolution; link-local
    addresses cannot be connected to without the scope.
    """

    host: str
    port: int
    family: int = socket.AF_INET
    flowinfo: int = 0
    scope_id: int = 0

    def __post_init__(self):
        if not self.host:
            raise ValueError("Endpoint host cannot be empty")
        if not 0 < self.port < 65536:
            raise ValueError(f"Endpoint port out of range: {self.port}")

    @property
    def address(self) -> tuple:
        """Socket address tuple accepted by socket.connect()."""
        if self.family == socket.AF_INET6:
            return (self.host, self.port, self.flowinfo, self.scope_id)
        return (self.host, self.port)

    def __str__(self) -> str:
        if self.family == socket.AF_INET6:
            if self.scope_id and "%" not in self.host:
                return f"[{self.host}%{self.scope_id}]:{self.port}"
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


@dataclass(frozen=True)
class ProbeSuccess:
    """Handshake completed; latency is wall-clock milliseconds, unrounded."""

    latency_ms: float

    def __post_init__(self):
        if math.isnan(self.latency_ms) or self.latency_ms < 0:
            raise ValueError(f"latency_ms must be a non-negative number, got {self.latency_ms}")

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class ProbeFailure:
    """Handshake did not complete; cause is the underlying error text."""

    cause: str

    def __post_init__(self):
        if not self.cause:
            raise ValueError("ProbeFailure requires a cause")

    @property
    def ok(self) -> bool:
        return False


ProbeOutcome = Union[ProbeSuccess, ProbeFailure]


@dataclass(frozen=True)
class ProbeEvent:
    """A single probe result as handed to the presentation layer."""

    endpoint: Endpoint
    outcome: ProbeOutcome
    warmup: bool = False
    ts: datetime | None = None


@dataclass(frozen=True)
class Summary:
    """Aggregate statistics over one run's probe history.

    Latency figures are None when nothing was received.
    """

    sent: int
    received: int
    received_percent: int
    min_ms: float | None = None
    max_ms: float | None = None
    avg_ms: float | None = None

    def __post_init__(self):
        """Ensure the counters and latency figures agree with each other."""
        if not 0 <= self.received <= self.sent:
            raise ValueError(f"received ({self.received}) must be within 0..sent ({self.sent})")
        if not 0 <= self.received_percent <= 100:
            raise ValueError(f"received_percent out of range: {self.received_percent}")

        figures = (self.min_ms, self.max_ms, self.avg_ms)
        if self.received == 0 and any(f is not None for f in figures):
            raise ValueError("Latency figures must be absent when nothing was received")
        if self.received > 0 and any(f is None for f in figures):
            raise ValueError("Latency figures are required when probes were received")

    @property
    def has_latency(self) -> bool:
        return self.received > 0


@dataclass(frozen=True)
class Count:
    """Run exactly n timed probes after the warmup."""

    n: int

    def __post_init__(self):
        if self.n < 0:
            raise ValueError("Count must not be negative")

    def is_done(self, sent: int) -> bool:
        return sent >= self.n


@dataclass(frozen=True)
class Continuous:
    """Probe until cancelled from outside."""

    def is_done(self, sent: int) -> bool:
        return False


RunMode = Union[Count, Continuous]
