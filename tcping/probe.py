"""TCP handshake prober for tcping."""

import logging
import socket
import time
from typing import Protocol

from tcping.models import Endpoint, ProbeFailure, ProbeOutcome, ProbeSuccess

logger = logging.getLogger(__name__)


class Prober(Protocol):
    """Protocol defining the interface for probe implementations."""

    def attempt(self, endpoint: Endpoint, timeout: float | None = None) -> ProbeOutcome:
        """Make one timed connection attempt against the endpoint."""
        ...


def describe_os_error(exc: OSError) -> str:
    """Extract the human-readable cause from a socket error.

    Uses strerror where the OS supplied one, falling back to the exception
    text. A bare socket timeout carries neither, so it maps to "timed out".
    """
    if exc.strerror:
        return exc.strerror
    text = str(exc)
    if text:
        return text
    if isinstance(exc, TimeoutError):
        return "timed out"
    return type(exc).__name__


class TcpProber:
    """Prober that measures how long the TCP three-way handshake takes.

    Every attempt opens its own socket, connects under the socket timeout
    and closes the socket straight away. Nothing is sent over the connection
    and it is never reused.
    """

    def __init__(self, timeout_s: float = 4):
        """Initialize prober with the default connect timeout.

        Args:
            timeout_s: Maximum time to wait for the handshake in seconds.
        """
        if timeout_s <= 0:
            raise ValueError("timeout_s must be positive")

        self.timeout_s = timeout_s

        logger.debug("TcpProber initialized: timeout_s=%s", timeout_s)

    def attempt(self, endpoint: Endpoint, timeout: float | None = None) -> ProbeOutcome:
        """Connect to the endpoint once and time the handshake.

        Args:
            endpoint: Resolved address to connect to
            timeout: Per-call override of the connect timeout in seconds

        Returns:
            ProbeSuccess with elapsed milliseconds, or ProbeFailure with the cause
        """
        if timeout is None:
            timeout = self.timeout_s
        if timeout <= 0:
            raise ValueError("timeout must be positive")

        sock = socket.socket(endpoint.family, socket.SOCK_STREAM)
        try:
            sock.settimeout(timeout)
            start = time.perf_counter()
            try:
                sock.connect(endpoint.address)
            except OSError as e:
                elapsed_ms = (time.perf_counter() - start) * 1000.0
                cause = describe_os_error(e)
                logger.debug(
                    "Probe failed: endpoint=%s, after=%.3fms, error=%s", endpoint, elapsed_ms, cause
                )
                return ProbeFailure(cause)
            elapsed_ms = (time.perf_counter() - start) * 1000.0
        finally:
            sock.close()

        logger.debug("Probe completed: endpoint=%s, latency=%.3fms", endpoint, elapsed_ms)
        return ProbeSuccess(elapsed_ms)
