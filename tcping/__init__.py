"""tcping: TCP handshake latency measurement."""

__version__ = "0.9.9"
