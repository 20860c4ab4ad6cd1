"""Terminal output for tcping: per-probe lines and the final summary."""

import os
import sys

from tcping.errors import format_error
from tcping.models import ProbeEvent, ProbeSuccess, Summary

# ANSI color escape sequences
GREEN = "\033[32m"
RED = "\033[31m"
YELLOW = "\033[33m"
CYAN = "\033[36m"
BOLD = "\033[1m"
RESET = "\033[0m"


def color_supported(stream) -> bool:
    """Colour only real terminals, and never when NO_COLOR is set."""
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class ConsoleReporter:
    """Writes probe events and the summary to a text stream.

    Each probe line is flushed as soon as the event arrives. show_time
    switches the "> " prefix for a [HH:MM:SS] timestamp, as used for
    continuous runs.
    """

    def __init__(self, stream=None, color: bool | None = None, show_time: bool = False):
        self.stream = stream if stream is not None else sys.stdout
        self.color = color_supported(self.stream) if color is None else color
        self.show_time = show_time

    def _style(self, text: str, *codes: str) -> str:
        if not self.color or not codes:
            return text
        return "".join(codes) + text + RESET

    def _write(self, text: str):
        self.stream.write(text)
        self.stream.flush()

    def format_prefix(self, event: ProbeEvent) -> str:
        """Line prefix: "> addr: " or "[HH:MM:SS] addr: " with a warmup tag."""
        label = f"{event.endpoint} (warmup)" if event.warmup else str(event.endpoint)
        if self.show_time and event.ts is not None:
            return f"[{event.ts:%H:%M:%S}] {label}: "
        return f"> {label}: "

    def format_outcome(self, event: ProbeEvent) -> str:
        outcome = event.outcome
        if isinstance(outcome, ProbeSuccess):
            return self._style(f"{outcome.latency_ms:.2f}", GREEN, BOLD) + " ms"
        return self._style(format_error(outcome.cause), CYAN)

    def report_probe(self, event: ProbeEvent):
        """Write one complete probe line."""
        self._write(self.format_prefix(event) + self.format_outcome(event) + "\n")

    def format_percent(self, percent: int) -> str:
        text = f"{percent}%"
        if percent == 100:
            return self._style(text, GREEN, BOLD)
        if percent == 0:
            return self._style(text, RED, BOLD)
        return self._style(text, YELLOW)

    def format_summary(self, summary: Summary) -> list[str]:
        """Summary lines in psping layout; latency line only when something was received."""
        lines = [
            f"  Sent = {summary.sent}, Received = {summary.received} "
            f"({self.format_percent(summary.received_percent)})"
        ]
        if summary.has_latency:
            lines.append(
                f"  Minimum = {summary.min_ms:.2f}ms, Maximum = {summary.max_ms:.2f}ms, "
                f"Average = {summary.avg_ms:.2f}ms"
            )
        return lines

    def report_summary(self, summary: Summary):
        """Write the summary block; nothing at all when no probe was sent."""
        if summary.sent == 0:
            return
        self._write("\n" + "\n".join(self.format_summary(summary)) + "\n")

    def report_error(self, message: str):
        self._write(f"{self._style('Error:', RED, BOLD)} {message}\n")
