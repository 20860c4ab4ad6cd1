"""Command-line front end for tcping."""

import argparse
import logging
import os
import signal

from PySide6.QtCore import QCoreApplication, QTimer

from tcping import __version__
from tcping.aggregates import summarize
from tcping.config import DEFAULT_COUNT, RunConfig
from tcping.console import ConsoleReporter
from tcping.errors import ConfigError, TcpingError
from tcping.fake_probe import FakeProber
from tcping.models import Continuous, Endpoint, Summary
from tcping.probe import Prober, TcpProber
from tcping.resolver import resolve
from tcping.scheduler import ProbeScheduler

logger = logging.getLogger(__name__)

# How often the Qt loop hands control back so Python can run the SIGINT handler
SIGNAL_POLL_MS = 100


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tcping",
        description=f"TCP ping utility v{__version__}: times TCP handshakes to host:port.",
    )
    parser.add_argument(
        "target",
        help='TCP ping target in "host:port" format (i.e. google.com:80)',
    )
    parser.add_argument(
        "-t",
        "--continuous",
        action="store_true",
        help="Ping until stopped with Ctrl+C",
    )
    parser.add_argument(
        "-n",
        "--count",
        help="Number of TCP requests (not counting warmup) to send; the default is 4",
    )
    parser.add_argument(
        "-i",
        "--interval",
        help="Interval (in milliseconds) between requests; the default is 1000",
    )
    parser.add_argument(
        "-w",
        "--timeout",
        help="Connect timeout (in seconds) for each request; the default is 4",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _parse_int(value: str | None, name: str, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"Invalid {name}.") from None


def config_from_args(args: argparse.Namespace) -> RunConfig:
    """Build and validate a RunConfig from parsed arguments."""
    defaults = RunConfig.defaults_from_env()
    config = RunConfig(
        target=args.target,
        continuous=args.continuous,
        count=_parse_int(args.count, "count", DEFAULT_COUNT),
        interval_ms=_parse_int(args.interval, "interval", defaults["interval_ms"]),
        timeout_s=_parse_int(args.timeout, "timeout", defaults["timeout_s"]),
        color=not args.no_color,
    )
    return config.validate()


def select_prober(timeout_s: float) -> Prober:
    """Real TCP prober unless TCPING_PROBER=fake asks for simulated data."""
    if os.environ.get("TCPING_PROBER", "").lower() == "fake":
        logger.info("Using FakeProber (TCPING_PROBER=fake)")
        return FakeProber()
    return TcpProber(timeout_s=timeout_s)


def run(config: RunConfig, endpoint: Endpoint, prober: Prober, reporter: ConsoleReporter) -> Summary:
    """Probe the endpoint until the run is done or interrupted.

    SIGINT cancels the scheduler instead of raising KeyboardInterrupt, so the
    history collected so far still reaches the summary.
    """
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])

    scheduler = ProbeScheduler(
        prober,
        endpoint,
        mode=config.mode,
        interval_ms=config.interval_ms,
        timeout_s=config.timeout_s,
    )
    scheduler.probe_completed.connect(reporter.report_probe)

    def on_sigint(signum, frame):
        logger.info("Interrupt received, cancelling run")
        scheduler.cancel()

    # Periodic no-op wakeup so the Python signal handler gets to run
    heartbeat = QTimer()
    heartbeat.timeout.connect(lambda: None)
    heartbeat.start(SIGNAL_POLL_MS)

    previous_handler = signal.signal(signal.SIGINT, on_sigint)
    try:
        history = scheduler.run_blocking()
    finally:
        signal.signal(signal.SIGINT, previous_handler)
        heartbeat.stop()

    summary = summarize(history)
    reporter.report_summary(summary)
    return summary


def main(argv=None) -> int:
    """Run tcping and return the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    reporter = ConsoleReporter(color=False if args.no_color else None)

    try:
        config = config_from_args(args)
        reporter.color = reporter.color and config.color
        reporter.show_time = isinstance(config.mode, Continuous)
        endpoint = resolve(config.target)
        prober = select_prober(config.timeout_s)
    except TcpingError as e:
        logger.debug("Run aborted before probing: %s", e)
        reporter.report_error(str(e))
        return 1

    run(config, endpoint, prober, reporter)
    return 0
