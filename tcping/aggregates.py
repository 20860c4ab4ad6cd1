"""Summary statistics over a run's probe history."""

import logging
import math
from collections.abc import Iterable, Sequence
from typing import TypeVar

from tcping.errors import EmptySequenceError
from tcping.models import ProbeOutcome, ProbeSuccess, Summary

logger = logging.getLogger(__name__)

# Totally ordered, summable numbers (NaN is rejected at runtime).
Number = TypeVar("Number", int, float)


def _checked(values: Iterable[Number], name: str) -> list[Number]:
    items = list(values)
    if not items:
        raise EmptySequenceError(f"{name}() of an empty sequence")
    for value in items:
        if isinstance(value, float) and math.isnan(value):
            raise ValueError(f"{name}() is undefined for NaN")
    return items


def minimum(values: Iterable[Number]) -> Number:
    """Smallest of values; raises EmptySequenceError when there are none."""
    items = _checked(values, "minimum")
    result = items[0]
    for value in items[1:]:
        if value < result:
            result = value
    return result


def maximum(values: Iterable[Number]) -> Number:
    """Largest of values; raises EmptySequenceError when there are none."""
    items = _checked(values, "maximum")
    result = items[0]
    for value in items[1:]:
        if value > result:
            result = value
    return result


def average(values: Iterable[Number]) -> float:
    """Arithmetic mean of values; raises EmptySequenceError when there are none."""
    items = _checked(values, "average")
    return sum(items) / len(items)


def summarize(history: Sequence[ProbeOutcome]) -> Summary:
    """Reduce a probe history to a Summary.

    Failed probes count towards ``sent`` only. When nothing was sent the
    percentage is 0, and latency figures are left out whenever nothing was
    received.

    Args:
        history: Post-warmup probe outcomes in chronological order

    Returns:
        Summary with truncated integer received_percent
    """
    sent = len(history)
    latencies = [outcome.latency_ms for outcome in history if isinstance(outcome, ProbeSuccess)]
    received = len(latencies)

    if sent == 0:
        return Summary(sent=0, received=0, received_percent=0)

    percent = received * 100 // sent

    if not latencies:
        logger.debug("Summary: sent=%d, received=0", sent)
        return Summary(sent=sent, received=0, received_percent=percent)

    summary = Summary(
        sent=sent,
        received=received,
        received_percent=percent,
        min_ms=minimum(latencies),
        max_ms=maximum(latencies),
        avg_ms=average(latencies),
    )
    logger.debug(
        "Summary: sent=%d, received=%d (%d%%), min=%.3fms, max=%.3fms, avg=%.3fms",
        summary.sent,
        summary.received,
        summary.received_percent,
        summary.min_ms,
        summary.max_ms,
        summary.avg_ms,
    )
    return summary
