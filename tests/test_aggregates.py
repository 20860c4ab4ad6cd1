"""Unit tests for tcping.aggregates."""

import pytest

from tcping.aggregates import average, maximum, minimum, summarize
from tcping.errors import EmptySequenceError
from tcping.models import ProbeFailure, ProbeSuccess


def ok(ms):
    return ProbeSuccess(ms)


def fail(cause="timed out"):
    return ProbeFailure(cause)


class TestGenericAggregates:
    """Test minimum/maximum/average helpers."""

    def test_floats(self):
        """Test aggregates over floats."""
        values = [10.0, 5.0, 20.0]
        assert minimum(values) == 5.0
        assert maximum(values) == 20.0
        assert average(values) == pytest.approx(35.0 / 3)

    def test_ints(self):
        """Test aggregates over ints."""
        assert minimum([3, 1, 2]) == 1
        assert maximum([3, 1, 2]) == 3
        assert average([1, 2]) == 1.5

    def test_single_value(self):
        """Test aggregates over a single value."""
        assert minimum([7.5]) == maximum([7.5]) == average([7.5]) == 7.5

    def test_accepts_iterators(self):
        """Aggregates consume one-shot iterators, not only lists."""
        assert maximum(x for x in (1.0, 4.0, 2.0)) == 4.0

    @pytest.mark.parametrize("func", [minimum, maximum, average])
    def test_empty_input_is_explicit_error(self, func):
        """Empty input raises EmptySequenceError."""
        with pytest.raises(EmptySequenceError):
            func([])

    @pytest.mark.parametrize("func", [minimum, maximum, average])
    def test_nan_rejected(self, func):
        """Test NaN input is rejected."""
        with pytest.raises(ValueError):
            func([1.0, float("nan")])


class TestSummarize:
    """Test summary computation over probe histories."""

    def test_empty_history(self):
        """Empty history reports zeros and no latency figures."""
        summary = summarize([])
        assert summary.sent == 0
        assert summary.received == 0
        assert summary.received_percent == 0
        assert summary.min_ms is None
        assert summary.max_ms is None
        assert summary.avg_ms is None

    def test_all_success(self):
        """Test summary when every probe succeeded."""
        summary = summarize([ok(10.0), ok(5.0), ok(20.0)])
        assert summary.sent == 3
        assert summary.received == 3
        assert summary.received_percent == 100
        assert summary.min_ms == 5.0
        assert summary.max_ms == 20.0
        assert summary.avg_ms == pytest.approx(11.666666, rel=1e-6)

    def test_all_failed(self):
        """Test summary when every probe failed."""
        summary = summarize([fail(), fail(), fail(), fail()])
        assert summary.sent == 4
        assert summary.received == 0
        assert summary.received_percent == 0
        assert not summary.has_latency

    def test_percent_truncates(self):
        """1 of 3 received is 33%, not 33.3 or 34."""
        summary = summarize([ok(1.0), fail(), fail()])
        assert summary.received_percent == 33

    def test_percent_two_of_three(self):
        """2 of 3 received truncates to 66%."""
        summary = summarize([ok(1.0), ok(2.0), fail()])
        assert summary.received_percent == 66

    def test_failures_do_not_affect_latency(self):
        """Failed probes count as sent but not in latency figures."""
        summary = summarize([fail(), ok(4.0), fail(), ok(2.0)])
        assert summary.received == 2
        assert summary.min_ms == 2.0
        assert summary.max_ms == 4.0
        assert summary.avg_ms == 3.0

    def test_sub_millisecond_precision_kept(self):
        """Sub-millisecond latencies are not rounded."""
        summary = summarize([ok(0.123), ok(0.127)])
        assert summary.min_ms == 0.123
        assert summary.avg_ms == pytest.approx(0.125)

    @pytest.mark.parametrize(
        "history",
        [
            [],
            [fail()],
            [ok(1.0)],
            [ok(1.0), fail(), ok(3.0), fail(), fail()],
            [ok(float(i)) for i in range(50)],
        ],
    )
    def test_counter_invariants(self, history):
        """Test sent/received/percent invariants hold for any history."""
        summary = summarize(history)
        assert summary.sent == len(history)
        assert 0 <= summary.received <= summary.sent
        assert isinstance(summary.received_percent, int)
        assert 0 <= summary.received_percent <= 100
        assert summary.has_latency == (summary.received > 0)
