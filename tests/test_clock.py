"""Tests for wall-clock to tick quantization."""

import pytest

from lanebattle.clock import TickClock


class TestTickClock:

    def test_first_call_primes(self):
        clock = TickClock(tick_ms=250)
        assert clock.consume(0.0) == 0
        assert clock.total_ticks == 0

    def test_remainder_carries_over(self):
        clock = TickClock(tick_ms=250)
        clock.consume(0.0)

        assert clock.consume(0.5) == 2
        assert clock.consume(0.625) == 0
        assert clock.consume(1.0) == 2
        assert clock.total_ticks == 4

    def test_start_sets_reference_point(self):
        clock = TickClock(tick_ms=250)
        clock.start(2.0)
        assert clock.consume(2.5) == 2

    def test_backlog_is_capped_and_dropped(self):
        clock = TickClock(tick_ms=1, max_ticks=10)
        clock.consume(0.0)

        assert clock.consume(1.0) == 10
        assert clock.consume(1.0) == 0

    def test_stop_and_reset(self):
        clock = TickClock(tick_ms=250)
        clock.consume(0.0)
        clock.stop()

        assert clock.stopped
        assert clock.consume(5.0) == 0

        clock.reset()
        assert not clock.stopped
        assert clock.consume(6.0) == 0
        assert clock.consume(6.5) == 2

    def test_time_going_backwards(self):
        clock = TickClock(tick_ms=250)
        clock.consume(1.0)
        assert clock.consume(0.5) == 0

    def test_invalid_tick_length(self):
        with pytest.raises(ValueError):
            TickClock(tick_ms=0)
