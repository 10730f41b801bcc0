"""Unit tests for retry backoff computation."""

import pytest

from transaction_retry.resilience.backoff import (
    SATURATION_DELAY_SECONDS,
    base_delay,
    compute_delay,
)

WAIT_TIMES = (0, 1, 2, 4, 8, 16, 32)


@pytest.mark.unit
class TestBaseDelay:
    @pytest.mark.parametrize(
        "retry_count,expected", [(1, 0), (2, 1), (3, 2), (4, 4), (7, 32)]
    )
    def test_uses_wait_times_by_retry_count(self, retry_count, expected):
        assert base_delay(retry_count, WAIT_TIMES) == expected

    def test_saturates_at_constant_beyond_wait_times(self):
        assert base_delay(8, WAIT_TIMES) == SATURATION_DELAY_SECONDS
        assert base_delay(3, (5, 10)) == 32

    def test_saturation_ignores_last_wait_time(self):
        assert base_delay(2, (100,)) == 32

    def test_empty_wait_times_saturate(self):
        assert base_delay(1, ()) == 32

    def test_rejects_retry_count_below_one(self):
        with pytest.raises(ValueError):
            base_delay(0, WAIT_TIMES)


@pytest.mark.unit
class TestComputeDelay:
    def test_without_fuzz_returns_base(self):
        assert compute_delay(3, WAIT_TIMES, fuzz_enabled=False) == 2
        assert compute_delay(4, WAIT_TIMES, fuzz_enabled=False) == 4

    def test_fuzz_factor_has_minimum_of_one_second(self):
        assert compute_delay(2, WAIT_TIMES, random_source=lambda: 0.0) == 0
        assert compute_delay(2, WAIT_TIMES, random_source=lambda: 1.0) == 2

    def test_fuzz_factor_is_quarter_of_base(self):
        assert compute_delay(6, WAIT_TIMES, random_source=lambda: 0.0) == 12
        assert compute_delay(6, WAIT_TIMES, random_source=lambda: 1.0) == 20

    def test_fuzz_at_midpoint_returns_base(self):
        assert compute_delay(5, WAIT_TIMES, random_source=lambda: 0.5) == 8

    def test_fuzzed_zero_base_may_be_negative(self):
        assert compute_delay(1, WAIT_TIMES, random_source=lambda: 0.0) == -1

    def test_fuzzed_delay_within_bounds(self):
        for value in (0.0, 0.1, 0.37, 0.5, 0.9, 0.999):
            delay = compute_delay(8, WAIT_TIMES, random_source=lambda: value)
            assert 24 <= delay <= 40
