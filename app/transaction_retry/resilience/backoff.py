"""Randomized exponential backoff between transaction retries.

The n-th retry uses ``wait_times[n-1]`` as its base delay and 32 seconds
once the list is exhausted. With fuzz enabled the delay is drawn uniformly
from ``[base - f, base + f]`` where ``f = max(base * 0.25, 1)``; a delay at
or below zero means no wait at all.
"""

import random
from typing import Callable, Sequence

SATURATION_DELAY_SECONDS = 32


def base_delay(retry_count: int, wait_times: Sequence[float]) -> float:
    """Return the un-fuzzed delay for the given 1-based retry count."""
    if retry_count < 1:
        raise ValueError("retry_count must be at least 1")
    index = retry_count - 1
    if index < len(wait_times):
        return wait_times[index]
    return SATURATION_DELAY_SECONDS


def compute_delay(
    retry_count: int,
    wait_times: Sequence[float],
    fuzz_enabled: bool = True,
    random_source: Callable[[], float] = random.random,
) -> float:
    """Return the delay in seconds for a retry, possibly negative when fuzzed."""
    seconds = base_delay(retry_count, wait_times)
    if fuzz_enabled:
        fuzz_factor = max(seconds * 0.25, 1)
        seconds += (random_source() * 2 - 1) * fuzz_factor
    return seconds