"""Transaction retry settings."""

from typing import List

from pydantic import Field, field_validator

from transaction_retry.configuration.base import InfrastructureSettings


class TransactionRetrySettings(InfrastructureSettings):
    """Process-wide defaults for retrying failed transactions.

    These settings seed the default ``RetryConfiguration`` built at startup.
    Call sites may still override ``retry_on`` and ``max_retries`` per call.

    Environment Variables:
        TRANSACTION_RETRY_AUTO_RETRY: Use the retrying executor as the default
            transaction entry point (default: False)
        TRANSACTION_RETRY_MAX_RETRIES: Retries allowed after the first attempt
            (default: 3)
        TRANSACTION_RETRY_WAIT_TIMES: JSON list of base delays in seconds, one
            per retry (default: [0, 1, 2, 4, 8, 16, 32])
        TRANSACTION_RETRY_FUZZ: Randomize each delay (default: True)
        TRANSACTION_RETRY_RETRY_ON: JSON list of error type names treated as
            retryable (default: ["SerializationFailure", "DeadlockDetected"])

    Backoff:
        The n-th retry waits ``wait_times[n-1]`` seconds. Once the list is
        exhausted every further retry waits 32 seconds. With fuzz enabled the
        delay is drawn from ``[base - f, base + f]`` where
        ``f = max(base * 0.25, 1)``.

    Example:
        ```python
        from transaction_retry.configuration import get_settings

        settings = get_settings()
        max_retries = settings.retry.max_retries
        ```
    """

    auto_retry: bool = Field(
        default=False,
        alias="TRANSACTION_RETRY_AUTO_RETRY",
        description="Make the retrying executor the default transaction entry point",
    )
    max_retries: int = Field(
        default=3,
        alias="TRANSACTION_RETRY_MAX_RETRIES",
        description="Maximum retries after the first attempt",
    )
    wait_times: List[float] = Field(
        default_factory=lambda: [0, 1, 2, 4, 8, 16, 32],
        alias="TRANSACTION_RETRY_WAIT_TIMES",
        description="Base delay in seconds for each successive retry",
    )
    fuzz: bool = Field(
        default=True,
        alias="TRANSACTION_RETRY_FUZZ",
        description="Randomize backoff delays",
    )
    retry_on: List[str] = Field(
        default_factory=lambda: ["SerializationFailure", "DeadlockDetected"],
        alias="TRANSACTION_RETRY_RETRY_ON",
        description="Error type names eligible for retry",
    )

    @field_validator("max_retries")
    @classmethod
    def _validate_max_retries(cls, value: int) -> int:
        if value < 0:
            raise ValueError("max_retries must be non-negative")
        return value

    @field_validator("wait_times")
    @classmethod
    def _validate_wait_times(cls, value: List[float]) -> List[float]:
        if any(seconds < 0 for seconds in value):
            raise ValueError("wait_times must be non-negative")
        return value
