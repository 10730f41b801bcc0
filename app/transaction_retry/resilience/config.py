"""Retry policy configuration.

``RetryConfiguration`` is an immutable value. A process-level default is
built from the environment on first use; executors either receive an
explicit configuration or read the current default on every call.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Optional, Tuple, Union

from transaction_retry.configuration import TransactionRetrySettings, get_settings
from transaction_retry.operations.classifiers import (
    ClassifierLike,
    ErrorClassifier,
    normalize_classifiers,
)

DEFAULT_MAX_RETRIES = 3
DEFAULT_WAIT_TIMES: Tuple[float, ...] = (0, 1, 2, 4, 8, 16, 32)
DEFAULT_RETRY_ON: Tuple[str, ...] = ("SerializationFailure", "DeadlockDetected")


@dataclass(frozen=True)
class RetryConfiguration:
    """Configuration for retrying failed transactions.

    Attributes:
        retry_on: Ordered classifiers; the first match makes an error retryable
        max_retries: Retries allowed after the first attempt
        wait_times: Base delay in seconds for the 1st, 2nd, ... retry
        fuzz_enabled: Randomize each delay around its base
        auto_retry_enabled: Make the retrying executor the default entry point

    Example:
        # Default configuration
        config = RetryConfiguration()

        # Custom configuration
        config = RetryConfiguration(
            retry_on=[SerializationFailure, "DeadlockDetected"],
            max_retries=5,
            fuzz_enabled=False,
        )
    """

    retry_on: Tuple[ErrorClassifier, ...] = field(
        default_factory=lambda: normalize_classifiers(DEFAULT_RETRY_ON)
    )
    max_retries: int = DEFAULT_MAX_RETRIES
    wait_times: Tuple[float, ...] = DEFAULT_WAIT_TIMES
    fuzz_enabled: bool = True
    auto_retry_enabled: bool = False

    def __post_init__(self) -> None:
        """Normalize classifiers and validate configuration values."""
        object.__setattr__(self, "retry_on", normalize_classifiers(self.retry_on))
        object.__setattr__(self, "wait_times", tuple(self.wait_times))

        if isinstance(self.max_retries, bool) or not isinstance(self.max_retries, int):
            raise ValueError("max_retries must be an integer")
        if self.max_retries < 0:
            raise ValueError("max_retries must be non-negative")
        if any(seconds < 0 for seconds in self.wait_times):
            raise ValueError("wait_times must be non-negative")

    def with_overrides(
        self,
        retry_on: Union[ClassifierLike, Iterable[ClassifierLike], None] = None,
        max_retries: Optional[int] = None,
    ) -> "RetryConfiguration":
        """Merge call-site overrides over this configuration.

        A ``retry_on`` override replaces the configured classifiers rather
        than extending them. ``None`` keeps the configured value.
        """
        changes: dict[str, Any] = {}
        if retry_on is not None:
            changes["retry_on"] = normalize_classifiers(retry_on)
        if max_retries is not None:
            changes["max_retries"] = max_retries
        if not changes:
            return self
        return replace(self, **changes)

    @classmethod
    def from_settings(cls, settings: TransactionRetrySettings) -> "RetryConfiguration":
        """Build a configuration from environment settings."""
        return cls(
            retry_on=settings.retry_on,
            max_retries=settings.max_retries,
            wait_times=settings.wait_times,
            fuzz_enabled=settings.fuzz,
            auto_retry_enabled=settings.auto_retry,
        )


_default_configuration: Optional[RetryConfiguration] = None


def get_default_configuration() -> RetryConfiguration:
    """Return the process-level default configuration.

    Built from ``get_settings().retry`` the first time it is requested.
    """
    global _default_configuration
    if _default_configuration is None:
        _default_configuration = RetryConfiguration.from_settings(get_settings().retry)
    return _default_configuration


def set_default_configuration(configuration: RetryConfiguration) -> None:
    """Replace the process-level default configuration.

    Intended for application startup; concurrent reconfiguration is not
    synchronized.
    """
    global _default_configuration
    if not isinstance(configuration, RetryConfiguration):
        raise TypeError("configuration must be a RetryConfiguration")
    _default_configuration = configuration


def configure(**changes: Any) -> RetryConfiguration:
    """Replace the default configuration with an updated copy.

    Example:
        configure(max_retries=5, fuzz_enabled=False)
    """
    configuration = replace(get_default_configuration(), **changes)
    set_default_configuration(configuration)
    return configuration


def reset_default_configuration() -> None:
    """Forget the current default so it is rebuilt from settings."""
    global _default_configuration
    _default_configuration = None
