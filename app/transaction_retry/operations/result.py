"""Result types for transaction attempts and executions.

``AttemptResult`` describes one run of a unit-of-work inside a transaction
boundary. ``TransactionOutcome`` describes the whole retrying execution and
is what ``RetryingTransactionExecutor.execute_with_outcome`` returns.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from transaction_retry.operations.status import ExecutionState, StopReason


@dataclass(frozen=True)
class AttemptResult:
    """Outcome of a single attempt.

    Attributes:
        value: Return value of the unit-of-work on success
        error: Exception raised by the attempt, if any
        cause: Underlying error wrapped by ``error``, as reported by the store
    """

    value: Any = None
    error: Optional[Exception] = None
    cause: Optional[BaseException] = None

    @property
    def is_success(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Any = None) -> "AttemptResult":
        return cls(value=value)

    @classmethod
    def failure(
        cls, error: Exception, cause: Optional[BaseException] = None
    ) -> "AttemptResult":
        return cls(error=error, cause=cause)


@dataclass
class TransactionOutcome:
    """Final outcome of a retrying execution.

    Attributes:
        state: Terminal ExecutionState (SUCCEEDED or FAILED_TERMINAL)
        value: Return value of the last attempt on success
        error: Original error of the last attempt on failure
        cause: Underlying cause of ``error``, if any
        retry_count: Number of retries performed
        stop_reason: Why retrying stopped (failures only)
        delays: Seconds actually slept before each retry
    """

    state: ExecutionState
    value: Any = None
    error: Optional[Exception] = None
    cause: Optional[BaseException] = None
    retry_count: int = 0
    stop_reason: Optional[StopReason] = None
    delays: List[float] = field(default_factory=list)

    @property
    def is_success(self) -> bool:
        """Helper property to check if the execution succeeded.

        Returns:
            True if state is SUCCEEDED, False otherwise
        """
        return self.state == ExecutionState.SUCCEEDED

    @property
    def attempts(self) -> int:
        """Number of times the unit-of-work was invoked."""
        return self.retry_count + 1

    @classmethod
    def succeeded(
        cls,
        value: Any = None,
        retry_count: int = 0,
        delays: Optional[List[float]] = None,
    ) -> "TransactionOutcome":
        """Create a SUCCEEDED outcome.

        Args:
            value: Return value of the unit-of-work
            retry_count: Retries performed before the successful attempt
            delays: Seconds slept before each retry

        Returns:
            TransactionOutcome with SUCCEEDED state
        """
        return cls(
            state=ExecutionState.SUCCEEDED,
            value=value,
            retry_count=retry_count,
            delays=list(delays or []),
        )

    @classmethod
    def failed(
        cls,
        attempt: AttemptResult,
        stop_reason: StopReason,
        retry_count: int = 0,
        delays: Optional[List[float]] = None,
    ) -> "TransactionOutcome":
        """Create a FAILED_TERMINAL outcome from the last failed attempt.

        Args:
            attempt: The failed AttemptResult carrying the original error
            stop_reason: Why no further retry was made
            retry_count: Retries performed before giving up
            delays: Seconds slept before each retry

        Returns:
            TransactionOutcome with FAILED_TERMINAL state
        """
        if attempt.error is None:
            raise ValueError("a failed outcome requires an attempt with an error")
        return cls(
            state=ExecutionState.FAILED_TERMINAL,
            error=attempt.error,
            cause=attempt.cause,
            retry_count=retry_count,
            stop_reason=stop_reason,
            delays=list(delays or []),
        )

    def unwrap(self) -> Any:
        """Return the value, or raise the original error unchanged."""
        if self.error is not None:
            raise self.error
        return self.value
