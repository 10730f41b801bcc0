"""Per-invocation retry state and the retry decision."""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from transaction_retry.operations.classifiers import ErrorClassifier, match_classifier
from transaction_retry.operations.result import AttemptResult
from transaction_retry.operations.status import ExecutionState, StopReason
from transaction_retry.persistence.store import TransactionalStore


@dataclass(frozen=True)
class RetryDecision:
    """Whether a failed attempt is retried, and why not when it is not."""

    should_retry: bool
    stop_reason: Optional[StopReason] = None
    classifier: Optional[ErrorClassifier] = None

    @classmethod
    def retry(cls, classifier: ErrorClassifier) -> "RetryDecision":
        return cls(should_retry=True, classifier=classifier)

    @classmethod
    def stop(cls, reason: StopReason) -> "RetryDecision":
        return cls(should_retry=False, stop_reason=reason)


@dataclass
class ExecutionAttempt:
    """Retry state owned by a single ``execute`` invocation.

    Attributes:
        retry_on: Effective classifiers for this invocation
        max_retries: Effective retry budget for this invocation
        retry_count: Retries performed so far
        state: Current ExecutionState
        delays: Seconds slept before each retry
    """

    retry_on: Tuple[ErrorClassifier, ...]
    max_retries: int
    retry_count: int = 0
    state: ExecutionState = ExecutionState.RUNNING
    delays: List[float] = field(default_factory=list)

    def decide(self, result: AttemptResult, store: TransactionalStore) -> RetryDecision:
        """Decide whether the failed attempt is retried.

        Checks run in a fixed order: transaction-layer failure, retry budget,
        nesting, configured classifiers, classification.
        """
        error = result.error
        if error is None:
            raise ValueError("only failed attempts can be retried")

        if not store.is_transaction_error(error):
            return RetryDecision.stop(StopReason.NON_TRANSACTION_ERROR)
        if self.retry_count >= self.max_retries:
            return RetryDecision.stop(StopReason.RETRY_BUDGET_EXHAUSTED)
        # The failed boundary is closed by now; anything still open is an outer transaction.
        if store.open_transactions != 0:
            return RetryDecision.stop(StopReason.NESTED_TRANSACTION_NOT_RETRYABLE)
        if not self.retry_on:
            return RetryDecision.stop(StopReason.NO_RETRY_CLASSIFIERS_CONFIGURED)

        classifier = match_classifier(self.retry_on, error, result.cause)
        if classifier is None:
            return RetryDecision.stop(StopReason.UNCLASSIFIED_TRANSACTION_ERROR)
        return RetryDecision.retry(classifier)

    def begin_retry(self, delay: float) -> None:
        self.retry_count += 1
        self.delays.append(delay)
        self.state = ExecutionState.RETRYING
