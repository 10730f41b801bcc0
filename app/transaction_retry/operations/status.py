"""Execution state and stop reason enumerations."""

from enum import Enum


class ExecutionState(Enum):
    """States of a single retrying execution.

    Attributes:
        RUNNING: The unit-of-work is being executed
        RETRYING: A classified failure occurred and the executor is backing off
        SUCCEEDED: The unit-of-work returned normally (terminal)
        FAILED_TERMINAL: A non-retryable condition was reached (terminal)
    """

    RUNNING = "running"
    RETRYING = "retrying"
    SUCCEEDED = "succeeded"
    FAILED_TERMINAL = "failed_terminal"

    @property
    def is_terminal(self) -> bool:
        return self in (ExecutionState.SUCCEEDED, ExecutionState.FAILED_TERMINAL)


class StopReason(Enum):
    """Why the executor stopped retrying and propagated the original error.

    Attributes:
        NON_TRANSACTION_ERROR: Application error not reported by the store
        UNCLASSIFIED_TRANSACTION_ERROR: Transaction error matching no classifier
        RETRY_BUDGET_EXHAUSTED: Classified failure recurring past max_retries
        NESTED_TRANSACTION_NOT_RETRYABLE: Failure inside an outer transaction
        NO_RETRY_CLASSIFIERS_CONFIGURED: The effective retry_on list is empty
    """

    NON_TRANSACTION_ERROR = "non_transaction_error"
    UNCLASSIFIED_TRANSACTION_ERROR = "unclassified_transaction_error"
    RETRY_BUDGET_EXHAUSTED = "retry_budget_exhausted"
    NESTED_TRANSACTION_NOT_RETRYABLE = "nested_transaction_not_retryable"
    NO_RETRY_CLASSIFIERS_CONFIGURED = "no_retry_classifiers_configured"
