"""Retrying transaction execution.

Architecture:
- RetryConfiguration: Immutable retry policy with a process-level default
- ExecutionAttempt: Per-invocation retry state and retry decision
- compute_delay: Randomized exponential backoff
- RetryingTransactionExecutor / PlainTransactionExecutor: Entry points
- create_transaction_executor: Picks the executor from configuration

Usage:
    from transaction_retry.persistence import SQLAlchemyTransactionStore
    from transaction_retry.resilience import RetryingTransactionExecutor

    executor = RetryingTransactionExecutor(SQLAlchemyTransactionStore(session))
    executor.execute(lambda: session.add(QueuedJob(job="report")))
"""

from transaction_retry.resilience.attempt import ExecutionAttempt, RetryDecision
from transaction_retry.resilience.backoff import (
    SATURATION_DELAY_SECONDS,
    base_delay,
    compute_delay,
)
from transaction_retry.resilience.config import (
    RetryConfiguration,
    configure,
    get_default_configuration,
    reset_default_configuration,
    set_default_configuration,
)
from transaction_retry.resilience.decorators import retrying_transaction
from transaction_retry.resilience.executor import (
    PlainTransactionExecutor,
    RetryingTransactionExecutor,
)
from transaction_retry.resilience.factory import create_transaction_executor

__all__ = [
    # Configuration
    "RetryConfiguration",
    "configure",
    "get_default_configuration",
    "set_default_configuration",
    "reset_default_configuration",
    # Backoff
    "SATURATION_DELAY_SECONDS",
    "base_delay",
    "compute_delay",
    # Execution
    "ExecutionAttempt",
    "RetryDecision",
    "RetryingTransactionExecutor",
    "PlainTransactionExecutor",
    "create_transaction_executor",
    "retrying_transaction",
]
