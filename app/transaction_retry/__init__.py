"""Retry transactions that fail with serialization or deadlock errors.

Example:
    from transaction_retry import (
        RetryingTransactionExecutor,
        SQLAlchemyTransactionStore,
    )

    executor = RetryingTransactionExecutor(SQLAlchemyTransactionStore(session))
    executor.execute(lambda: session.add(QueuedJob(job="is fun!")))
"""

from transaction_retry.operations import (
    ErrorNameClassifier,
    ErrorTypeClassifier,
    ExecutionState,
    StopReason,
    TransactionOutcome,
)
from transaction_retry.persistence import (
    SQLAlchemyTransactionStore,
    TransactionalStore,
)
from transaction_retry.resilience import (
    PlainTransactionExecutor,
    RetryConfiguration,
    RetryingTransactionExecutor,
    configure,
    create_transaction_executor,
    get_default_configuration,
    reset_default_configuration,
    retrying_transaction,
    set_default_configuration,
)

__all__ = [
    "ErrorNameClassifier",
    "ErrorTypeClassifier",
    "ExecutionState",
    "StopReason",
    "TransactionOutcome",
    "TransactionalStore",
    "SQLAlchemyTransactionStore",
    "PlainTransactionExecutor",
    "RetryConfiguration",
    "RetryingTransactionExecutor",
    "configure",
    "create_transaction_executor",
    "get_default_configuration",
    "reset_default_configuration",
    "retrying_transaction",
    "set_default_configuration",
]
