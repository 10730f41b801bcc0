"""Factory for choosing the transaction executor based on configuration."""

from typing import Any, Optional, Union

import structlog

from transaction_retry.persistence.store import TransactionalStore
from transaction_retry.resilience.config import (
    RetryConfiguration,
    get_default_configuration,
)
from transaction_retry.resilience.executor import (
    PlainTransactionExecutor,
    RetryingTransactionExecutor,
)

logger = structlog.get_logger()


def create_transaction_executor(
    store: TransactionalStore,
    configuration: Optional[RetryConfiguration] = None,
    **executor_options: Any,
) -> Union[RetryingTransactionExecutor, PlainTransactionExecutor]:
    """Create the default transaction executor for a store.

    Args:
        store: TransactionalStore the executor opens transactions on
        configuration: Optional RetryConfiguration. If None, uses the
            process default.
        **executor_options: Passed to RetryingTransactionExecutor
            (``sleep``, ``random_source``)

    Returns:
        RetryingTransactionExecutor when ``auto_retry_enabled`` is set,
        otherwise PlainTransactionExecutor

    Examples:
        >>> executor = create_transaction_executor(store)
        >>> executor = create_transaction_executor(
        ...     store, RetryConfiguration(auto_retry_enabled=True)
        ... )
    """
    if configuration is None:
        configuration = get_default_configuration()

    if configuration.auto_retry_enabled:
        logger.info(
            "creating_retrying_transaction_executor",
            max_retries=configuration.max_retries,
        )
        return RetryingTransactionExecutor(store, configuration, **executor_options)

    logger.info("creating_plain_transaction_executor")
    return PlainTransactionExecutor(store)
