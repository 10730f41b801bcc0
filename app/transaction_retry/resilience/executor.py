"""Transaction executors.

``PlainTransactionExecutor`` runs a unit-of-work once inside a transaction
boundary. ``RetryingTransactionExecutor`` re-runs it from scratch when the
store reports a retryable statement failure, backing off between attempts.
"""

import random
import time
from typing import Any, Callable, Iterable, Optional, Union

from transaction_retry.logging import get_module_logger
from transaction_retry.operations.classifiers import ClassifierLike
from transaction_retry.operations.result import AttemptResult, TransactionOutcome
from transaction_retry.operations.status import ExecutionState, StopReason
from transaction_retry.persistence.store import TransactionalStore
from transaction_retry.resilience.attempt import ExecutionAttempt
from transaction_retry.resilience.backoff import compute_delay
from transaction_retry.resilience.config import (
    RetryConfiguration,
    get_default_configuration,
)

logger = get_module_logger()

UnitOfWork = Callable[[], Any]


def ordinal(number: int) -> str:
    """Format a count as 1st, 2nd, 3rd, 4th, ..."""
    if 10 <= number % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")
    return f"{number}{suffix}"


class PlainTransactionExecutor:
    """Run a unit-of-work in a single transaction, without retrying."""

    def __init__(self, store: TransactionalStore) -> None:
        self.store = store

    def execute(self, unit_of_work: UnitOfWork) -> Any:
        with self.store.transaction():
            return unit_of_work()


class RetryingTransactionExecutor:
    """Run a unit-of-work in a transaction and retry classified failures.

    The unit-of-work is invoked again from scratch on every retry, so it must
    be safe to re-run. Retries only happen for errors the store reports as
    statement failures, that match a configured classifier, and that were not
    raised inside an outer transaction.

    Attributes:
        store: TransactionalStore providing the transaction boundary
        configuration: Explicit RetryConfiguration, or None to read the
            process default on every call
        sleep: Function used to wait between attempts
        random_source: Returns floats in [0, 1) for delay fuzzing

    Example:
        executor = RetryingTransactionExecutor(SQLAlchemyTransactionStore(session))

        def transfer():
            debit(session, source, amount)
            credit(session, target, amount)

        executor.execute(transfer, max_retries=5)
    """

    def __init__(
        self,
        store: TransactionalStore,
        configuration: Optional[RetryConfiguration] = None,
        sleep: Callable[[float], None] = time.sleep,
        random_source: Callable[[], float] = random.random,
    ) -> None:
        self.store = store
        self.configuration = configuration
        self.sleep = sleep
        self.random_source = random_source

    def execute(
        self,
        unit_of_work: UnitOfWork,
        retry_on: Union[ClassifierLike, Iterable[ClassifierLike], None] = None,
        max_retries: Optional[int] = None,
    ) -> Any:
        """Execute the unit-of-work, retrying classified transaction failures.

        Args:
            unit_of_work: Zero-argument callable run inside the transaction
            retry_on: Classifier, exception type, type name, or a list of
                them. Replaces the configured classifiers for this call.
            max_retries: Retry budget for this call

        Returns:
            The unit-of-work's return value

        Raises:
            Exception: The original error of the last attempt, unchanged
        """
        return self.execute_with_outcome(
            unit_of_work, retry_on=retry_on, max_retries=max_retries
        ).unwrap()

    def execute_with_outcome(
        self,
        unit_of_work: UnitOfWork,
        retry_on: Union[ClassifierLike, Iterable[ClassifierLike], None] = None,
        max_retries: Optional[int] = None,
    ) -> TransactionOutcome:
        """Execute the unit-of-work and report the outcome instead of raising.

        Takes the same arguments as ``execute``.

        Returns:
            TransactionOutcome with the value or the original error, the
            retry count, the slept delays and the stop reason
        """
        configuration = (
            self.configuration
            if self.configuration is not None
            else get_default_configuration()
        ).with_overrides(retry_on=retry_on, max_retries=max_retries)
        attempt = ExecutionAttempt(
            retry_on=configuration.retry_on,
            max_retries=configuration.max_retries,
        )

        while True:
            attempt.state = ExecutionState.RUNNING
            result = self._run_once(unit_of_work)

            if result.is_success:
                attempt.state = ExecutionState.SUCCEEDED
                if attempt.retry_count:
                    logger.info(
                        "transaction_retry_succeeded",
                        retry_count=attempt.retry_count,
                    )
                return TransactionOutcome.succeeded(
                    result.value,
                    retry_count=attempt.retry_count,
                    delays=attempt.delays,
                )

            decision = attempt.decide(result, self.store)
            if not decision.should_retry:
                attempt.state = ExecutionState.FAILED_TERMINAL
                self._log_stop(result, attempt, decision.stop_reason)
                return TransactionOutcome.failed(
                    result,
                    decision.stop_reason,
                    retry_count=attempt.retry_count,
                    delays=attempt.delays,
                )

            delay = compute_delay(
                attempt.retry_count + 1,
                configuration.wait_times,
                fuzz_enabled=configuration.fuzz_enabled,
                random_source=self.random_source,
            )
            slept = delay if delay > 0 else 0.0
            attempt.begin_retry(slept)
            logger.warning(
                "transaction_retry_scheduled",
                retry_count=attempt.retry_count,
                retry_ordinal=ordinal(attempt.retry_count),
                delay_seconds=slept,
                error_type=type(result.error).__name__,
                classifier=str(decision.classifier),
            )
            if slept:
                self.sleep(slept)

    def _run_once(self, unit_of_work: UnitOfWork) -> AttemptResult:
        try:
            with self.store.transaction():
                value = unit_of_work()
        except Exception as error:
            return AttemptResult.failure(error, self.store.underlying_cause(error))
        return AttemptResult.success(value)

    def _log_stop(
        self,
        result: AttemptResult,
        attempt: ExecutionAttempt,
        reason: Optional[StopReason],
    ) -> None:
        if reason == StopReason.NON_TRANSACTION_ERROR:
            logger.debug(
                "transaction_error_not_retryable",
                error_type=type(result.error).__name__,
            )
            return
        log = logger.warning if reason == StopReason.RETRY_BUDGET_EXHAUSTED else logger.info
        log(
            "transaction_retry_stopped",
            reason=reason.value if reason else None,
            retry_count=attempt.retry_count,
            max_retries=attempt.max_retries,
            error_type=type(result.error).__name__,
            error=str(result.error),
        )
