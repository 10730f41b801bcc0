"""Unit tests for ExecutionAttempt retry decisions."""

import pytest

from tests.factories.transactions import (
    CustomError,
    FakeTransactionStore,
    make_statement_error,
)
from transaction_retry.operations.classifiers import (
    ErrorNameClassifier,
    normalize_classifiers,
)
from transaction_retry.operations.result import AttemptResult
from transaction_retry.operations.status import ExecutionState, StopReason
from transaction_retry.resilience.attempt import ExecutionAttempt, RetryDecision


def _failure(error):
    return AttemptResult.failure(error, getattr(error, "orig", None))


@pytest.fixture
def attempt():
    return ExecutionAttempt(
        retry_on=normalize_classifiers(["SerializationFailure"]),
        max_retries=2,
    )


@pytest.mark.unit
class TestExecutionAttempt:
    def test_starts_running_with_zero_retries(self, attempt):
        assert attempt.state == ExecutionState.RUNNING
        assert attempt.retry_count == 0
        assert attempt.delays == []

    def test_decides_retry_for_classified_error(self, attempt, fake_store):
        decision = attempt.decide(_failure(make_statement_error()), fake_store)

        assert decision == RetryDecision.retry(ErrorNameClassifier("SerializationFailure"))
        assert decision.should_retry is True

    def test_stops_on_non_transaction_error(self, attempt, fake_store):
        decision = attempt.decide(_failure(CustomError()), fake_store)
        assert decision == RetryDecision.stop(StopReason.NON_TRANSACTION_ERROR)

    def test_stops_when_budget_is_spent(self, attempt, fake_store):
        attempt.begin_retry(0)
        attempt.begin_retry(1)

        decision = attempt.decide(_failure(make_statement_error()), fake_store)

        assert decision.stop_reason == StopReason.RETRY_BUDGET_EXHAUSTED

    def test_stops_when_nested(self, attempt):
        store = FakeTransactionStore(outer_depth=2)

        decision = attempt.decide(_failure(make_statement_error()), store)

        assert decision.stop_reason == StopReason.NESTED_TRANSACTION_NOT_RETRYABLE

    def test_stops_without_classifiers(self, fake_store):
        attempt = ExecutionAttempt(retry_on=(), max_retries=3)

        decision = attempt.decide(_failure(make_statement_error()), fake_store)

        assert decision.stop_reason == StopReason.NO_RETRY_CLASSIFIERS_CONFIGURED

    def test_stops_on_unclassified_error(self, attempt, fake_store):
        decision = attempt.decide(
            _failure(make_statement_error(CustomError())), fake_store
        )
        assert decision.stop_reason == StopReason.UNCLASSIFIED_TRANSACTION_ERROR

    def test_rejects_successful_attempt(self, attempt, fake_store):
        with pytest.raises(ValueError):
            attempt.decide(AttemptResult.success(1), fake_store)

    def test_begin_retry_records_delay(self, attempt):
        attempt.begin_retry(1.5)

        assert attempt.retry_count == 1
        assert attempt.delays == [1.5]
        assert attempt.state == ExecutionState.RETRYING
