"""Shared fixtures for transaction retry tests."""

from typing import Any, Iterable, List, Optional

import pytest
from sqlalchemy import create_engine, event, func, select
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from tests.factories.models import Base, QueuedJob
from tests.factories.transactions import FakeTransactionStore
from transaction_retry.configuration import get_settings
from transaction_retry.resilience import (
    RetryConfiguration,
    RetryingTransactionExecutor,
    reset_default_configuration,
)


@pytest.fixture(autouse=True)
def reset_retry_defaults():
    """Rebuild the default configuration from settings for every test."""
    reset_default_configuration()
    get_settings.cache_clear()
    yield
    reset_default_configuration()
    get_settings.cache_clear()


@pytest.fixture
def retry_configuration_factory():
    """Factory for creating RetryConfiguration instances."""

    def _factory(
        retry_on: Optional[Iterable[Any]] = ("SerializationFailure", "DeadlockDetected"),
        max_retries: int = 3,
        wait_times: Iterable[float] = (0, 1, 2, 4, 8, 16, 32),
        fuzz_enabled: bool = False,
        auto_retry_enabled: bool = False,
    ) -> RetryConfiguration:
        return RetryConfiguration(
            retry_on=retry_on,
            max_retries=max_retries,
            wait_times=wait_times,
            fuzz_enabled=fuzz_enabled,
            auto_retry_enabled=auto_retry_enabled,
        )

    return _factory


@pytest.fixture
def sleep_recorder():
    """Callable replacing time.sleep that records requested delays."""

    class SleepRecorder:
        def __init__(self):
            self.calls: List[float] = []

        def __call__(self, seconds: float) -> None:
            self.calls.append(seconds)

    return SleepRecorder()


@pytest.fixture
def fake_store():
    """Fresh FakeTransactionStore with no outer transaction."""
    return FakeTransactionStore()


@pytest.fixture
def executor_factory(fake_store, sleep_recorder, retry_configuration_factory):
    """Factory for RetryingTransactionExecutor wired to test doubles.

    The random source defaults to 0.5 so fuzzing adds no offset.
    """

    def _factory(
        store=None,
        configuration: Optional[RetryConfiguration] = None,
        random_value: float = 0.5,
        **config_kwargs: Any,
    ) -> RetryingTransactionExecutor:
        if configuration is None:
            configuration = retry_configuration_factory(**config_kwargs)
        return RetryingTransactionExecutor(
            store if store is not None else fake_store,
            configuration,
            sleep=sleep_recorder,
            random_source=lambda: random_value,
        )

    return _factory


@pytest.fixture
def flaky_unit_of_work():
    """Unit-of-work failing with the given errors before returning a value."""

    class FlakyUnitOfWork:
        def __init__(self, errors: Iterable[BaseException] = (), value: Any = "done"):
            self.errors = list(errors)
            self.value = value
            self.calls = 0

        def __call__(self) -> Any:
            self.calls += 1
            if self.errors:
                raise self.errors.pop(0)
            return self.value

    return FlakyUnitOfWork


@pytest.fixture
def db_engine():
    """In-memory SQLite engine with working SAVEPOINT support."""
    engine = create_engine("sqlite://", poolclass=StaticPool)

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")

    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    with Session(db_engine) as session:
        yield session


@pytest.fixture
def job_count(db_session):
    """Count queued jobs, inside the current transaction if one is open."""
    statement = select(func.count()).select_from(QueuedJob)

    def _count() -> int:
        if db_session.in_transaction():
            return db_session.scalar(statement)
        with db_session.begin():
            return db_session.scalar(statement)

    return _count
