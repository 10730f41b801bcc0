"""Decorator for running functions through a retrying executor."""

import functools
from typing import Any, Callable, Iterable, Optional, TypeVar, Union

from transaction_retry.operations.classifiers import ClassifierLike
from transaction_retry.resilience.executor import RetryingTransactionExecutor

F = TypeVar("F", bound=Callable[..., Any])


def retrying_transaction(
    executor: RetryingTransactionExecutor,
    retry_on: Union[ClassifierLike, Iterable[ClassifierLike], None] = None,
    max_retries: Optional[int] = None,
) -> Callable[[F], F]:
    """Run every call of the decorated function as a retried transaction.

    Call arguments are bound before the first attempt and reused unchanged
    on every retry.

    Example:
        @retrying_transaction(executor, max_retries=5)
        def enqueue(job_name):
            session.add(QueuedJob(job=job_name))
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            return executor.execute(
                functools.partial(func, *args, **kwargs),
                retry_on=retry_on,
                max_retries=max_retries,
            )

        return wrapper  # type: ignore[return-value]

    return decorator
