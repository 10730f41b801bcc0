"""Error classifiers deciding which transaction failures are retryable.

A classifier identifies an error type either by identity or by name. Both
the raised error and the underlying cause it wraps are checked, so a
``sqlalchemy.exc.OperationalError`` wrapping a driver's
``SerializationFailure`` is matched by ``"SerializationFailure"``.

Key Functions:
- to_classifier(): Coerce a type, name or classifier into a classifier
- normalize_classifiers(): Coerce one or many values into a tuple
- match_classifier(): First classifier matching an error or its cause

Usage:
    from transaction_retry.operations.classifiers import (
        match_classifier,
        normalize_classifiers,
    )

    classifiers = normalize_classifiers(["SerializationFailure", DeadlockError])
    matched = match_classifier(classifiers, error, cause)
"""

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple, Union

ClassifierLike = Union["ErrorClassifier", type, str]


def _type_names(error_type: type) -> Tuple[str, ...]:
    return (
        error_type.__name__,
        error_type.__qualname__,
        f"{error_type.__module__}.{error_type.__qualname__}",
    )


class ErrorClassifier:
    """Base class for retry classifiers."""

    def matches_type(self, error_type: type) -> bool:
        raise NotImplementedError

    def matches(
        self, error: BaseException, cause: Optional[BaseException] = None
    ) -> bool:
        """Check the error's own type, then the type of its underlying cause."""
        if self.matches_type(type(error)):
            return True
        return cause is not None and self.matches_type(type(cause))


@dataclass(frozen=True)
class ErrorTypeClassifier(ErrorClassifier):
    """Match errors whose type is exactly ``error_type``.

    Subclasses do not match; list them separately if they are retryable.
    """

    error_type: type

    def matches_type(self, error_type: type) -> bool:
        return error_type is self.error_type

    def __str__(self) -> str:
        return self.error_type.__qualname__


@dataclass(frozen=True)
class ErrorNameClassifier(ErrorClassifier):
    """Match errors by type name.

    The name may be the bare class name (``SerializationFailure``), the
    qualified name, or the dotted module path
    (``psycopg2.errors.SerializationFailure``).
    """

    name: str

    def matches_type(self, error_type: type) -> bool:
        return self.name in _type_names(error_type)

    def __str__(self) -> str:
        return self.name


def to_classifier(value: Any) -> ErrorClassifier:
    """Coerce a value into an ErrorClassifier.

    Args:
        value: An ErrorClassifier, an exception type, or a type name string

    Returns:
        The matching classifier variant

    Raises:
        ValueError: If the value cannot identify an error type
    """
    if isinstance(value, ErrorClassifier):
        return value
    if isinstance(value, type) and issubclass(value, BaseException):
        return ErrorTypeClassifier(value)
    if isinstance(value, str):
        if not value.strip():
            raise ValueError("error type name must not be empty")
        return ErrorNameClassifier(value.strip())
    raise ValueError(
        f"retry_on entries must be exception types or type names, got {value!r}"
    )


def normalize_classifiers(
    value: Union[ClassifierLike, Iterable[ClassifierLike], None],
) -> Tuple[ErrorClassifier, ...]:
    """Coerce a single classifier value or an iterable of them into a tuple.

    Order is preserved; it is the evaluation order.
    """
    if value is None:
        return ()
    if isinstance(value, (str, type, ErrorClassifier)):
        return (to_classifier(value),)
    return tuple(to_classifier(item) for item in value)


def match_classifier(
    classifiers: Iterable[ErrorClassifier],
    error: BaseException,
    cause: Optional[BaseException] = None,
) -> Optional[ErrorClassifier]:
    """Return the first classifier matching the error or its cause, or None."""
    for classifier in classifiers:
        if classifier.matches(error, cause):
            return classifier
    return None
