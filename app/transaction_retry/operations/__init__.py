"""Operation result types, status enums and error classifiers."""

from transaction_retry.operations.classifiers import (
    ErrorClassifier,
    ErrorNameClassifier,
    ErrorTypeClassifier,
    match_classifier,
    normalize_classifiers,
    to_classifier,
)
from transaction_retry.operations.result import AttemptResult, TransactionOutcome
from transaction_retry.operations.status import ExecutionState, StopReason

__all__ = [
    "AttemptResult",
    "TransactionOutcome",
    "ExecutionState",
    "StopReason",
    "ErrorClassifier",
    "ErrorTypeClassifier",
    "ErrorNameClassifier",
    "to_classifier",
    "normalize_classifiers",
    "match_classifier",
]
