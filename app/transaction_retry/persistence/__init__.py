"""Transactional store interface and implementations."""

from transaction_retry.persistence.sqlalchemy_store import SQLAlchemyTransactionStore
from transaction_retry.persistence.store import TransactionalStore

__all__ = ["TransactionalStore", "SQLAlchemyTransactionStore"]
