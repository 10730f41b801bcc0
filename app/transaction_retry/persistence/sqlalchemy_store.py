"""SQLAlchemy session adapter for the transactional store interface."""

from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy.exc import StatementError
from sqlalchemy.orm import Session, SessionTransaction


class SQLAlchemyTransactionStore:
    """TransactionalStore backed by a SQLAlchemy ORM ``Session``.

    Statement failures are reported by SQLAlchemy as ``StatementError``
    (``DBAPIError`` and its ``OperationalError``/``IntegrityError``
    subclasses included), with the driver exception available as ``orig``.

    Attributes:
        session: Session the transaction boundaries are opened on
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    @contextmanager
    def transaction(self) -> Iterator[SessionTransaction]:
        """Begin a transaction, or a SAVEPOINT if one is already open."""
        if self.session.in_transaction():
            with self.session.begin_nested() as nested:
                yield nested
        else:
            with self.session.begin() as root:
                yield root

    @property
    def open_transactions(self) -> int:
        if not self.session.in_transaction():
            return 0
        current = self.session.get_nested_transaction() or self.session.get_transaction()
        depth = 0
        while current is not None:
            depth += 1
            current = current.parent
        return depth

    def is_transaction_error(self, error: BaseException) -> bool:
        return isinstance(error, StatementError)

    def underlying_cause(self, error: BaseException) -> Optional[BaseException]:
        orig = getattr(error, "orig", None)
        if isinstance(orig, BaseException):
            return orig
        return error.__cause__
