"""Transactional store interface.

The retrying executor never talks to a database directly. It only needs a
transaction boundary, the current nesting depth, and a way to tell
transaction-layer failures apart from application errors.
"""

from typing import ContextManager, Optional, Protocol, runtime_checkable


@runtime_checkable
class TransactionalStore(Protocol):
    """Protocol for transaction-capable data stores.

    Example:
        class MyStore:
            @contextmanager
            def transaction(self):
                conn.begin()
                try:
                    yield
                except Exception:
                    conn.rollback()
                    raise
                conn.commit()
            ...
    """

    def transaction(self) -> ContextManager:
        """Open a transaction boundary.

        Commits on normal exit and rolls back when the block raises. When a
        transaction is already open, opens a nested boundary instead.
        """
        ...

    @property
    def open_transactions(self) -> int:
        """Number of transaction boundaries currently open."""
        ...

    def is_transaction_error(self, error: BaseException) -> bool:
        """Check if the error was reported by the store as a failed statement."""
        ...

    def underlying_cause(self, error: BaseException) -> Optional[BaseException]:
        """Return the error wrapped by ``error``, if any."""
        ...
