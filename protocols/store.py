"""Record store protocol for the loyalty tables."""

from collections.abc import Callable
from contextlib import AbstractContextManager
from typing import Any, Protocol, TypeVar, runtime_checkable

from clubman.protocols.records import Record

R = TypeVar("R", bound=Record)


@runtime_checkable
class RecordStore(Protocol):
    """
    Protocol for reading and writing loyalty records.

    Generic over the fixed table schema in clubman.protocols.records.SCHEMA:
    the record type selects the table. Implemented by
    adapters/django_store.py (ORM) and adapters/memory.py (in-process).

    Configuration in settings.py:
        CLUBMAN = {
            "RECORD_STORE_BACKEND": "clubman.adapters.django_store.DjangoRecordStore",
        }
    """

    def get_all(self, record_type: type[R]) -> list[R]:
        """Return every record of the table."""
        ...

    def get_by_id(self, record_type: type[R], record_id: str, for_update: bool = False) -> R | None:
        """
        Return one record or None.

        Args:
            record_type: Record class (selects the table)
            record_id: Record id
            for_update: Lock the row until the enclosing atomic() block ends
        """
        ...

    def insert(self, record: R) -> R:
        """Append a record and return it."""
        ...

    def update(self, record_type: type[R], record_id: str, **changes: Any) -> R | None:
        """Apply a partial update. Returns the updated record, None if missing."""
        ...

    def delete(self, record_type: type[R], record_id: str) -> bool:
        """Delete a record. Returns True if something was deleted."""
        ...

    def filter(
        self,
        record_type: type[R],
        predicate: Callable[[R], bool] | None = None,
        **equals: Any,
    ) -> list[R]:
        """
        Return records whose fields equal ``equals`` and match ``predicate``.

        Equality lookups may be pushed down to the backend; the predicate is
        always evaluated in Python.
        """
        ...

    def atomic(self) -> AbstractContextManager:
        """Context manager grouping writes into one atomic unit."""
        ...
