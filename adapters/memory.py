"""In-process RecordStore adapter."""

from collections.abc import Iterable
from contextlib import contextmanager
from dataclasses import replace

from clubman.protocols.records import SCHEMA, Record, table_for


class InMemoryRecordStore:
    """
    RecordStore kept in plain lists, one per table.

    Single writer, read-your-writes. atomic() restores every table if the
    block raises.

    Configuration in settings.py:
        CLUBMAN = {
            "RECORD_STORE_BACKEND": "clubman.adapters.memory.InMemoryRecordStore",
        }
    """

    def __init__(self, records: Iterable[Record] = ()):
        self._tables: dict[str, list] = {table: [] for table in SCHEMA.values()}
        for record in records:
            self.insert(record)

    def _rows(self, record_type) -> list:
        return self._tables[table_for(record_type)]

    def get_all(self, record_type):
        return list(self._rows(record_type))

    def get_by_id(self, record_type, record_id, for_update=False):
        for row in self._rows(record_type):
            if row.id == record_id:
                return row
        return None

    def insert(self, record):
        self._rows(type(record)).append(record)
        return record

    def update(self, record_type, record_id, **changes):
        rows = self._rows(record_type)
        for index, row in enumerate(rows):
            if row.id == record_id:
                rows[index] = replace(row, **changes)
                return rows[index]
        return None

    def delete(self, record_type, record_id):
        rows = self._rows(record_type)
        kept = [row for row in rows if row.id != record_id]
        deleted = len(kept) != len(rows)
        rows[:] = kept
        return deleted

    def filter(self, record_type, predicate=None, **equals):
        return [
            row
            for row in self._rows(record_type)
            if all(getattr(row, key) == value for key, value in equals.items())
            and (predicate is None or predicate(row))
        ]

    @contextmanager
    def atomic(self):
        snapshot = {table: list(rows) for table, rows in self._tables.items()}
        try:
            yield self
        except BaseException:
            for table, rows in snapshot.items():
                self._tables[table][:] = rows
            raise
