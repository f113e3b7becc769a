from __future__ import annotations

import sqlite3
from typing import Any, ContextManager, List, Optional, Sequence, Tuple, Type

from pydantic import BaseModel

from db.connection import write_lock


class SqliteRecordRepo:
    """Shared table plumbing for the record repos.

    Subclasses declare the table, the identity column and the
    ``(column, field)`` pairs; identity comes first in ``columns``. The
    connection must come from ``db.connection.get_connection`` (autocommit),
    multi-statement work goes through ``transaction()``.
    """

    table: str = ""
    identity_column: str = ""
    columns: Tuple[Tuple[str, str], ...] = ()
    record_cls: Type[BaseModel]

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def transaction(self) -> ContextManager[None]:
        return write_lock(self.conn)

    # --- Reads ---
    def find_by_identity(self, identity: Any) -> Optional[Any]:
        rows = self._select(f"WHERE {self.identity_column} = ?", (identity,))
        return rows[0] if rows else None

    def exists_by_identity(self, identity: Any) -> bool:
        cur = self.conn.cursor()
        cur.execute(f"SELECT 1 FROM {self.table} WHERE {self.identity_column} = ? LIMIT 1", (identity,))
        return cur.fetchone() is not None

    def find_all(self) -> List[Any]:
        return self._select("")

    def count(self) -> int:
        cur = self.conn.cursor()
        cur.execute(f"SELECT COUNT(*) FROM {self.table}")
        return int(cur.fetchone()[0])

    # --- Writes ---
    def delete_by_identity(self, identity: Any) -> None:
        self.conn.execute(f"DELETE FROM {self.table} WHERE {self.identity_column} = ?", (identity,))

    def _upsert(self, record: Any) -> None:
        names = [column for column, _field in self.columns]
        updates = ", ".join(f"{column} = excluded.{column}" for column in names if column != self.identity_column)
        sql = (
            f"INSERT INTO {self.table} ({', '.join(names)}) VALUES ({', '.join('?' for _ in names)}) "
            f"ON CONFLICT({self.identity_column}) DO UPDATE SET {updates};"
        )
        self.conn.execute(sql, self._values(record))

    # --- Helpers ---
    def _find_by(self, column: str, value: Any) -> List[Any]:
        if column not in {c for c, _f in self.columns}:
            raise KeyError(f"Unknown column for {self.table}: {column}")
        return self._select(f"WHERE {column} = ?", (value,))

    def _select(self, where: str, params: Sequence[Any] = ()) -> List[Any]:
        names = ", ".join(column for column, _field in self.columns)
        sql = f"SELECT {names} FROM {self.table} {where} ORDER BY {self.identity_column}"
        cur = self.conn.cursor()
        cur.execute(sql, tuple(params))
        return [self._to_record(row) for row in cur.fetchall()]

    def _to_record(self, row: Sequence[Any]) -> Any:
        data = {field: row[i] for i, (_column, field) in enumerate(self.columns)}
        return self.record_cls.model_validate(data)

    def _values(self, record: Any, skip_identity: bool = False) -> Tuple[Any, ...]:
        return tuple(
            getattr(record, field)
            for column, field in self.columns
            if not (skip_identity and column == self.identity_column)
        )
