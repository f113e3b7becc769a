from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from typing import Iterator, Optional


def get_connection(db_path: str, timeout: Optional[float] = 30.0) -> sqlite3.Connection:
    """Open a SQLite connection for the record repos.

    - autocommit (isolation_level=None): single statements commit on their own,
      multi-statement units go through ``write_lock``
    - WAL journal so readers do not block on the writer
    - busy timeout so a second writer waits instead of failing
    """
    conn = sqlite3.connect(db_path, timeout=timeout or 30.0, isolation_level=None)
    conn.execute("PRAGMA journal_mode=WAL;")
    conn.execute("PRAGMA synchronous=NORMAL;")
    conn.execute("PRAGMA foreign_keys=ON;")
    return conn


@contextmanager
def write_lock(conn: sqlite3.Connection) -> Iterator[None]:
    """Run the block as one transaction holding SQLite's write lock.

    ``BEGIN IMMEDIATE`` takes the reserved lock up front, so a read-then-write
    sequence (exists check followed by insert) cannot interleave with another
    writer. Nested use joins the outer transaction.
    """
    if conn.in_transaction:
        yield
        return
    conn.execute("BEGIN IMMEDIATE")
    try:
        yield
    except BaseException:
        conn.execute("ROLLBACK")
        raise
    conn.execute("COMMIT")
