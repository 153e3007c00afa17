"""
Record store: durable key-value persistence for the ward collections.

Each collection (patients, temperatures, notes) is an ordered list of flat
records that is read in full and overwritten in full. Two implementations
share the RecordStore contract:

- SQLiteRecordStore: one SQLite row per collection holding a JSON array.
  WAL mode and a busy timeout keep concurrent readers from failing while a
  write is in flight.
- InMemoryRecordStore: dict-backed, for tests and throwaway sessions.

IMPORTANT: Store instantiation should be done through the DI layer.
Use core.dependencies.get_record_store() instead of instantiating directly.
"""
import copy
import json
import logging
import sqlite3
import threading
import uuid
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar

from core.config import DATABASE_PATH, DATABASE_BUSY_TIMEOUT
from core.datetime_utils import utc_now, format_iso
from core.exceptions import RecordStoreError

logger = logging.getLogger(__name__)

PATIENTS = "patients"
TEMPERATURES = "temperatures"
NOTES = "notes"
COLLECTIONS = (PATIENTS, TEMPERATURES, NOTES)

Record = Dict[str, Any]
Updater = Callable[[List[Record]], List[Record]]
T = TypeVar("T")


def _check_collection(collection: str) -> None:
    if collection not in COLLECTIONS:
        raise ValueError(f"Unknown collection '{collection}', expected one of {COLLECTIONS}")


def to_models(collection: str, records: Iterable[Record], from_dict: Callable[[Record], T]) -> List[T]:
    """
    Build models from stored records.

    A record with a missing key, a wrong type or an unparseable value is a
    corrupt collection and raises RecordStoreError like an undecodable payload.
    """
    try:
        return [from_dict(record) for record in records]
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        logger.error(f"Malformed record in collection '{collection}': {e!r}")
        raise RecordStoreError(operation="load", collection=collection) from e


class RecordStore(ABC):
    """
    Contract shared by all record stores.

    load/save are whole-collection operations; save is all-or-nothing.
    update() performs a read-modify-write while holding the store's single
    writer guard, so two mutators never interleave on the same store.
    """

    @abstractmethod
    def has(self, collection: str) -> bool:
        """Whether the collection has ever been written."""

    @abstractmethod
    def load(self, collection: str) -> List[Record]:
        """Return every record of the collection, or [] if never written."""

    @abstractmethod
    def save(self, collection: str, records: List[Record]) -> None:
        """Overwrite the collection with records, preserving their order."""

    @abstractmethod
    def update(self, collection: str, updater: Updater) -> List[Record]:
        """Atomically replace the collection with updater(current records)."""

    @abstractmethod
    def initialize(self, collections: Dict[str, List[Record]], marker: str) -> bool:
        """
        Write every given collection in one step, unless marker was ever written.

        Returns:
            bool: True if the collections were written, False if marker already existed.
        """

    def new_id(self) -> str:
        """Generate a fresh, unique record id."""
        return uuid.uuid4().hex

    def ping(self) -> None:
        """Raise if the store is unreachable."""


class InMemoryRecordStore(RecordStore):
    """Record store kept in a dict. Copies on the way in and out."""

    def __init__(self, initial: Optional[Dict[str, List[Record]]] = None):
        self._collections: Dict[str, List[Record]] = {}
        self._lock = threading.RLock()
        for name, records in (initial or {}).items():
            self.save(name, records)

    def has(self, collection: str) -> bool:
        _check_collection(collection)
        return collection in self._collections

    def load(self, collection: str) -> List[Record]:
        _check_collection(collection)
        return copy.deepcopy(self._collections.get(collection, []))

    def save(self, collection: str, records: List[Record]) -> None:
        _check_collection(collection)
        with self._lock:
            self._collections[collection] = copy.deepcopy(list(records))

    def update(self, collection: str, updater: Updater) -> List[Record]:
        with self._lock:
            records = updater(self.load(collection))
            self.save(collection, records)
            return copy.deepcopy(records)

    def initialize(self, collections: Dict[str, List[Record]], marker: str) -> bool:
        for name in list(collections) + [marker]:
            _check_collection(name)
        with self._lock:
            if marker in self._collections:
                return False
            for name, records in collections.items():
                self._collections[name] = copy.deepcopy(list(records))
            return True


class SQLiteRecordStore(RecordStore):
    """
    SQLite-backed record store.

    Features:
    - One row per collection in the `collections` table, payload as JSON
    - WAL mode so readers are not blocked by the writer
    - Busy timeout to wait out lock contention between processes
    - update() runs under BEGIN IMMEDIATE plus a process-local lock

    Usage:
        # Via dependency injection (recommended):
        from core.dependencies import get_record_store
        store = get_record_store()

        # Direct instantiation (for testing):
        store = SQLiteRecordStore(db_path="/tmp/test.db")
    """

    def __init__(self, db_path: Optional[str] = None, busy_timeout: Optional[int] = None):
        """
        Initialize the store and create the schema if needed.

        Args:
            db_path: Path to the SQLite file. Defaults to config DATABASE_PATH.
            busy_timeout: SQLite busy timeout in milliseconds. Defaults to config value.
        """
        self.db_path = db_path or DATABASE_PATH
        self.busy_timeout = busy_timeout if busy_timeout is not None else DATABASE_BUSY_TIMEOUT
        self._write_lock = threading.RLock()

        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        # isolation_level=None: transactions are opened explicitly
        conn = sqlite3.connect(self.db_path, isolation_level=None)
        conn.execute(f"PRAGMA busy_timeout = {int(self.busy_timeout)}")
        return conn

    def _init_db(self) -> None:
        """Create the collections table and enable WAL mode."""
        try:
            conn = self._connect()
            try:
                mode = conn.execute("PRAGMA journal_mode = WAL").fetchone()
                if mode and mode[0].lower() == "wal":
                    logger.info(f"SQLite WAL mode enabled for {self.db_path}")
                else:
                    logger.warning(f"Failed to enable WAL mode, current mode: {mode}")

                conn.execute("""
                    CREATE TABLE IF NOT EXISTS collections (
                        name TEXT PRIMARY KEY,
                        payload TEXT NOT NULL,
                        updated_at TEXT NOT NULL
                    )
                """)
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error(f"Failed to initialise record store at {self.db_path}: {e}")
            raise RecordStoreError(operation="init", db_path=self.db_path) from e

        logger.info(
            f"Record store initialized: {self.db_path} "
            f"(busy_timeout={self.busy_timeout}ms)"
        )

    @staticmethod
    def _rollback(conn: sqlite3.Connection) -> None:
        if conn.in_transaction:
            conn.execute("ROLLBACK")

    @staticmethod
    def _decode(collection: str, payload: str) -> List[Record]:
        try:
            records = json.loads(payload)
        except json.JSONDecodeError as e:
            raise RecordStoreError(operation="load", collection=collection) from e
        if not isinstance(records, list):
            raise RecordStoreError(operation="load", collection=collection)
        return records

    @staticmethod
    def _read(conn: sqlite3.Connection, collection: str) -> Optional[str]:
        row = conn.execute(
            "SELECT payload FROM collections WHERE name = ?", (collection,)
        ).fetchone()
        return row[0] if row else None

    @staticmethod
    def _write(conn: sqlite3.Connection, collection: str, records: List[Record]) -> None:
        conn.execute(
            """
            INSERT INTO collections (name, payload, updated_at) VALUES (?, ?, ?)
            ON CONFLICT(name) DO UPDATE SET
                payload = excluded.payload,
                updated_at = excluded.updated_at
            """,
            (collection, json.dumps(list(records), ensure_ascii=False), format_iso(utc_now())),
        )

    def has(self, collection: str) -> bool:
        _check_collection(collection)
        try:
            conn = self._connect()
            try:
                return self._read(conn, collection) is not None
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise RecordStoreError(operation="has", collection=collection) from e

    def load(self, collection: str) -> List[Record]:
        _check_collection(collection)
        try:
            conn = self._connect()
            try:
                payload = self._read(conn, collection)
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise RecordStoreError(operation="load", collection=collection) from e
        return self._decode(collection, payload) if payload is not None else []

    def save(self, collection: str, records: List[Record]) -> None:
        _check_collection(collection)
        self.update(collection, lambda _current: list(records))

    def update(self, collection: str, updater: Updater) -> List[Record]:
        _check_collection(collection)
        with self._write_lock:
            try:
                conn = self._connect()
            except sqlite3.Error as e:
                raise RecordStoreError(operation="update", collection=collection) from e
            try:
                conn.execute("BEGIN IMMEDIATE")
                payload = self._read(conn, collection)
                current = self._decode(collection, payload) if payload is not None else []
                records = updater(current)
                self._write(conn, collection, records)
                conn.execute("COMMIT")
                return records
            except sqlite3.Error as e:
                self._rollback(conn)
                raise RecordStoreError(operation="update", collection=collection) from e
            except Exception:
                self._rollback(conn)
                raise
            finally:
                conn.close()

    def initialize(self, collections: Dict[str, List[Record]], marker: str) -> bool:
        for name in list(collections) + [marker]:
            _check_collection(name)
        with self._write_lock:
            try:
                conn = self._connect()
            except sqlite3.Error as e:
                raise RecordStoreError(operation="initialize", collection=marker) from e
            try:
                # BEGIN IMMEDIATE makes the marker check and the writes one step across processes
                conn.execute("BEGIN IMMEDIATE")
                if self._read(conn, marker) is not None:
                    conn.execute("ROLLBACK")
                    return False
                for name, records in collections.items():
                    self._write(conn, name, records)
                conn.execute("COMMIT")
                return True
            except sqlite3.Error as e:
                self._rollback(conn)
                raise RecordStoreError(operation="initialize", collection=marker) from e
            finally:
                conn.close()

    def ping(self) -> None:
        try:
            conn = self._connect()
            try:
                conn.execute("SELECT 1")
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise RecordStoreError(operation="ping") from e
