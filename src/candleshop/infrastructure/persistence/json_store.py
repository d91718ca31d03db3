"""JSON-file document store.

Each collection is one ``<name>.json`` file holding a list of documents
keyed by ``"id"``.  While the store is open, every collection it has
touched is cached in memory; a write outside a transaction rewrites that
collection's file immediately (last write wins).

``transaction()`` snapshots the cached collections and defers file writes
until the block finishes.  Commit stages a ``.json.tmp`` file per changed
collection before swapping any of them in.  On any exception, in the block
or while committing, the snapshot is restored so nothing from the block
stays in memory or on disk.

The store has an explicit lifecycle::

    with JsonDocumentStore(settings.data_dir) as store:
        ...
"""

from __future__ import annotations

import copy
import json
import os
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path

import structlog

from candleshop.application.ports import TransactionManager

logger = structlog.get_logger(__name__)

Document = dict
Predicate = Callable[[Document], bool]


class StoreClosedError(RuntimeError):
    """The store was used before ``open()`` or after ``close()``."""


class JsonCollection:

    def __init__(self, store: JsonDocumentStore, file_path: Path) -> None:
        self._store = store
        self._file_path = file_path
        self._ensure_file()
        self._docs: dict[str, Document] = {
            raw["id"]: raw for raw in self._load_raw()
        }

    @property
    def name(self) -> str:
        return self._file_path.stem

    # --- Reads ----------------------------------------------------------------

    def get(self, doc_id: str) -> Document | None:
        with self._store.lock:
            self._store.check_open()
            raw = self._docs.get(doc_id)
            return copy.deepcopy(raw) if raw is not None else None

    def find(self, predicate: Predicate | None = None) -> list[Document]:
        with self._store.lock:
            self._store.check_open()
            return [
                copy.deepcopy(raw)
                for raw in self._docs.values()
                if predicate is None or predicate(raw)
            ]

    def find_one(self, predicate: Predicate) -> Document | None:
        with self._store.lock:
            self._store.check_open()
            for raw in self._docs.values():
                if predicate(raw):
                    return copy.deepcopy(raw)
        return None

    # --- Writes ---------------------------------------------------------------

    def upsert(self, doc: Document) -> None:
        if "id" not in doc:
            raise ValueError("Documents need an 'id' field")
        with self._store.lock:
            self._store.check_open()
            self._docs[doc["id"]] = copy.deepcopy(doc)
            self._store.written(self)

    def delete(self, doc_id: str) -> bool:
        with self._store.lock:
            self._store.check_open()
            removed = self._docs.pop(doc_id, None) is not None
            if removed:
                self._store.written(self)
            return removed

    def delete_many(self, predicate: Predicate) -> int:
        with self._store.lock:
            self._store.check_open()
            doomed = [doc_id for doc_id, raw in self._docs.items() if predicate(raw)]
            for doc_id in doomed:
                del self._docs[doc_id]
            if doomed:
                self._store.written(self)
            return len(doomed)

    # --- Snapshots (used by transactions) --------------------------------------

    def snapshot(self) -> dict[str, Document]:
        return copy.deepcopy(self._docs)

    def restore(self, docs: dict[str, Document]) -> None:
        self._docs = docs

    # --- File helpers ---------------------------------------------------------

    @property
    def staged_path(self) -> Path:
        return self._file_path.with_suffix(".json.tmp")

    def write_staged(self) -> None:
        """Write the cached documents next to the live file."""
        records = list(self._docs.values())
        self.staged_path.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")

    def publish_staged(self) -> None:
        os.replace(self.staged_path, self._file_path)

    def flush(self) -> None:
        self.write_staged()
        self.publish_staged()

    def _load_raw(self) -> list[Document]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")


class JsonDocumentStore(TransactionManager):

    def __init__(self, directory: Path | str) -> None:
        self._directory = Path(directory)
        self._collections: dict[str, JsonCollection] = {}
        self._dirty: set[str] = set()
        self._snapshots: dict[str, dict[str, Document]] = {}
        self._tx_depth = 0
        self._open = False
        self.lock = threading.RLock()

    # --- Lifecycle ------------------------------------------------------------

    def open(self) -> JsonDocumentStore:
        with self.lock:
            self._directory.mkdir(parents=True, exist_ok=True)
            self._open = True
        logger.debug("store_opened", directory=str(self._directory))
        return self

    def close(self) -> None:
        with self.lock:
            self._collections.clear()
            self._dirty.clear()
            self._open = False
        logger.debug("store_closed", directory=str(self._directory))

    @property
    def is_open(self) -> bool:
        return self._open

    def __enter__(self) -> JsonDocumentStore:
        return self.open()

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # --- Collections ----------------------------------------------------------

    def check_open(self) -> None:
        if not self._open:
            raise StoreClosedError("Document store is not open")

    def collection(self, name: str) -> JsonCollection:
        with self.lock:
            self.check_open()
            if name not in self._collections:
                self._collections[name] = JsonCollection(self, self._directory / f"{name}.json")
                if self._tx_depth:
                    self._snapshots[name] = self._collections[name].snapshot()
            return self._collections[name]

    def written(self, collection: JsonCollection) -> None:
        """Called by a collection after it changed in memory."""
        if self._tx_depth:
            self._dirty.add(collection.name)
        else:
            collection.flush()

    # --- Transactions ---------------------------------------------------------

    @contextmanager
    def transaction(self) -> Iterator[None]:
        with self.lock:
            if self._tx_depth:
                # Nested blocks join the outer transaction.
                self._tx_depth += 1
                try:
                    yield
                finally:
                    self._tx_depth -= 1
                return

            self._snapshots = {name: c.snapshot() for name, c in self._collections.items()}
            self._tx_depth = 1
            try:
                yield
                self._commit()
            except BaseException:
                self._rollback()
                raise
            finally:
                self._tx_depth = 0
                self._dirty.clear()
                self._snapshots = {}

    def _commit(self) -> None:
        """Stage every dirty collection, then swap the staged files in.

        If anything fails, staged files are removed and collections that
        were already swapped in are rewritten from their snapshot.
        """
        dirty = [self._collections[name] for name in sorted(self._dirty)]
        published: list[JsonCollection] = []
        try:
            for collection in dirty:
                collection.write_staged()
            for collection in dirty:
                collection.publish_staged()
                published.append(collection)
        except BaseException:
            for collection in dirty:
                collection.staged_path.unlink(missing_ok=True)
            for collection in published:
                collection.restore(copy.deepcopy(self._snapshots[collection.name]))
                collection.flush()
            raise

    def _rollback(self) -> None:
        for name, collection in self._collections.items():
            collection.restore(self._snapshots[name])
        logger.warning("transaction_rolled_back", collections=sorted(self._dirty))
