# In-process document store: named collections of JSON-like documents
# keyed by a unique primary key, with optional snapshot durability.

import copy
import json
import logging
import os
import threading
from typing import Dict, List, Optional

from barangay.core.errors import StorageFailure

logger = logging.getLogger(__name__)


class DuplicateKeyError(Exception):
    """Insert of a key that already exists in the collection"""


class ConditionFailed(Exception):
    """Conditional update whose expected fields did not match the stored document"""


class DocumentStore:
    def __init__(self, data_file: str = ""):
        self.data_file = data_file
        # collection -> { key -> document }
        self._collections: Dict[str, Dict[str, dict]] = {}
        self._lock = threading.RLock()
        self._open = False

    def open(self) -> None:
        with self._lock:
            if self._open:
                return
            self._collections = {}
            if self.data_file and os.path.exists(self.data_file):
                try:
                    with open(self.data_file, "r", encoding="utf-8") as f:
                        self._collections = json.load(f)
                except (OSError, json.JSONDecodeError) as e:
                    logger.error(f"Failed to load document store from {self.data_file}: {e}")
                    raise StorageFailure("Failed to load document store") from e
            self._open = True
            logger.info(
                f"Document store opened: file={self.data_file or '<memory>'}, "
                f"collections={sorted(self._collections)}"
            )

    def close(self) -> None:
        with self._lock:
            if not self._open:
                return
            # Every successful write has already been flushed
            self._open = False
            logger.info("Document store closed")

    def _require_open(self) -> None:
        if not self._open:
            raise StorageFailure("Document store is not open")

    def _flush(self) -> None:
        if not self.data_file:
            return
        tmp_path = f"{self.data_file}.tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(self._collections, f)
            os.replace(tmp_path, self.data_file)
        except OSError as e:
            logger.error(f"Failed to write document store to {self.data_file}: {e}")
            raise StorageFailure("Failed to write document store") from e

    def _collection(self, name: str) -> Dict[str, dict]:
        return self._collections.setdefault(name, {})

    def insert(self, collection: str, key: str, document: dict) -> dict:
        """
        Stores a new document under key. The existence check and the write
        happen under one lock, so exactly one concurrent insert per key wins.
        """
        with self._lock:
            self._require_open()
            docs = self._collection(collection)
            if key in docs:
                raise DuplicateKeyError(f"{collection}/{key}")
            docs[key] = copy.deepcopy(document)
            try:
                self._flush()
            except StorageFailure:
                del docs[key]
                raise
            return copy.deepcopy(docs[key])

    def get(self, collection: str, key: str) -> Optional[dict]:
        with self._lock:
            self._require_open()
            doc = self._collection(collection).get(key)
            return copy.deepcopy(doc) if doc is not None else None

    def contains(self, collection: str, key: str) -> bool:
        with self._lock:
            self._require_open()
            return key in self._collection(collection)

    def find(self, collection: str, **filters) -> List[dict]:
        with self._lock:
            self._require_open()
            return [
                copy.deepcopy(doc)
                for doc in self._collection(collection).values()
                if all(doc.get(field) == value for field, value in filters.items())
            ]

    def update(self, collection: str, key: str, changes: dict, expected: Optional[dict] = None) -> Optional[dict]:
        """
        Applies changes to the document under key and returns the updated copy,
        or None when the key is absent. When expected is given, the update only
        happens if every expected field matches, otherwise ConditionFailed.
        """
        with self._lock:
            self._require_open()
            doc = self._collection(collection).get(key)
            if doc is None:
                return None
            if expected and any(doc.get(field) != value for field, value in expected.items()):
                raise ConditionFailed(f"{collection}/{key}")
            previous = copy.deepcopy(doc)
            doc.update(copy.deepcopy(changes))
            try:
                self._flush()
            except StorageFailure:
                self._collection(collection)[key] = previous
                raise
            return copy.deepcopy(doc)

    def delete(self, collection: str, key: str) -> Optional[dict]:
        with self._lock:
            self._require_open()
            docs = self._collection(collection)
            doc = docs.pop(key, None)
            if doc is not None:
                try:
                    self._flush()
                except StorageFailure:
                    docs[key] = doc
                    raise
            return doc
