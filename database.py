"""
Document store access.

`StoreProvider` memoizes a single MongoDB handle for the lifetime of the
process. The application entry point owns one provider and passes it to the
handlers; nothing here is read from module state.
"""

import logging
import threading
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional

from bson import ObjectId
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from errors import TransientStoreError

logger = logging.getLogger(__name__)


class StoreProvider:
    def __init__(self, url: str, name: str, timeout_ms: int = 30000):
        self.url = url
        self.name = name
        self.timeout_ms = timeout_ms
        self._client: Optional[MongoClient] = None
        self._db: Optional[Database] = None
        self._lock = threading.Lock()

    def acquire(self) -> Database:
        """Return the cached handle, connecting on first use.

        A failed attempt leaves nothing cached, so the next call retries.
        Concurrent first calls share one connection attempt.
        """
        if self._db is not None:
            return self._db

        with self._lock:
            if self._db is not None:
                return self._db

            client = None
            try:
                client = MongoClient(self.url, serverSelectionTimeoutMS=self.timeout_ms)
                client.admin.command("ping")
            except PyMongoError as e:
                if client is not None:
                    client.close()
                self._client = None
                self._db = None
                logger.error("MongoDB connection error: %s", e)
                raise TransientStoreError("Database connection failed") from e

            self._client = client
            self._db = client[self.name]
        logger.info("Connected to MongoDB", extra={"database": self.name})
        return self._db

    @property
    def connected(self) -> bool:
        return self._db is not None

    def close(self):
        with self._lock:
            if self._client is not None:
                self._client.close()
            self._client = None
            self._db = None


# ---------- Helpers ----------
def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_str_id(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Turn a raw document into its JSON shape: `_id` becomes `id`."""
    if doc is None:
        return doc
    d = {}
    for key, value in dict(doc).items():
        if key == "_id":
            d["id"] = str(value)
        else:
            d[key] = _jsonable(value)
    return d


def _jsonable(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def create_document(db: Database, collection_name: str, data: Dict[str, Any]) -> str:
    """Insert a document, stamping createdAt/updatedAt. Returns the new id."""
    data_dict = dict(data)
    now = utc_now()
    data_dict.setdefault("createdAt", now)
    data_dict["updatedAt"] = now
    result = db[collection_name].insert_one(data_dict)
    return str(result.inserted_id)

