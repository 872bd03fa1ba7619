"""
Repositories behind the content handlers.

`MongoRepository` talks to the document store, `InMemoryRepository` evaluates
the same `Query` over plain dicts, and `FailoverRepository` composes the two:
try the store, fall back to the sample catalog when the store is unreachable.
"""

import logging
import re
import time
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Tuple

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from database import StoreProvider, create_document, to_str_id, utc_now
from errors import TransientStoreError

logger = logging.getLogger(__name__)

ASCENDING = 1
DESCENDING = -1


@dataclass
class Query:
    equals: Dict[str, Any] = field(default_factory=dict)
    contains: Dict[str, str] = field(default_factory=dict)
    search: Optional[str] = None
    search_fields: Tuple[str, ...] = ()
    sort: Tuple[Tuple[str, int], ...] = ()
    skip: int = 0
    limit: Optional[int] = None


class Repository(ABC):
    collection: str

    @abstractmethod
    def find(self, query: Query) -> Tuple[List[Dict[str, Any]], int]:
        """Return one page of matches and the total number of matches."""

    @abstractmethod
    def get(self, item_id: str) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    def find_one(self, equals: Dict[str, Any], exclude_id: str = None) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    def create(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        ...

    @abstractmethod
    def update(self, item_id: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    def delete(self, item_id: str) -> bool:
        ...

    @abstractmethod
    def increment(self, item_id: str, field_name: str, amount: int = 1):
        ...


# ---------- MongoDB ----------
def _object_id(item_id: str) -> Optional[ObjectId]:
    return ObjectId(item_id) if ObjectId.is_valid(item_id) else None


def _icontains(needle: str) -> Dict[str, str]:
    return {"$regex": re.escape(needle), "$options": "i"}


def build_filter(query: Query) -> Dict[str, Any]:
    """Translate a Query into a MongoDB filter document."""
    filt: Dict[str, Any] = {}
    for key, value in query.equals.items():
        if key == "id":
            filt["_id"] = _object_id(str(value))
        else:
            filt[key] = value
    for key, needle in query.contains.items():
        filt[key] = _icontains(needle)
    if query.search:
        filt["$or"] = [{f: _icontains(query.search)} for f in query.search_fields]
    return filt


@contextmanager
def _store_errors(operation: str, collection: str):
    try:
        yield
    except PyMongoError as e:
        raise TransientStoreError(f"Database error during {operation} on {collection}") from e


class MongoRepository(Repository):
    def __init__(self, store: StoreProvider, collection: str):
        self.store = store
        self.collection = collection

    def _col(self):
        return self.store.acquire()[self.collection]

    def find(self, query):
        filt = build_filter(query)
        with _store_errors("find", self.collection):
            col = self._col()
            cursor = col.find(filt)
            if query.sort:
                cursor = cursor.sort(list(query.sort))
            if query.skip:
                cursor = cursor.skip(query.skip)
            if query.limit:
                cursor = cursor.limit(query.limit)
            items = [to_str_id(d) for d in cursor]
            total = col.count_documents(filt)
        return items, total

    def get(self, item_id):
        oid = _object_id(item_id)
        if oid is None:
            return None
        with _store_errors("get", self.collection):
            return to_str_id(self._col().find_one({"_id": oid}))

    def find_one(self, equals, exclude_id=None):
        filt = build_filter(Query(equals=equals))
        if exclude_id is not None:
            filt["_id"] = {"$ne": _object_id(exclude_id)}
        with _store_errors("find_one", self.collection):
            return to_str_id(self._col().find_one(filt))

    def create(self, doc):
        with _store_errors("create", self.collection):
            db = self.store.acquire()
            new_id = create_document(db, self.collection, doc)
            created = db[self.collection].find_one({"_id": ObjectId(new_id)})
        return to_str_id(created)

    def update(self, item_id, changes):
        oid = _object_id(item_id)
        if oid is None:
            return None
        with _store_errors("update", self.collection):
            updated = self._col().find_one_and_update(
                {"_id": oid},
                {"$set": {**changes, "updatedAt": utc_now()}},
                return_document=ReturnDocument.AFTER,
            )
        return to_str_id(updated)

    def delete(self, item_id):
        oid = _object_id(item_id)
        if oid is None:
            return False
        with _store_errors("delete", self.collection):
            return self._col().delete_one({"_id": oid}).deleted_count > 0

    def increment(self, item_id, field_name, amount=1):
        oid = _object_id(item_id)
        if oid is None:
            return
        with _store_errors("increment", self.collection):
            self._col().update_one({"_id": oid}, {"$inc": {field_name: amount}})


# ---------- In-memory ----------
def resolve(doc: Dict[str, Any], path: str) -> List[Any]:
    """All leaf values at a dotted path, flattening lists on the way."""
    values: List[Any] = [doc]
    for part in path.split("."):
        next_values = []
        for value in values:
            if isinstance(value, dict) and part in value:
                next_values.append(value[part])
        values = []
        for value in next_values:
            if isinstance(value, (list, tuple)):
                values.extend(value)
            else:
                values.append(value)
    return values


def _has_substring(values: Iterable[Any], needle: str) -> bool:
    needle = needle.lower()
    return any(isinstance(v, str) and needle in v.lower() for v in values)


def matches(doc: Dict[str, Any], query: Query) -> bool:
    for key, expected in query.equals.items():
        if expected not in resolve(doc, key):
            return False
    for key, needle in query.contains.items():
        if not _has_substring(resolve(doc, key), needle):
            return False
    if query.search:
        if not any(_has_substring(resolve(doc, f), query.search) for f in query.search_fields):
            return False
    return True


def _sort_key(doc: Dict[str, Any], path: str):
    values = resolve(doc, path)
    value = values[0] if values else None
    return (value is not None, value if value is not None else 0)


class InMemoryRepository(Repository):
    """Evaluates queries over a list of dicts.

    Read-only instances back the fallback tier; writable ones are handy in
    tests and scripts.
    """

    def __init__(self, collection: str, records: Iterable[Dict[str, Any]] = (), read_only: bool = False):
        self.collection = collection
        self.read_only = read_only
        self._records: List[Dict[str, Any]] = [dict(r) for r in records]

    @property
    def records(self) -> List[Dict[str, Any]]:
        return self._records

    def _check_writable(self):
        if self.read_only:
            raise TypeError(f"{self.collection} fallback data is read-only")

    def find(self, query):
        found = [r for r in self._records if matches(r, query)]
        for key, direction in reversed(query.sort):
            found.sort(key=lambda d: _sort_key(d, key), reverse=direction == DESCENDING)
        total = len(found)
        end = query.skip + query.limit if query.limit else None
        return [dict(r) for r in found[query.skip:end]], total

    def get(self, item_id):
        for r in self._records:
            if r.get("id") == item_id:
                return dict(r)
        return None

    def find_one(self, equals, exclude_id=None):
        query = Query(equals=equals)
        for r in self._records:
            if exclude_id is not None and r.get("id") == exclude_id:
                continue
            if matches(r, query):
                return dict(r)
        return None

    def create(self, doc):
        self._check_writable()
        now = utc_now().isoformat()
        record = {**doc, "id": str(ObjectId()), "createdAt": doc.get("createdAt", now), "updatedAt": now}
        self._records.append(record)
        return dict(record)

    def update(self, item_id, changes):
        self._check_writable()
        for r in self._records:
            if r.get("id") == item_id:
                r.update(changes)
                r["updatedAt"] = utc_now().isoformat()
                return dict(r)
        return None

    def delete(self, item_id):
        self._check_writable()
        before = len(self._records)
        self._records = [r for r in self._records if r.get("id") != item_id]
        return len(self._records) < before

    def increment(self, item_id, field_name, amount=1):
        self._check_writable()
        for r in self._records:
            if r.get("id") == item_id:
                r[field_name] = r.get(field_name, 0) + amount


# ---------- Failover ----------
class WriteResult(NamedTuple):
    record: Optional[Dict[str, Any]]
    demo: bool = False


class FailoverRepository:
    """Try the primary store; when it is unreachable, answer from the secondary.

    Reads are served by the secondary verbatim. Writes never reach the
    secondary: with `demo_writes` on they return a synthetic, non-durable
    result flagged `demo`, otherwise the store error propagates.
    """

    def __init__(self, primary: Repository, secondary: Repository, demo_writes: bool = True):
        self.primary = primary
        self.secondary = secondary
        self.demo_writes = demo_writes
        self.collection = primary.collection

    def _read(self, operation: str, *args, **kwargs):
        try:
            return getattr(self.primary, operation)(*args, **kwargs)
        except TransientStoreError as e:
            logger.warning(
                "Using fallback data",
                extra={"collection": self.collection, "operation": operation, "reason": str(e)},
            )
            return getattr(self.secondary, operation)(*args, **kwargs)

    def _demo(self, operation: str, e: TransientStoreError):
        if not self.demo_writes:
            raise e
        logger.info(
            "Store unavailable, answering in demo mode",
            extra={"collection": self.collection, "operation": operation, "reason": str(e)},
        )

    def find(self, query: Query) -> Tuple[List[Dict[str, Any]], int]:
        return self._read("find", query)

    def get(self, item_id: str) -> Optional[Dict[str, Any]]:
        return self._read("get", item_id)

    def find_one(self, equals: Dict[str, Any], exclude_id: str = None) -> Optional[Dict[str, Any]]:
        return self._read("find_one", equals, exclude_id=exclude_id)

    def create(self, doc: Dict[str, Any]) -> WriteResult:
        try:
            return WriteResult(self.primary.create(doc))
        except TransientStoreError as e:
            self._demo("create", e)
        now = utc_now().isoformat()
        record = {**doc, "id": str(int(time.time() * 1000)), "createdAt": now, "updatedAt": now}
        return WriteResult(record, demo=True)

    def update(self, item_id: str, changes: Dict[str, Any]) -> WriteResult:
        try:
            return WriteResult(self.primary.update(item_id, changes))
        except TransientStoreError as e:
            self._demo("update", e)
        existing = self.secondary.get(item_id)
        if existing is None:
            return WriteResult(None, demo=True)
        return WriteResult({**existing, **changes, "updatedAt": utc_now().isoformat()}, demo=True)

    def delete(self, item_id: str) -> WriteResult:
        try:
            return WriteResult({"id": item_id} if self.primary.delete(item_id) else None)
        except TransientStoreError as e:
            self._demo("delete", e)
        return WriteResult({"id": item_id}, demo=True)

    def increment(self, item_id: str, field_name: str, amount: int = 1) -> bool:
        """Counters are best effort: returns False when the store could not be reached."""
        try:
            self.primary.increment(item_id, field_name, amount)
        except TransientStoreError as e:
            logger.warning(
                "Skipping counter update",
                extra={"collection": self.collection, "field": field_name, "reason": str(e)},
            )
            return False
        return True
