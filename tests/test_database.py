import time
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

import pytest
from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError

import database
from database import StoreProvider, to_str_id
from errors import TransientStoreError


class FakeClient:
    """Stands in for MongoClient; `failures` pings fail before one succeeds."""

    created = []
    failures = 0
    ping_delay = 0

    def __init__(self, url, serverSelectionTimeoutMS=None):
        self.url = url
        self.timeout = serverSelectionTimeoutMS
        self.closed = False
        self.admin = self
        FakeClient.created.append(self)

    def command(self, name):
        time.sleep(FakeClient.ping_delay)
        if FakeClient.failures:
            FakeClient.failures -= 1
            raise ServerSelectionTimeoutError("No servers found")
        return {"ok": 1}

    def __getitem__(self, name):
        return {"database": name}

    def close(self):
        self.closed = True


@pytest.fixture(name="fake_client")
def fixture_fake_client(monkeypatch):
    FakeClient.created = []
    FakeClient.failures = 0
    FakeClient.ping_delay = 0
    monkeypatch.setattr(database, "MongoClient", FakeClient)
    return FakeClient


def test_acquire_retries_after_failure(fake_client):
    fake_client.failures = 1
    store = StoreProvider("mongodb://db:27017", "islamic-hub", timeout_ms=500)

    with pytest.raises(TransientStoreError):
        store.acquire()
    assert not store.connected
    assert fake_client.created[0].closed

    db = store.acquire()
    assert db == {"database": "islamic-hub"}
    assert store.connected
    assert fake_client.created[1].timeout == 500


def test_acquire_reuses_handle(fake_client):
    store = StoreProvider("mongodb://db:27017", "islamic-hub")
    first = store.acquire()
    assert store.acquire() is first
    assert len(fake_client.created) == 1

    store.close()
    assert fake_client.created[0].closed
    assert not store.connected


def test_concurrent_first_acquire_opens_one_client(fake_client):
    fake_client.ping_delay = 0.05
    store = StoreProvider("mongodb://db:27017", "islamic-hub")

    with ThreadPoolExecutor(max_workers=4) as pool:
        handles = list(pool.map(lambda _: store.acquire(), range(4)))

    assert len(fake_client.created) == 1
    assert all(h is handles[0] for h in handles)
    assert not fake_client.created[0].closed


def test_to_str_id_makes_documents_json_safe():
    oid, author = ObjectId(), ObjectId()
    when = datetime(2025, 1, 1, tzinfo=timezone.utc)
    doc = {"_id": oid, "author": author, "createdAt": when, "comments": [{"user": author}]}
    assert to_str_id(doc) == {
        "id": str(oid),
        "author": str(author),
        "createdAt": "2025-01-01T00:00:00+00:00",
        "comments": [{"user": str(author)}],
    }
    assert to_str_id(None) is None
