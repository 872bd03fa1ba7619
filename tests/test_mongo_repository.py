import mongomock
import pytest
from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError

from errors import TransientStoreError
from fallback_data import catalog_for
from repository import DESCENDING, FailoverRepository, InMemoryRepository, MongoRepository, Query


class MockStore:
    """A StoreProvider whose handle is an in-process mongomock database."""

    def __init__(self):
        self.db = mongomock.MongoClient()["islamic-hub"]

    def acquire(self):
        return self.db


class BrokenStore:
    def acquire(self):
        raise ServerSelectionTimeoutError("No servers found")


@pytest.fixture(name="hadiths")
def fixture_hadiths():
    repo = MongoRepository(MockStore(), "hadith")
    for n in range(5):
        repo.create({"collectionName": "bukhari", "hadithNumber": str(n), "chapter": f"Faith {n}", "views": 0})
    repo.create({"collectionName": "muslim", "hadithNumber": "9", "chapter": "Prayer (salah)", "views": 0})
    return repo


def test_create_returns_stored_record(hadiths):
    record = hadiths.create({"collectionName": "tirmidhi", "hadithNumber": "1987", "chapter": "Piety"})
    assert ObjectId.is_valid(record["id"])
    assert "_id" not in record
    assert isinstance(record["createdAt"], str)
    assert hadiths.get(record["id"])["chapter"] == "Piety"


def test_find_pages_and_counts(hadiths):
    items, total = hadiths.find(Query(
        equals={"collectionName": "bukhari"},
        sort=(("hadithNumber", DESCENDING),),
        skip=1,
        limit=2,
    ))
    assert total == 5
    assert [i["hadithNumber"] for i in items] == ["3", "2"]


def test_find_searches_literally_and_ignores_case(hadiths):
    items, total = hadiths.find(Query(search="(SALAH)", search_fields=("chapter",)))
    assert total == 1
    assert items[0]["collectionName"] == "muslim"

    _, total = hadiths.find(Query(contains={"chapter": "faith"}))
    assert total == 5


def test_find_one_excludes_the_record_being_updated(hadiths):
    record = hadiths.find_one({"collectionName": "muslim", "hadithNumber": "9"})
    key = {"collectionName": "muslim", "hadithNumber": "9"}

    assert hadiths.find_one(key, exclude_id=record["id"]) is None
    assert hadiths.find_one(key, exclude_id=str(ObjectId()))["id"] == record["id"]
    # An id the store could never have issued excludes nothing
    assert hadiths.find_one(key, exclude_id="1718000000000")["id"] == record["id"]


def test_update_returns_the_new_version(hadiths):
    record = hadiths.find_one({"hadithNumber": "9"})
    updated = hadiths.update(record["id"], {"chapter": "Prayer"})
    assert updated["chapter"] == "Prayer"
    assert "updatedAt" in updated
    assert hadiths.get(record["id"])["chapter"] == "Prayer"

    assert hadiths.update(str(ObjectId()), {"chapter": "x"}) is None
    assert hadiths.update("not-an-id", {"chapter": "x"}) is None


def test_delete_reports_whether_a_record_went(hadiths):
    record = hadiths.find_one({"hadithNumber": "9"})
    assert hadiths.delete(record["id"]) is True
    assert hadiths.delete(record["id"]) is False
    assert hadiths.delete("not-an-id") is False
    assert hadiths.get(record["id"]) is None


def test_increment(hadiths):
    record = hadiths.find_one({"hadithNumber": "9"})
    hadiths.increment(record["id"], "views")
    hadiths.increment(record["id"], "views", 2)
    assert hadiths.get(record["id"])["views"] == 3


def test_driver_errors_become_transient():
    repo = MongoRepository(BrokenStore(), "hadith")
    with pytest.raises(TransientStoreError):
        repo.find(Query())
    with pytest.raises(TransientStoreError):
        repo.create({"narrator": "Anas"})
    with pytest.raises(TransientStoreError):
        repo.get(str(ObjectId()))


def test_unreachable_store_falls_back_to_catalog():
    secondary = InMemoryRepository("hadith", catalog_for("hadith"), read_only=True)
    repo = FailoverRepository(MongoRepository(BrokenStore(), "hadith"), secondary)

    items, total = repo.find(Query(equals={"collectionName": "muslim"}))
    assert total == 1
    assert items[0]["narrator"] == "Abu Hurairah"
    assert repo.create({"narrator": "Anas"}).demo is True
