import pytest
from fastapi.testclient import TestClient

from auth import CurrentUser, issue_token
from errors import TransientStoreError
from fallback_data import catalog_for
from main import app
from repository import InMemoryRepository, Repository
from routers import Resources, get_resources

ADMIN = CurrentUser(id="65f000000000000000000001", name="Site Admin", email="admin@example.com", role="admin")
READER = CurrentUser(id="65f000000000000000000002", name="Reader", email="reader@example.com")
OTHER_READER = CurrentUser(id="65f000000000000000000003", name="Other Reader", email="other@example.com")


class UnreachableRepository(Repository):
    """Primary tier whose every call fails the way a dead MongoDB connection does."""

    def __init__(self, collection):
        self.collection = collection

    def _fail(self, *args, **kwargs):
        raise TransientStoreError("Database connection failed")

    find = get = find_one = create = update = delete = increment = _fail


class FakeStore:
    """Primary tier for tests: one writable in-memory repository per collection."""

    def __init__(self):
        self.reachable = True
        self.repos = {}

    def __call__(self, collection: str) -> Repository:
        if not self.reachable:
            return UnreachableRepository(collection)
        return self.repos.setdefault(collection, InMemoryRepository(collection))

    def load(self, collection: str, records=None) -> InMemoryRepository:
        """Fill a collection, by default with the sample catalog."""
        records = catalog_for(collection) if records is None else records
        self.repos[collection] = InMemoryRepository(collection, records)
        return self.repos[collection]

    def records(self, collection: str):
        return self(collection).records


@pytest.fixture(name="store")
def fixture_store():
    return FakeStore()


@pytest.fixture(name="resources")
def fixture_resources(store):
    return Resources(store, demo_writes=True)


@pytest.fixture(name="client")
def fixture_client(resources):
    app.dependency_overrides[get_resources] = lambda: resources
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


def bearer(user: CurrentUser) -> dict:
    return {"Authorization": f"Bearer {issue_token(user)}"}


@pytest.fixture
def admin_headers():
    return bearer(ADMIN)


@pytest.fixture
def reader_headers():
    return bearer(READER)


@pytest.fixture
def other_headers():
    return bearer(OTHER_READER)
