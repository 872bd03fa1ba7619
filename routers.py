"""
Routing for content resources.

`add_content_routes` mounts the shared list/get/create/update/delete endpoints
for one collection on a router. Type-specific endpoints are declared on the
same router first so they win over `/{item_id}`.
"""

from typing import Any, Callable, Iterable, Optional

from fastapi import APIRouter, Body, Depends, Request

from auth import CurrentUser, get_current_user
from config import Settings, get_settings
from database import StoreProvider
from fallback_data import catalog_for
from repository import FailoverRepository, InMemoryRepository, MongoRepository, Repository
from resources import ContentResource, descriptor_for


class Resources:
    """Builds the failover repository and handler for a collection.

    `primary` maps a collection name to the repository of record; the
    fallback tier is always the read-only sample catalog.
    """

    def __init__(self, primary: Callable[[str], Repository], demo_writes: bool = True):
        self.primary = primary
        self.demo_writes = demo_writes

    def repository(self, collection: str) -> FailoverRepository:
        fallback = InMemoryRepository(collection, catalog_for(collection), read_only=True)
        return FailoverRepository(self.primary(collection), fallback, demo_writes=self.demo_writes)

    def __call__(self, collection: str) -> ContentResource:
        return ContentResource(descriptor_for(collection), self.repository(collection))


def get_store(request: Request) -> StoreProvider:
    return request.app.state.store


def get_resources(
    store: StoreProvider = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> Resources:
    return Resources(lambda collection: MongoRepository(store, collection), settings.DEMO_WRITES)


def add_content_routes(router: APIRouter, collection: str, skip: Iterable[str] = ()) -> APIRouter:
    skip = set(skip)

    if "list" not in skip:
        @router.get("")
        def list_items(
            request: Request,
            resources: Resources = Depends(get_resources),
            user: Optional[CurrentUser] = Depends(get_current_user),
        ):
            return resources(collection).list(request.query_params, user)

    if "create" not in skip:
        @router.post("", status_code=201)
        def create_item(
            payload: Any = Body(None),
            resources: Resources = Depends(get_resources),
            user: Optional[CurrentUser] = Depends(get_current_user),
        ):
            return resources(collection).create(payload, user)

    if "get" not in skip:
        @router.get("/{item_id}")
        def get_item(
            item_id: str,
            resources: Resources = Depends(get_resources),
            user: Optional[CurrentUser] = Depends(get_current_user),
        ):
            return resources(collection).get(item_id, user)

    if "update" not in skip:
        @router.api_route("/{item_id}", methods=["PUT", "PATCH"])
        def update_item(
            item_id: str,
            payload: Any = Body(None),
            resources: Resources = Depends(get_resources),
            user: Optional[CurrentUser] = Depends(get_current_user),
        ):
            return resources(collection).update(item_id, payload, user)

    if "delete" not in skip:
        @router.delete("/{item_id}")
        def delete_item(
            item_id: str,
            resources: Resources = Depends(get_resources),
            user: Optional[CurrentUser] = Depends(get_current_user),
        ):
            return resources(collection).delete(item_id, user)

    return router


def content_router(prefix: str, collection: str, skip: Iterable[str] = ()) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[descriptor_for(collection).label])
    return add_content_routes(router, collection, skip)
