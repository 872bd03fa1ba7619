"""
The content resource contract.

One `ContentResource` serves every content type. A `ResourceDescriptor`
supplies what differs between types: schema, filters, searchable fields,
default order, uniqueness keys and who may write.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Type

from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from auth import CurrentUser, hash_password, require_admin, require_user
from errors import NotFoundError, ValidationError
from repository import ASCENDING, DESCENDING, FailoverRepository, Query

logger = logging.getLogger(__name__)

PUBLIC = "public"
USER = "user"
ADMIN = "admin"

REQUIRED_ERROR_TYPES = {"missing", "string_too_short", "too_short"}


@dataclass(frozen=True)
class Filter:
    """Maps a query parameter onto a record field.

    kind: "exact" compares verbatim, "icontains" is a case-insensitive
    substring match and "flag" only applies when the parameter is "true".
    """
    param: str
    field: str
    kind: str = "exact"


@dataclass(frozen=True)
class ResourceDescriptor:
    collection: str
    item_key: str
    list_key: str
    label: str
    model: Type[BaseModel]
    search_fields: Tuple[str, ...] = ()
    filters: Tuple[Filter, ...] = ()
    base_filter: Mapping[str, Any] = field(default_factory=dict)
    sort: Tuple[Tuple[str, int], ...] = (("createdAt", DESCENDING),)
    default_limit: int = 12
    unique_keys: Tuple[str, ...] = ()
    conflict_message: str = "Record already exists"
    read_role: str = PUBLIC
    create_role: str = ADMIN
    modify_role: str = ADMIN
    owner_field: Optional[str] = None
    # Fields a PUT may change; None means every schema field
    update_fields: Optional[Tuple[str, ...]] = None
    # Hooks: prepare(doc, user) fills server-side fields on create; present(record) shapes output
    prepare: Optional[Callable[[Dict[str, Any], CurrentUser], Dict[str, Any]]] = None
    present: Optional[Callable[[Dict[str, Any]], Dict[str, Any]]] = None


def parse_positive_int(value: Any, default: int) -> int:
    """Non-numeric, missing or non-positive values fall back to the default."""
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


def paginate(page: int, limit: int, total: int) -> Dict[str, int]:
    return {"page": page, "limit": limit, "total": total, "pages": math.ceil(total / limit)}


def check_role(role: str, user: Optional[CurrentUser]) -> Optional[CurrentUser]:
    if role == ADMIN:
        return require_admin(user)
    if role == USER:
        return require_user(user)
    return user


def validate_payload(model: Type[BaseModel], payload: Any) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    try:
        return model.model_validate(payload).model_dump()
    except SchemaError as e:
        errors = e.errors()
        if any(err["type"] in REQUIRED_ERROR_TYPES for err in errors):
            raise ValidationError("All required fields must be provided") from None
        first = errors[0]
        where = ".".join(str(p) for p in first["loc"])
        raise ValidationError(f"Invalid {where}: {first['msg']}") from None


class ContentResource:
    def __init__(self, descriptor: ResourceDescriptor, repository: FailoverRepository):
        self.d = descriptor
        self.repo = repository

    # ---------- helpers ----------
    def _present(self, record: Dict[str, Any]) -> Dict[str, Any]:
        return self.d.present(record) if self.d.present else record

    def _owner_scope(self, user: Optional[CurrentUser]) -> Dict[str, Any]:
        if self.d.owner_field and user is not None:
            return {self.d.owner_field: user.id}
        return {}

    def _owned(self, record: Dict[str, Any], user: Optional[CurrentUser]) -> bool:
        if not self.d.owner_field or user is None or user.is_admin:
            return True
        return record.get(self.d.owner_field) == user.id

    def _ensure_unique(self, doc: Dict[str, Any], exclude_id: str = None):
        if not self.d.unique_keys:
            return
        key = {k: doc.get(k) for k in self.d.unique_keys}
        if self.repo.find_one(key, exclude_id=exclude_id) is not None:
            raise ValidationError(self.d.conflict_message)

    def message(self, verb: str, demo: bool = False) -> str:
        message = f"{self.d.label} {verb} successfully"
        return f"{message} (demo mode)" if demo else message

    def build_query(self, params: Mapping[str, Any], user: Optional[CurrentUser] = None, scoped: bool = True) -> Tuple[Query, int, int]:
        page = parse_positive_int(params.get("page"), 1)
        limit = parse_positive_int(params.get("limit"), self.d.default_limit)

        equals = dict(self.d.base_filter)
        contains = {}
        for f in self.d.filters:
            value = params.get(f.param)
            if value in (None, ""):
                continue
            if f.kind == "flag":
                if str(value).lower() == "true":
                    equals[f.field] = True
            elif f.kind == "icontains":
                contains[f.field] = str(value)
            else:
                equals[f.field] = value
        if scoped:
            equals.update(self._owner_scope(user))

        search = (params.get("search") or "").strip() or None
        query = Query(
            equals=equals,
            contains=contains,
            search=search,
            search_fields=self.d.search_fields,
            sort=self.d.sort,
            skip=(page - 1) * limit,
            limit=limit,
        )
        return query, page, limit

    # ---------- reads ----------
    def list(self, params: Mapping[str, Any], user: Optional[CurrentUser] = None, scoped: bool = True) -> Dict[str, Any]:
        """One page of records. `scoped=False` lifts the owner filter for admin listings."""
        user = check_role(self.d.read_role, user)
        query, page, limit = self.build_query(params, user, scoped)
        items, total = self.repo.find(query)
        return {
            self.d.list_key: [self._present(r) for r in items],
            "pagination": paginate(page, limit, total),
        }

    def fetch(self, item_id: str, user: Optional[CurrentUser] = None) -> Dict[str, Any]:
        record = self.repo.get(item_id)
        if record is None or not self._owned(record, user):
            raise NotFoundError(f"{self.d.label} not found")
        return record

    def get(self, item_id: str, user: Optional[CurrentUser] = None) -> Dict[str, Any]:
        user = check_role(self.d.read_role, user)
        return {self.d.item_key: self._present(self.fetch(item_id, user))}

    def get_by(self, field_name: str, value: Any, user: Optional[CurrentUser] = None) -> Dict[str, Any]:
        check_role(self.d.read_role, user)
        record = self.repo.find_one({field_name: value})
        if record is None:
            raise NotFoundError(f"{self.d.label} not found")
        return {self.d.item_key: self._present(record)}

    # ---------- writes ----------
    def create(self, payload: Any, user: Optional[CurrentUser] = None) -> Dict[str, Any]:
        user = check_role(self.d.create_role, user)
        doc = validate_payload(self.d.model, payload)
        if self.d.prepare:
            doc = self.d.prepare(doc, user)
        self._ensure_unique(doc)
        result = self.repo.create(doc)
        logger.info(
            "Created record",
            extra={"collection": self.d.collection, "record_id": result.record["id"], "demo": result.demo},
        )
        return {
            "message": self.message("created", result.demo),
            self.d.item_key: self._present(result.record),
        }

    def update(self, item_id: str, payload: Any, user: Optional[CurrentUser] = None) -> Dict[str, Any]:
        user = check_role(self.d.modify_role, user)
        if not isinstance(payload, dict):
            raise ValidationError("Request body must be a JSON object")
        existing = self.fetch(item_id, user)

        # Ownership never moves through an update
        allowed = [f for f in self.d.update_fields or self.d.model.model_fields if f != self.d.owner_field]
        # Absent or null fields keep their current value
        changes = {k: v for k, v in payload.items() if k in allowed and v is not None}
        merged = validate_payload(self.d.model, {**existing, **changes})
        changes = {k: merged[k] for k in changes}

        self._ensure_unique(merged, exclude_id=item_id)
        result = self.repo.update(item_id, changes)
        if result.record is None:
            raise NotFoundError(f"{self.d.label} not found")
        return {
            "message": self.message("updated", result.demo),
            self.d.item_key: self._present(result.record),
        }

    def delete(self, item_id: str, user: Optional[CurrentUser] = None) -> Dict[str, Any]:
        user = check_role(self.d.modify_role, user)
        self.fetch(item_id, user)
        result = self.repo.delete(item_id)
        if result.record is None:
            raise NotFoundError(f"{self.d.label} not found")
        logger.info("Deleted record", extra={"collection": self.d.collection, "record_id": item_id})
        return {"message": self.message("deleted", result.demo)}


# ---------- Per-type hooks ----------
def _author(user: CurrentUser) -> Dict[str, Any]:
    return {"id": user.id, "name": user.name, "email": user.email}


def _with_author(doc: Dict[str, Any], user: CurrentUser) -> Dict[str, Any]:
    return {**doc, "author": _author(user), "views": 0}


def _new_video(doc: Dict[str, Any], user: CurrentUser) -> Dict[str, Any]:
    return {**doc, "author": _author(user), "views": 0, "likes": [], "dislikes": [], "bookmarks": [], "comments": []}


def count_reactions(record: Dict[str, Any]) -> Dict[str, Any]:
    """Video lists expose reaction counts, not the user ids behind them."""
    shaped = dict(record)
    for key in ("likes", "dislikes", "bookmarks"):
        value = shaped.get(key)
        if isinstance(value, list):
            shaped[key] = len(value)
        elif value is None:
            shaped[key] = 0
    return shaped


def _new_order(doc: Dict[str, Any], user: CurrentUser) -> Dict[str, Any]:
    total = doc.get("total")
    if total is None:
        total = round(sum(item["price"] * item["quantity"] for item in doc["items"]), 2)
    status = "pending" if doc["paymentMethod"] == "cod" else "paid"
    return {**doc, "user": user.id, "total": total, "status": status}


def _owned_by_caller(doc: Dict[str, Any], user: CurrentUser) -> Dict[str, Any]:
    return {**doc, "user": user.id}


def _hashed_password(doc: Dict[str, Any], user: CurrentUser) -> Dict[str, Any]:
    return {**doc, "password": hash_password(doc["password"])}


def _new_question(doc: Dict[str, Any], user: CurrentUser) -> Dict[str, Any]:
    return {**doc, "user": user.id, "answer": "", "answeredBy": None, "status": "pending"}


def public_user(record: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": record.get("id"),
        "name": record.get("name"),
        "email": record.get("email"),
        "role": record.get("role", "user"),
        "avatar": record.get("avatar", ""),
        "createdAt": record.get("createdAt"),
    }


def _build_descriptors() -> Dict[str, ResourceDescriptor]:
    import schemas

    descriptors = [
        ResourceDescriptor(
            collection="quran", item_key="surah", list_key="surahs", label="Surah",
            model=schemas.Quran,
            search_fields=("surahName", "surahNameArabic", "surahNameEnglish",
                           "ayahs.arabicText", "ayahs.englishTranslation", "ayahs.banglaTranslation"),
            filters=(Filter("revelationPlace", "revelationPlace"),),
            sort=(("surahNumber", ASCENDING),),
            unique_keys=("surahNumber",),
            conflict_message="Surah with this number already exists",
        ),
        ResourceDescriptor(
            collection="hadith", item_key="hadith", list_key="hadiths", label="Hadith",
            model=schemas.Hadith,
            search_fields=("arabicText", "englishTranslation", "banglaTranslation", "narrator", "chapter", "tags"),
            filters=(Filter("collection", "collectionName"), Filter("chapter", "chapter", "icontains")),
            unique_keys=("collectionName", "hadithNumber"),
            conflict_message="Hadith with this number already exists in this collection",
        ),
        ResourceDescriptor(
            collection="news", item_key="news", list_key="news", label="News",
            model=schemas.News,
            search_fields=("title", "content", "excerpt", "tags"),
            filters=(Filter("category", "category"), Filter("featured", "featured", "flag")),
            base_filter={"published": True},
            default_limit=10,
            prepare=_with_author,
        ),
        ResourceDescriptor(
            collection="product", item_key="product", list_key="products", label="Product",
            model=schemas.Product,
            search_fields=("name", "description", "tags"),
            filters=(Filter("category", "category"), Filter("featured", "featured", "flag")),
            base_filter={"active": True},
            unique_keys=("sku",),
            conflict_message="Product with this SKU already exists",
        ),
        ResourceDescriptor(
            collection="video", item_key="video", list_key="videos", label="Video",
            model=schemas.Video,
            search_fields=("title", "description"),
            filters=(Filter("category", "category"),),
            default_limit=10,
            prepare=_new_video,
            present=count_reactions,
        ),
        ResourceDescriptor(
            collection="navbaritem", item_key="navbarItem", list_key="navbarItems", label="Navbar item",
            model=schemas.NavbarItem,
            search_fields=("title", "titleBengali"),
            filters=(Filter("type", "type"),),
            base_filter={"isActive": True},
            sort=(("order", ASCENDING), ("createdAt", ASCENDING)),
            default_limit=50,
        ),
        ResourceDescriptor(
            collection="order", item_key="order", list_key="orders", label="Order",
            model=schemas.Order,
            filters=(Filter("status", "status"),),
            default_limit=20,
            read_role=USER,
            create_role=USER,
            owner_field="user",
            update_fields=("status",),
            prepare=_new_order,
        ),
        ResourceDescriptor(
            collection="bookmark", item_key="bookmark", list_key="bookmarks", label="Bookmark",
            model=schemas.Bookmark,
            search_fields=("contentTitle",),
            filters=(Filter("type", "contentType"),),
            default_limit=20,
            unique_keys=("user", "contentType", "contentId"),
            conflict_message="Content already bookmarked",
            read_role=USER,
            create_role=USER,
            modify_role=USER,
            owner_field="user",
            prepare=_owned_by_caller,
        ),
        ResourceDescriptor(
            collection="booking", item_key="booking", list_key="bookings", label="Booking",
            model=schemas.Booking,
            filters=(Filter("status", "status"),),
            sort=(("bookingDate", DESCENDING),),
            default_limit=20,
            unique_keys=("user", "video"),
            conflict_message="Video already booked",
            read_role=USER,
            create_role=USER,
            modify_role=USER,
            owner_field="user",
            update_fields=("status", "notes", "reminderDate"),
            prepare=_owned_by_caller,
        ),
        ResourceDescriptor(
            collection="user", item_key="user", list_key="users", label="User",
            model=schemas.User,
            search_fields=("name", "email"),
            filters=(Filter("role", "role"),),
            default_limit=20,
            unique_keys=("email",),
            conflict_message="Email already registered",
            read_role=ADMIN,
            update_fields=("name", "role", "avatar"),
            prepare=_hashed_password,
            present=public_user,
        ),
        ResourceDescriptor(
            collection="question", item_key="question", list_key="questions", label="Question",
            model=schemas.Question,
            search_fields=("text",),
            filters=(Filter("status", "status"),),
            default_limit=20,
            create_role=USER,
            update_fields=("text",),
            prepare=_new_question,
        ),
    ]
    return {d.collection: d for d in descriptors}


DESCRIPTORS: Dict[str, ResourceDescriptor] = _build_descriptors()


def descriptor_for(collection: str) -> ResourceDescriptor:
    return DESCRIPTORS[collection]
