import logging
import os
from contextlib import asynccontextmanager
from typing import Any, Optional

from bson import ObjectId
from fastapi import APIRouter, Body, Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, EmailStr, Field
from pymongo.errors import PyMongoError

import schemas
from auth import CurrentUser, get_current_user, hash_password, issue_token, require_admin, require_user, verify_password
from config import Settings, get_settings
from database import StoreProvider, utc_now
from errors import AuthenticationError, NotFoundError, TransientStoreError, ValidationError, error_response, register_exception_handlers
from fallback_data import CATALOG, thaw
from logging_config import setup_logging
from resources import validate_payload
from routers import Resources, add_content_routes, content_router, get_resources, get_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings)
    app.state.store = StoreProvider(settings.DATABASE_URL, settings.DATABASE_NAME, settings.DATABASE_TIMEOUT_MS)
    logger.info("Starting service", extra={"service": settings.SERVICE_NAME, "environment": settings.ENVIRONMENT})
    yield
    app.state.store.close()


app = FastAPI(title="Islamic Hub API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.get("/")
def read_root(settings: Settings = Depends(get_settings)):
    return {"message": f"{settings.SERVICE_NAME} running"}


# ---------- Auth Models ----------
class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


def set_token_cookie(response: Response, user: CurrentUser, settings: Settings):
    response.set_cookie(
        settings.TOKEN_COOKIE_NAME,
        issue_token(user, settings),
        max_age=settings.TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
        httponly=True,
        samesite="lax",
        secure=settings.ENVIRONMENT == "production",
        path="/",
    )


def to_current_user(record) -> CurrentUser:
    return CurrentUser(
        id=record["id"],
        name=record["name"],
        email=record["email"],
        role=record.get("role", "user"),
        avatar=record.get("avatar") or "",
    )


# ---------- Auth Endpoints ----------
auth_router = APIRouter(prefix="/api/auth", tags=["Auth"])


@auth_router.post("/register", status_code=201)
def register(
    response: Response,
    payload: Any = Body(None),
    resources: Resources = Depends(get_resources),
    settings: Settings = Depends(get_settings),
):
    data = validate_payload(RegisterRequest, payload)
    if len(data["password"]) < 6:
        raise ValidationError("Password must be at least 6 characters")

    users = resources.repository("user")
    email = data["email"].lower()
    if users.find_one({"email": email}) is not None:
        raise ValidationError("Email already registered")

    doc = validate_payload(schemas.User, {
        "name": data["name"],
        "email": email,
        "password": hash_password(data["password"]),
        "role": "user",
    })
    result = users.create(doc)
    user = to_current_user(result.record)
    set_token_cookie(response, user, settings)
    logger.info("Registered user", extra={"user_id": user.id, "demo": result.demo})

    message = "User registered successfully"
    return {"message": f"{message} (demo mode)" if result.demo else message, "user": user.model_dump()}


@auth_router.post("/login")
def login(
    response: Response,
    payload: Any = Body(None),
    resources: Resources = Depends(get_resources),
    settings: Settings = Depends(get_settings),
):
    data = validate_payload(LoginRequest, payload)
    record = resources.repository("user").find_one({"email": data["email"].lower()})
    if not record or not verify_password(data["password"], record.get("password", "")):
        raise AuthenticationError("Invalid credentials")

    user = to_current_user(record)
    set_token_cookie(response, user, settings)
    return {"message": "Login successful", "user": user.model_dump()}


@auth_router.post("/logout")
def logout(response: Response, settings: Settings = Depends(get_settings)):
    response.delete_cookie(settings.TOKEN_COOKIE_NAME, path="/")
    return {"message": "Logged out successfully"}


@auth_router.get("/me")
def me(
    user: Optional[CurrentUser] = Depends(get_current_user),
    resources: Resources = Depends(get_resources),
    settings: Settings = Depends(get_settings),
):
    user = require_user(user)
    try:
        record = resources.repository("user").primary.get(user.id)
    except TransientStoreError as e:
        logger.warning("Serving identity from token", extra={"user_id": user.id, "reason": str(e)})
        return {"user": user.model_dump()}

    if record is None:
        # Token for an account the store no longer has
        rejected = error_response(401, "Not authenticated")
        rejected.delete_cookie(settings.TOKEN_COOKIE_NAME, path="/")
        return rejected
    return {"user": to_current_user(record).model_dump()}


# ---------- Quran ----------
quran_router = APIRouter(prefix="/api/quran", tags=["Surah"])


@quran_router.get("")
def list_surahs(
    request: Request,
    surah: Optional[str] = None,
    resources: Resources = Depends(get_resources),
    user: Optional[CurrentUser] = Depends(get_current_user),
):
    resource = resources("quran")
    if surah is not None:
        try:
            number = int(surah)
        except ValueError:
            raise ValidationError("Invalid surah number") from None
        return resource.get_by("surahNumber", number, user)
    return resource.list(request.query_params, user)


add_content_routes(quran_router, "quran", skip=("list",))


# ---------- News ----------
news_router = APIRouter(prefix="/api/news", tags=["News"])


@news_router.get("/{item_id}")
def get_news(
    item_id: str,
    resources: Resources = Depends(get_resources),
    user: Optional[CurrentUser] = Depends(get_current_user),
):
    resource = resources("news")
    record = resource.fetch(item_id, user)
    if resource.repo.increment(item_id, "views"):
        record["views"] = record.get("views", 0) + 1
    return {"news": record}


add_content_routes(news_router, "news", skip=("get",))


# ---------- Orders ----------
orders_router = APIRouter(prefix="/api/orders", tags=["Order"])


@orders_router.get("/admin")
def list_all_orders(
    request: Request,
    resources: Resources = Depends(get_resources),
    user: Optional[CurrentUser] = Depends(get_current_user),
):
    require_admin(user)
    return resources("order").list(request.query_params, user, scoped=False)


add_content_routes(orders_router, "order")


# ---------- Bookmarks ----------
bookmarks_router = APIRouter(prefix="/api/bookmarks", tags=["Bookmark"])


@bookmarks_router.post("/check")
def check_bookmark(
    payload: Any = Body(None),
    resources: Resources = Depends(get_resources),
    user: Optional[CurrentUser] = Depends(get_current_user),
):
    user = require_user(user)
    payload = payload if isinstance(payload, dict) else {}
    content_type, content_id = payload.get("contentType"), payload.get("contentId")
    if not content_type or not content_id:
        raise ValidationError("Content type and ID are required")

    bookmark = resources.repository("bookmark").find_one(
        {"user": user.id, "contentType": content_type, "contentId": content_id}
    )
    return {"isBookmarked": bookmark is not None, "bookmark": bookmark}


add_content_routes(bookmarks_router, "bookmark", skip=("update",))


# ---------- Bookings ----------
bookings_router = APIRouter(prefix="/api/bookings", tags=["Booking"])


@bookings_router.post("", status_code=201)
def book_video(
    payload: Any = Body(None),
    resources: Resources = Depends(get_resources),
    user: Optional[CurrentUser] = Depends(get_current_user),
):
    """Book a video for later. The booking keeps a copy of the video's details."""
    user = require_user(user)
    payload = payload if isinstance(payload, dict) else {}
    video_id, booking_date = payload.get("videoId"), payload.get("bookingDate")
    if not video_id or not booking_date:
        raise ValidationError("Video ID and booking date are required")

    video = resources("video").fetch(str(video_id))
    return resources("booking").create({
        "video": video["id"],
        "videoTitle": video.get("title"),
        "videoDescription": video.get("description") or "",
        "videoThumbnail": video.get("thumbnail") or "",
        "videoUrl": video.get("videoUrl") or "",
        "videoCategory": video.get("category") or "",
        "videoDuration": video.get("duration") or 0,
        "videoAuthor": video.get("author"),
        "bookingDate": booking_date,
        "notes": payload.get("notes") or "",
        "reminderDate": payload.get("reminderDate"),
    }, user)


add_content_routes(bookings_router, "booking", skip=("create",))


# ---------- Videos ----------
videos_router = APIRouter(prefix="/api/videos", tags=["Video"])

REACTIONS = ("likes", "dislikes", "bookmarks")


def _reaction_lists(video) -> dict:
    return {key: list(video[key]) if isinstance(video.get(key), list) else [] for key in REACTIONS}


def _reaction_summary(lists: dict, user_id: Optional[str]) -> dict:
    return {
        "likes": len(lists["likes"]),
        "dislikes": len(lists["dislikes"]),
        "bookmarks": len(lists["bookmarks"]),
        "userLiked": user_id in lists["likes"],
        "userDisliked": user_id in lists["dislikes"],
        "userBookmarked": user_id in lists["bookmarks"],
    }


def toggle_reaction(lists: dict, action: str, user_id: str):
    """Flip the caller's reaction in place. Like and dislike exclude each other."""
    key = {"like": "likes", "dislike": "dislikes", "bookmark": "bookmarks"}[action]
    if user_id in lists[key]:
        lists[key].remove(user_id)
        return f"{action.capitalize()} removed", False

    lists[key].append(user_id)
    opposite = {"likes": "dislikes", "dislikes": "likes"}.get(key)
    if opposite and user_id in lists[opposite]:
        lists[opposite].remove(user_id)
    past = {"like": "Video liked", "dislike": "Video disliked", "bookmark": "Video bookmarked"}[action]
    return past, True


@videos_router.post("/{item_id}/interactions")
def react_to_video(
    item_id: str,
    payload: Any = Body(None),
    resources: Resources = Depends(get_resources),
    user: Optional[CurrentUser] = Depends(get_current_user),
):
    user = require_user(user)
    action = payload.get("action") if isinstance(payload, dict) else None
    if action not in ("like", "dislike", "bookmark"):
        raise ValidationError("Invalid action")

    resource = resources("video")
    lists = _reaction_lists(resource.fetch(item_id))
    message, updated = toggle_reaction(lists, action, user.id)
    result = resource.repo.update(item_id, lists)
    if result.demo:
        message = f"{message} (demo mode)"
    return {"message": message, "updated": updated, **_reaction_summary(lists, user.id)}


@videos_router.get("/{item_id}/interactions")
def video_interactions(
    item_id: str,
    resources: Resources = Depends(get_resources),
    user: Optional[CurrentUser] = Depends(get_current_user),
):
    lists = _reaction_lists(resources("video").fetch(item_id))
    return _reaction_summary(lists, user.id if user else None)


@videos_router.get("/{item_id}/comments")
def list_comments(item_id: str, resources: Resources = Depends(get_resources)):
    video = resources("video").fetch(item_id)
    return {"comments": video.get("comments") or []}


@videos_router.post("/{item_id}/comments", status_code=201)
def add_comment(
    item_id: str,
    payload: Any = Body(None),
    resources: Resources = Depends(get_resources),
    user: Optional[CurrentUser] = Depends(get_current_user),
):
    user = require_user(user)
    text = payload.get("text") if isinstance(payload, dict) else None
    if not isinstance(text, str) or not text.strip():
        raise ValidationError("Comment text is required")

    resource = resources("video")
    video = resource.fetch(item_id)
    comment = {
        "id": str(ObjectId()),
        "text": text.strip(),
        "user": {"id": user.id, "name": user.name, "email": user.email, "avatar": user.avatar},
        "createdAt": utc_now().isoformat(),
        "likes": 0,
        "replies": [],
    }
    result = resource.repo.update(item_id, {"comments": list(video.get("comments") or []) + [comment]})
    message = "Comment added successfully"
    return {"message": f"{message} (demo mode)" if result.demo else message, "comment": comment}


add_content_routes(videos_router, "video")


# ---------- Questions ----------
questions_router = APIRouter(prefix="/api/questions", tags=["Question"])


@questions_router.post("/{item_id}/answer")
def answer_question(
    item_id: str,
    payload: Any = Body(None),
    resources: Resources = Depends(get_resources),
    user: Optional[CurrentUser] = Depends(get_current_user),
):
    user = require_admin(user)
    answer = payload.get("answer") if isinstance(payload, dict) else None
    if not isinstance(answer, str) or len(answer.strip()) < 3:
        raise ValidationError("Answer is too short")

    resource = resources("question")
    question = resource.fetch(item_id)
    result = resource.repo.update(item_id, {
        "answer": answer.strip(),
        "answeredBy": question.get("answeredBy") or user.id,
        "status": "answered",
    })
    if result.record is None:
        raise NotFoundError("Question not found")
    return {"message": resource.message("answered", result.demo), "question": result.record}


add_content_routes(questions_router, "question")


# ---------- Seed Data ----------
SEED_KEYS = {
    "quran": ("surahNumber",),
    "hadith": ("collectionName", "hadithNumber"),
    "product": ("sku",),
    "news": ("title",),
    "video": ("title",),
    "navbaritem": ("title", "type"),
}


@app.post("/api/seed")
def seed(
    resources: Resources = Depends(get_resources),
    user: Optional[CurrentUser] = Depends(get_current_user),
):
    """Load the sample catalog into the store. Records already present are left alone."""
    require_admin(user)
    inserted, skipped = {}, {}
    for collection, records in CATALOG.items():
        # Straight to the store: seeding never falls back or fakes writes
        repo = resources.repository(collection).primary
        inserted[collection] = skipped[collection] = 0
        for record in records:
            doc = {k: v for k, v in thaw(record).items() if k not in ("id", "createdAt")}
            if collection == "video":
                # Stored videos track reactions as user id lists, not sample counts
                doc.update({key: [] for key in REACTIONS})
            key = {k: doc[k] for k in SEED_KEYS[collection]}
            if repo.find_one(key) is not None:
                skipped[collection] += 1
                continue
            repo.create(doc)
            inserted[collection] += 1

    logger.info("Seeded database", extra={"inserted": inserted, "skipped": skipped})
    return {"message": "Database seeded successfully", "inserted": inserted, "skipped": skipped}


@app.get("/test")
def test_database(store: StoreProvider = Depends(get_store), settings: Settings = Depends(get_settings)):
    response = {
        "backend": "✅ Running",
        "database": "❌ Not Available",
        "database_name": settings.DATABASE_NAME,
    }
    try:
        db = store.acquire()
        response["collections"] = db.list_collection_names()
        response["database"] = "✅ Connected"
    except (TransientStoreError, PyMongoError) as e:
        response["error"] = str(e)
    return response


app.include_router(auth_router)
app.include_router(quran_router)
app.include_router(content_router("/api/hadith", "hadith"))
app.include_router(news_router)
app.include_router(content_router("/api/products", "product"))
app.include_router(videos_router)
app.include_router(content_router("/api/navbar", "navbaritem"))
app.include_router(orders_router)
app.include_router(bookmarks_router)
app.include_router(bookings_router)
app.include_router(content_router("/api/users", "user"))
app.include_router(questions_router)


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)
