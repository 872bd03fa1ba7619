"""
Database Schemas

MongoDB collection schemas as Pydantic models. They validate request bodies
before anything is written.

Each Pydantic model represents a collection in the database.
Model name is converted to lowercase for the collection name:
- Quran -> "quran" collection
- NavbarItem -> "navbaritem" collection
- Product -> "product" collection
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


def split_tags(value: Any) -> List[str]:
    """Accept "a, b, ,c" or ["a ", "", "b"]; return trimmed, non-empty tags."""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [str(t).strip() for t in value if str(t).strip()]


class Document(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)


class TaggedDocument(Document):
    tags: List[str] = Field(default_factory=list, description="Free-form tags")

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, v):
        return split_tags(v)


# ---------- Quran ----------
class Ayah(Document):
    ayahNumber: int = Field(..., ge=1)
    arabicText: str = Field(..., min_length=1)
    englishTranslation: str = Field(..., min_length=1)
    banglaTranslation: str = Field(..., min_length=1)
    audioUrl: str = ""


class Quran(Document):
    """
    Quran surahs with their ayahs
    Collection name: "quran"
    """
    surahNumber: int = Field(..., ge=1, le=114, description="Unique surah number")
    surahName: str = Field(..., min_length=1)
    surahNameArabic: str = Field(..., min_length=1)
    surahNameEnglish: str = Field(..., min_length=1)
    ayahs: List[Ayah] = Field(..., min_length=1)
    totalAyahs: int = Field(..., ge=1)
    revelationPlace: Literal["makkah", "madinah"]


# ---------- Hadith ----------
class Hadith(TaggedDocument):
    """
    Hadith records, unique per (collectionName, hadithNumber)
    Collection name: "hadith"
    """
    collectionName: Literal["bukhari", "muslim", "tirmidhi", "abu_dawud", "nasai", "ibn_majah"]
    hadithNumber: str = Field(..., min_length=1)
    arabicText: str = Field(..., min_length=1)
    englishTranslation: str = Field(..., min_length=1)
    banglaTranslation: str = Field(..., min_length=1)
    narrator: str = Field(..., min_length=1)
    chapter: str = Field(..., min_length=1)
    book: str = Field(..., min_length=1)
    volume: str = ""
    page: str = ""

    @field_validator("hadithNumber", "volume", "page", mode="before")
    @classmethod
    def numbers_as_text(cls, v):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v if v is not None else ""


# ---------- News ----------
class News(TaggedDocument):
    """
    News articles
    Collection name: "news"
    """
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    excerpt: str = Field(..., min_length=1, max_length=200)
    image: str = Field(..., min_length=1)
    category: Literal["islamic", "world", "local", "technology", "education"]
    author: Optional[Dict[str, Any]] = Field(None, description="Set from the caller on create")
    published: bool = True
    featured: bool = False


# ---------- Products ----------
class Dimensions(BaseModel):
    length: float = Field(0, ge=0)
    width: float = Field(0, ge=0)
    height: float = Field(0, ge=0)


class Product(TaggedDocument):
    """
    Products collection schema
    Collection name: "product"
    """
    name: str = Field(..., min_length=1, description="Product name")
    description: str = Field(..., min_length=1, description="Product description")
    price: float = Field(..., ge=0, description="Price in BDT")
    originalPrice: float = Field(0, ge=0)
    images: List[str] = Field(..., min_length=1, description="Image URLs, first one is the cover")
    category: Literal["books", "clothing", "prayer_mats", "tasbih", "perfumes", "jewelry"]
    stock: int = Field(0, ge=0)
    sku: str = Field(..., min_length=1, description="Unique stock keeping unit")
    weight: float = Field(0, ge=0)
    dimensions: Optional[Dimensions] = None
    features: List[str] = Field(default_factory=list)
    featured: bool = False
    active: bool = True

    @field_validator("images", mode="before")
    @classmethod
    def single_image(cls, v):
        if isinstance(v, str):
            return [v] if v.strip() else []
        return v

    @field_validator("features", mode="before")
    @classmethod
    def normalize_features(cls, v):
        return split_tags(v)


# ---------- Videos ----------
class Video(TaggedDocument):
    """
    Videos collection schema
    Collection name: "video"
    """
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    videoUrl: str = Field(..., min_length=1)
    thumbnail: str = Field(..., min_length=1)
    category: Literal["lecture", "nasheed", "dawah"]
    duration: int = Field(..., gt=0, description="Length in seconds")
    author: Optional[Dict[str, Any]] = None


# ---------- Navbar ----------
class NavbarItem(Document):
    """
    Site navigation entries
    Collection name: "navbaritem"
    """
    title: str = Field(..., min_length=1)
    titleBengali: str = Field(..., min_length=1)
    href: str = Field(..., min_length=1)
    type: Literal["main", "location", "dropdown"]
    parentId: Optional[str] = None
    order: int = 0
    isActive: bool = True
    icon: Optional[str] = None


# ---------- Orders ----------
class OrderItem(BaseModel):
    productId: str
    name: str
    price: float = Field(..., ge=0)
    quantity: int = Field(..., ge=1)
    image: str = ""


class Shipping(Document):
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    notes: Optional[str] = None


class Order(Document):
    """Orders collection schema"""
    user: Optional[str] = None
    items: List[OrderItem] = Field(..., min_length=1)
    total: Optional[float] = Field(None, ge=0)
    paymentMethod: Literal["bkash", "cod"]
    status: Literal["pending", "paid", "shipped", "delivered", "cancelled"] = "pending"
    shipping: Shipping


# ---------- Bookmarks ----------
class BookmarkMetadata(BaseModel):
    surahNumber: Optional[int] = None
    ayahNumber: Optional[int] = None
    hadithNumber: str = ""
    collectionName: str = ""
    narrator: str = ""
    chapter: str = ""
    category: str = ""
    author: str = ""
    duration: float = 0
    views: int = 0
    likes: int = 0
    price: float = 0
    stock: int = 0


class Bookmark(Document):
    """Bookmarks, unique per (user, contentType, contentId)"""
    user: Optional[str] = None
    contentType: Literal["video", "news", "hadith", "quran", "product"]
    contentId: str = Field(..., min_length=1)
    contentTitle: str = Field(..., min_length=1)
    contentDescription: str = ""
    contentImage: str = ""
    contentUrl: str = ""
    metadata: BookmarkMetadata = Field(default_factory=BookmarkMetadata)


# ---------- Bookings ----------
class Booking(Document):
    """
    Video bookings, unique per (user, video)
    Collection name: "booking"

    The video's title, links and author are copied in when the booking is made.
    """
    user: Optional[str] = None
    video: str = Field(..., min_length=1, description="Booked video id")
    videoTitle: str = Field(..., min_length=1)
    videoDescription: str = ""
    videoThumbnail: str = ""
    videoUrl: str = ""
    videoCategory: str = ""
    videoDuration: float = Field(0, ge=0, description="Duration in seconds")
    videoAuthor: Optional[Dict[str, Any]] = None
    bookingDate: datetime
    status: Literal["active", "completed", "cancelled"] = "active"
    notes: str = ""
    reminderDate: Optional[datetime] = None


# ---------- Users ----------
class User(Document):
    """
    Users collection schema
    Collection name: "user"
    """
    name: str = Field(..., min_length=1, description="Full name")
    email: EmailStr = Field(..., description="Unique email address")
    password: str = Field(..., description="BCrypt hash of the user's password")
    role: Literal["admin", "user"] = "user"
    avatar: str = ""


# ---------- Questions ----------
class Question(Document):
    """Community questions answered by admins"""
    user: Optional[str] = None
    text: str = Field(..., min_length=5)
    answer: str = ""
    answeredBy: Optional[str] = None
    status: Literal["pending", "answered"] = "pending"

