import math

import pytest

from conftest import ADMIN

HADITH = {
    "collectionName": "abu_dawud",
    "hadithNumber": 4607,
    "arabicText": "عَلَيْكُمْ بِسُنَّتِي",
    "englishTranslation": "Hold fast to my Sunnah.",
    "banglaTranslation": "তোমরা আমার সুন্নাহকে আঁকড়ে ধর।",
    "narrator": "Al-Irbad ibn Sariyah",
    "chapter": "Adhering to the Sunnah",
    "book": "Sunan Abi Dawud",
    "tags": "sunnah, guidance, ,unity",
}

SURAH = {
    "surahNumber": 1,
    "surahName": "Al-Fatiha",
    "surahNameArabic": "الفاتحة",
    "surahNameEnglish": "The Opening",
    "ayahs": [{
        "ayahNumber": 1,
        "arabicText": "بِسْمِ اللَّهِ الرَّحْمَٰنِ الرَّحِيمِ",
        "englishTranslation": "In the name of Allah",
        "banglaTranslation": "পরম করুণাময় আল্লাহর নামে",
    }],
    "totalAyahs": 7,
    "revelationPlace": "makkah",
}

PRODUCT = {
    "name": "Kufi Cap",
    "description": "Knitted cotton cap",
    "price": 8.5,
    "images": "https://example.com/kufi.jpg",
    "category": "clothing",
    "sku": "KUFI-001",
}


# ---------- Quran ----------
def test_surah_lookup_from_store(client, store):
    store.load("quran")
    response = client.get("/api/quran?surah=1")
    assert response.status_code == 200
    surah = response.json()["surah"]
    assert surah["surahNumber"] == 1
    assert surah["surahName"] == "Al-Fatiha"


def test_surah_lookup_falls_back_when_store_is_down(client, store):
    store.reachable = False
    response = client.get("/api/quran?surah=1")
    assert response.status_code == 200
    surah = response.json()["surah"]
    assert surah["surahNumber"] == 1
    assert len(surah["ayahs"]) == 7


def test_surah_lookup_missing_in_store_is_404(client, store):
    # Store is up but empty: the fallback catalog is not consulted
    response = client.get("/api/quran?surah=1")
    assert response.status_code == 404
    assert response.json() == {"error": "Surah not found"}


def test_surah_lookup_rejects_non_numeric(client):
    response = client.get("/api/quran?surah=first")
    assert response.status_code == 400


def test_surahs_sorted_by_number(client, store):
    store.reachable = False
    body = client.get("/api/quran").json()
    assert [s["surahNumber"] for s in body["surahs"]] == [1, 2, 3]
    assert body["pagination"] == {"page": 1, "limit": 12, "total": 3, "pages": 1}


def test_duplicate_surah_number_is_rejected(client, store, admin_headers):
    repo = store.load("quran")
    before = len(repo.records)
    response = client.post("/api/quran", json=SURAH, headers=admin_headers)
    assert response.status_code == 400
    assert "already exists" in response.json()["error"]
    assert len(repo.records) == before


def test_surah_search_reaches_ayah_text(client, store):
    store.reachable = False
    body = client.get("/api/quran?search=guidance").json()
    assert [s["surahNumber"] for s in body["surahs"]] == [2]


# ---------- Hadith ----------
def test_hadith_search_matches_narrator_case_insensitively(client, store):
    store.reachable = False
    body = client.get("/api/hadith?search=UMAR").json()
    assert [h["narrator"] for h in body["hadiths"]] == ["Umar ibn al-Khattab"]
    assert body["pagination"]["total"] == 1


def test_hadith_filters(client, store):
    store.reachable = False
    body = client.get("/api/hadith?collection=muslim").json()
    assert [h["hadithNumber"] for h in body["hadiths"]] == ["2564"]

    body = client.get("/api/hadith?chapter=good char").json()
    assert [h["collectionName"] for h in body["hadiths"]] == ["tirmidhi"]


def test_create_hadith_normalizes_tags(client, store, admin_headers):
    response = client.post("/api/hadith", json=HADITH, headers=admin_headers)
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Hadith created successfully"
    assert body["hadith"]["tags"] == ["sunnah", "guidance", "unity"]
    assert body["hadith"]["hadithNumber"] == "4607"
    assert len(store.records("hadith")) == 1


def test_create_hadith_without_narrator_writes_nothing(client, store, admin_headers):
    payload = {k: v for k, v in HADITH.items() if k != "narrator"}
    response = client.post("/api/hadith", json=payload, headers=admin_headers)
    assert response.status_code == 400
    assert response.json() == {"error": "All required fields must be provided"}
    assert store.records("hadith") == []


def test_create_hadith_with_blank_field_is_rejected(client, store, admin_headers):
    response = client.post("/api/hadith", json={**HADITH, "chapter": "   "}, headers=admin_headers)
    assert response.status_code == 400
    assert store.records("hadith") == []


def test_duplicate_hadith_number_in_collection(client, store, admin_headers):
    store.load("hadith")
    payload = {**HADITH, "collectionName": "bukhari", "hadithNumber": "1"}
    response = client.post("/api/hadith", json=payload, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["error"] == "Hadith with this number already exists in this collection"


def test_update_hadith(client, store, admin_headers):
    store.load("hadith")
    hadith_id = "65c000000000000000000001"
    response = client.put(f"/api/hadith/{hadith_id}", json={"chapter": "Revelation"}, headers=admin_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Hadith updated successfully"
    assert body["hadith"]["chapter"] == "Revelation"
    assert body["hadith"]["narrator"] == "Umar ibn al-Khattab"

    response = client.patch(f"/api/hadith/{hadith_id}", json={"book": "Bukhari"}, headers=admin_headers)
    assert response.json()["hadith"]["book"] == "Bukhari"


def test_update_rechecks_uniqueness(client, store, admin_headers):
    store.load("hadith")
    response = client.put(
        "/api/hadith/65c000000000000000000001",
        json={"collectionName": "muslim", "hadithNumber": "2564"},
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert store.repos["hadith"].get("65c000000000000000000001")["collectionName"] == "bukhari"


def test_update_missing_record(client, store, admin_headers):
    response = client.put("/api/hadith/65c0000000000000000000ff", json={"chapter": "x"}, headers=admin_headers)
    assert response.status_code == 404
    assert response.json() == {"error": "Hadith not found"}


def test_delete_hadith(client, store, admin_headers):
    store.load("hadith")
    response = client.delete("/api/hadith/65c000000000000000000002", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Hadith deleted successfully"}
    assert len(store.records("hadith")) == 2

    response = client.delete("/api/hadith/65c000000000000000000002", headers=admin_headers)
    assert response.status_code == 404


# ---------- Authorization ----------
@pytest.mark.parametrize("method, path", [
    ("post", "/api/hadith"),
    ("post", "/api/products"),
    ("post", "/api/news"),
    ("put", "/api/hadith/65c000000000000000000001"),
    ("delete", "/api/hadith/65c000000000000000000001"),
])
def test_writes_need_admin(client, store, reader_headers, method, path):
    store.load("hadith")
    before = [dict(r) for r in store.records("hadith")]
    kwargs = {"headers": reader_headers}
    if method != "delete":
        kwargs["json"] = HADITH
    response = getattr(client, method)(path, **kwargs)
    assert response.status_code == 403
    assert response.json() == {"error": "Admin access required"}
    assert store.records("hadith") == before
    assert store.records("product") == []


def test_anonymous_write_is_forbidden(client, store):
    response = client.post("/api/products", json=PRODUCT)
    assert response.status_code == 403
    assert store.records("product") == []


def test_admin_creates_product(client, store, admin_headers):
    response = client.post("/api/products", json=PRODUCT, headers=admin_headers)
    assert response.status_code == 201
    product = response.json()["product"]
    assert product["images"] == ["https://example.com/kufi.jpg"]
    assert product["active"] is True

    response = client.post("/api/products", json=PRODUCT, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["error"] == "Product with this SKU already exists"


def test_invalid_category_reports_field(client, admin_headers):
    response = client.post("/api/products", json={**PRODUCT, "category": "toys"}, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid category")


def test_non_object_body_is_rejected(client, admin_headers):
    response = client.post("/api/products", json=["not", "an", "object"], headers=admin_headers)
    assert response.status_code == 400


# ---------- Fallback and demo mode ----------
def test_fallback_reads_are_identical(client, store):
    store.reachable = False
    first = client.get("/api/videos")
    second = client.get("/api/videos")
    assert first.status_code == 200
    assert first.content == second.content


def test_demo_mode_create(client, store, admin_headers):
    store.reachable = False
    response = client.post("/api/hadith", json=HADITH, headers=admin_headers)
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Hadith created successfully (demo mode)"
    assert body["hadith"]["id"].isdigit()
    # Not durable: the fallback catalog is unchanged
    assert client.get("/api/hadith").json()["pagination"]["total"] == 3


def test_demo_mode_off_surfaces_store_error(client, store, resources, admin_headers):
    store.reachable = False
    resources.demo_writes = False
    response = client.post("/api/hadith", json=HADITH, headers=admin_headers)
    assert response.status_code == 503
    assert response.json() == {"error": "Database connection failed"}


def test_demo_mode_update_and_delete(client, store, admin_headers):
    store.reachable = False
    response = client.put(
        "/api/hadith/65c000000000000000000003", json={"chapter": "Manners"}, headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["message"] == "Hadith updated successfully (demo mode)"
    assert response.json()["hadith"]["chapter"] == "Manners"

    response = client.delete("/api/hadith/65c000000000000000000003", headers=admin_headers)
    assert response.json() == {"message": "Hadith deleted successfully (demo mode)"}


# ---------- Pagination ----------
@pytest.mark.parametrize("page, limit", [(1, 2), (2, 2), (3, 2), (1, 50), (4, 1)])
def test_pagination_math(client, store, page, limit):
    store.reachable = False
    body = client.get(f"/api/hadith?page={page}&limit={limit}").json()
    total = body["pagination"]["total"]
    assert total == 3
    assert body["pagination"]["pages"] == math.ceil(total / limit)
    assert len(body["hadiths"]) == max(0, min(limit, total - (page - 1) * limit))


def test_bad_pagination_params_use_defaults(client, store):
    store.reachable = False
    body = client.get("/api/hadith?page=abc&limit=0").json()
    assert body["pagination"]["page"] == 1
    assert body["pagination"]["limit"] == 12


# ---------- News ----------
def test_news_listing_hides_unpublished(client, store, admin_headers):
    store.load("news")
    store.repos["news"].records[0]["published"] = False
    body = client.get("/api/news").json()
    assert body["pagination"]["total"] == 2
    assert body["pagination"]["limit"] == 10


def test_news_featured_flag(client, store):
    store.reachable = False
    body = client.get("/api/news?featured=true").json()
    assert {n["featured"] for n in body["news"]} == {True}
    assert len(body["news"]) == 2


def test_news_detail_counts_views(client, store):
    store.load("news")
    response = client.get("/api/news/68d7a23ed3911a8c6971834e")
    assert response.json()["news"]["views"] == 2101
    assert store.repos["news"].get("68d7a23ed3911a8c6971834e")["views"] == 2101


def test_news_detail_from_fallback_keeps_views(client, store):
    store.reachable = False
    response = client.get("/api/news/68d7a23ed3911a8c6971834e")
    assert response.status_code == 200
    assert response.json()["news"]["views"] == 2100


def test_news_author_comes_from_caller(client, store, admin_headers):
    payload = {
        "title": "Ramadan timetable published",
        "content": "The timetable for the coming month is out.",
        "excerpt": "Timetable is out.",
        "image": "https://example.com/ramadan.jpg",
        "category": "local",
        "author": {"id": "someone-else"},
    }
    response = client.post("/api/news", json=payload, headers=admin_headers)
    assert response.status_code == 201
    news = response.json()["news"]
    assert news["author"]["id"] == ADMIN.id
    assert news["views"] == 0


# ---------- Navbar and videos ----------
def test_navbar_sorted_by_order(client, store):
    store.reachable = False
    body = client.get("/api/navbar?type=location").json()
    assert [n["title"] for n in body["navbarItems"]] == ["Dhaka", "Chittagong", "Rajshahi"]


def test_video_listing_reports_counts(client, store):
    store.load("video", [{
        "id": "6600000000000000000000aa",
        "title": "Tafsir session",
        "description": "Weekly tafsir",
        "category": "lecture",
        "likes": ["u1", "u2"],
        "dislikes": [],
        "bookmarks": ["u1"],
        "createdAt": "2025-02-01T00:00:00+00:00",
    }])
    video = client.get("/api/videos").json()["videos"][0]
    assert (video["likes"], video["dislikes"], video["bookmarks"]) == (2, 0, 1)
