"""
Sample records served when the document store cannot be reached.

The catalog is built once at import time and never mutated; `catalog_for`
hands out deep copies.
"""

from copy import deepcopy
from types import MappingProxyType
from typing import Any, Dict, List, Tuple

MOCK_USER = MappingProxyType({
    "id": "mock-user-id",
    "name": "Demo User",
    "email": "demo@islamichub.com",
    "role": "user",
    "avatar": "",
})

MOCK_ADMIN = MappingProxyType({
    "id": "mock-admin-id",
    "name": "Admin User",
    "email": "admin@islamichub.com",
    "role": "admin",
    "avatar": "",
})

_ADMIN_AUTHOR = {"id": MOCK_ADMIN["id"], "name": MOCK_ADMIN["name"], "email": MOCK_ADMIN["email"]}


def _freeze(records: List[Dict[str, Any]]) -> Tuple[MappingProxyType, ...]:
    return tuple(MappingProxyType(r) for r in records)


VIDEOS = _freeze([
    {
        "id": "507f1f77bcf86cd799439011",
        "title": "Understanding the Five Pillars of Islam",
        "description": "A comprehensive lecture explaining the fundamental principles of Islam and their "
                       "importance in a Muslim's life. Covers Shahada, Salah, Zakat, Sawm and Hajj.",
        "videoUrl": "https://www.youtube.com/watch?v=5k8xH3l6RWs",
        "thumbnail": "https://img.youtube.com/vi/5k8xH3l6RWs/maxresdefault.jpg",
        "category": "lecture",
        "duration": 3600,
        "views": 1250,
        "likes": 89,
        "dislikes": 3,
        "bookmarks": 15,
        "author": _ADMIN_AUTHOR,
        "comments": [],
        "tags": ["islam", "five pillars", "shahada", "salah", "zakat", "sawm", "hajj"],
        "createdAt": "2025-01-06T09:00:00+00:00",
    },
    {
        "id": "507f1f77bcf86cd799439012",
        "title": "Beautiful Nasheed - Allahu Akbar",
        "description": "A soulful nasheed praising Allah and expressing gratitude for His blessings.",
        "videoUrl": "https://www.youtube.com/watch?v=QH2-TGUlwu4",
        "thumbnail": "https://img.youtube.com/vi/QH2-TGUlwu4/maxresdefault.jpg",
        "category": "nasheed",
        "duration": 240,
        "views": 856,
        "likes": 45,
        "dislikes": 1,
        "bookmarks": 8,
        "author": _ADMIN_AUTHOR,
        "comments": [],
        "tags": ["nasheed", "allahu akbar", "praise", "spiritual"],
        "createdAt": "2025-01-05T09:00:00+00:00",
    },
    {
        "id": "507f1f77bcf86cd799439013",
        "title": "Dawah: Spreading the Message of Islam",
        "description": "Learn about the importance of dawah and how to share the message of Islam "
                       "with wisdom, patience and kindness.",
        "videoUrl": "https://www.youtube.com/watch?v=9bZkp7q19f0",
        "thumbnail": "https://img.youtube.com/vi/9bZkp7q19f0/maxresdefault.jpg",
        "category": "dawah",
        "duration": 1800,
        "views": 2100,
        "likes": 156,
        "dislikes": 5,
        "bookmarks": 12,
        "author": _ADMIN_AUTHOR,
        "comments": [],
        "tags": ["dawah", "islam", "wisdom", "patience"],
        "createdAt": "2025-01-04T09:00:00+00:00",
    },
    {
        "id": "507f1f77bcf86cd799439014",
        "title": "The Importance of Prayer in Islam",
        "description": "A detailed explanation of the significance of Salah in a Muslim's daily life "
                       "and its spiritual benefits.",
        "videoUrl": "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        "thumbnail": "https://img.youtube.com/vi/dQw4w9WgXcQ/maxresdefault.jpg",
        "category": "lecture",
        "duration": 2700,
        "views": 3200,
        "likes": 234,
        "dislikes": 8,
        "bookmarks": 20,
        "author": _ADMIN_AUTHOR,
        "comments": [],
        "tags": ["salah", "prayer", "worship"],
        "createdAt": "2025-01-03T09:00:00+00:00",
    },
    {
        "id": "507f1f77bcf86cd799439015",
        "title": "Peaceful Nasheed - SubhanAllah",
        "description": "A calming nasheed that brings peace to the heart and mind, perfect for reflection.",
        "videoUrl": "https://www.youtube.com/watch?v=ScMzIvxBSi4",
        "thumbnail": "https://img.youtube.com/vi/ScMzIvxBSi4/maxresdefault.jpg",
        "category": "nasheed",
        "duration": 180,
        "views": 1450,
        "likes": 98,
        "dislikes": 2,
        "bookmarks": 6,
        "author": _ADMIN_AUTHOR,
        "comments": [],
        "tags": ["nasheed", "subhanallah", "reflection"],
        "createdAt": "2025-01-02T09:00:00+00:00",
    },
    {
        "id": "507f1f77bcf86cd799439016",
        "title": "Understanding the Quran",
        "description": "An introduction to the Holy Quran covering its revelation, structure and guidance.",
        "videoUrl": "https://www.youtube.com/watch?v=YQHsXMglC9A",
        "thumbnail": "https://img.youtube.com/vi/YQHsXMglC9A/maxresdefault.jpg",
        "category": "lecture",
        "duration": 2400,
        "views": 2800,
        "likes": 187,
        "dislikes": 6,
        "bookmarks": 18,
        "author": _ADMIN_AUTHOR,
        "comments": [],
        "tags": ["quran", "revelation", "guidance", "study"],
        "createdAt": "2025-01-01T09:00:00+00:00",
    },
])

NEWS = _freeze([
    {
        "id": "68d7a23ed3911a8c6971834e",
        "title": "New Islamic Center Opens in Downtown",
        "content": "A new Islamic center has opened in the heart of downtown, providing a place for the "
                   "Muslim community to gather, pray and learn. The center features a spacious prayer "
                   "hall, educational classrooms and a library with Islamic literature.",
        "excerpt": "A new Islamic center opens downtown with modern facilities for the Muslim community.",
        "image": "https://images.unsplash.com/photo-1557804506-669a67965ba0?w=600&h=400&fit=crop",
        "category": "islamic",
        "author": _ADMIN_AUTHOR,
        "published": True,
        "featured": True,
        "views": 2100,
        "tags": ["islamic center", "community", "mosque"],
        "createdAt": "2025-01-10T08:00:00+00:00",
        "updatedAt": "2025-01-10T08:00:00+00:00",
    },
    {
        "id": "68d7a23ed3911a8c6971834f",
        "title": "Global Muslim Population Reaches 2 Billion",
        "content": "According to recent demographic studies, the global Muslim population has reached "
                   "approximately 2 billion people, about 25% of the world's population.",
        "excerpt": "Recent demographic studies show the global Muslim population has reached 2 billion.",
        "image": "https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d?w=600&h=400&fit=crop",
        "category": "world",
        "author": _ADMIN_AUTHOR,
        "published": True,
        "featured": False,
        "views": 1850,
        "tags": ["demographics", "population", "global"],
        "createdAt": "2025-01-09T08:00:00+00:00",
        "updatedAt": "2025-01-09T08:00:00+00:00",
    },
    {
        "id": "68d7a23ed3911a8c69718350",
        "title": "New Islamic Education App Launches",
        "content": "A new mobile application makes Islamic education more accessible, with Quran audio, "
                   "searchable Hadith collections, prayer times and a Qibla finder.",
        "excerpt": "A new mobile app makes Islamic education more accessible with interactive learning.",
        "image": "https://images.unsplash.com/photo-1516321318423-f06f85e504b3?w=600&h=400&fit=crop",
        "category": "technology",
        "author": _ADMIN_AUTHOR,
        "published": True,
        "featured": True,
        "views": 3200,
        "tags": ["technology", "education", "mobile app"],
        "createdAt": "2025-01-08T08:00:00+00:00",
        "updatedAt": "2025-01-08T08:00:00+00:00",
    },
])

PRODUCTS = _freeze([
    {
        "id": "65a000000000000000000001",
        "name": "Holy Quran - Arabic with English Translation",
        "description": "A hardcover edition of the Holy Quran with clear Arabic text and English translation.",
        "price": 29.99,
        "originalPrice": 39.99,
        "images": ["https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d?w=400&h=400&fit=crop"],
        "category": "books",
        "stock": 50,
        "sku": "QURAN-001",
        "weight": 0,
        "dimensions": None,
        "features": ["Arabic text", "English translation", "Hardcover"],
        "tags": ["quran", "holy book", "translation", "arabic"],
        "featured": True,
        "active": True,
        "createdAt": "2025-01-07T10:00:00+00:00",
    },
    {
        "id": "65a000000000000000000002",
        "name": "Wooden Tasbih - 99 Beads",
        "description": "Hand-polished sandalwood prayer beads with a tassel.",
        "price": 9.5,
        "originalPrice": 12.0,
        "images": ["https://images.unsplash.com/photo-1584286595398-a59f21d313f5?w=400&h=400&fit=crop"],
        "category": "tasbih",
        "stock": 120,
        "sku": "TASBIH-099",
        "weight": 0,
        "dimensions": None,
        "features": ["Sandalwood", "99 beads"],
        "tags": ["tasbih", "dhikr", "beads"],
        "featured": False,
        "active": True,
        "createdAt": "2025-01-06T10:00:00+00:00",
    },
    {
        "id": "65a000000000000000000003",
        "name": "Padded Prayer Mat",
        "description": "A soft, foldable prayer mat with a non-slip backing.",
        "price": 19.99,
        "originalPrice": 0,
        "images": ["https://images.unsplash.com/photo-1591604129939-f1efa4d9f7fa?w=400&h=400&fit=crop"],
        "category": "prayer_mats",
        "stock": 35,
        "sku": "MAT-010",
        "weight": 0,
        "dimensions": None,
        "features": ["Foldable", "Non-slip"],
        "tags": ["prayer mat", "salah"],
        "featured": True,
        "active": True,
        "createdAt": "2025-01-05T10:00:00+00:00",
    },
])

SURAHS = _freeze([
    {
        "id": "65b000000000000000000001",
        "surahNumber": 1,
        "surahName": "Al-Fatiha",
        "surahNameArabic": "الفاتحة",
        "surahNameEnglish": "The Opening",
        "totalAyahs": 7,
        "revelationPlace": "makkah",
        "ayahs": [
            {
                "ayahNumber": 1,
                "arabicText": "بِسْمِ اللَّهِ الرَّحْمَٰنِ الرَّحِيمِ",
                "englishTranslation": "In the name of Allah, the Entirely Merciful, the Especially Merciful.",
                "banglaTranslation": "পরম করুণাময়, অসীম দয়ালু আল্লাহর নামে।",
                "audioUrl": "",
            },
            {
                "ayahNumber": 2,
                "arabicText": "الْحَمْدُ لِلَّهِ رَبِّ الْعَالَمِينَ",
                "englishTranslation": "[All] praise is [due] to Allah, Lord of the worlds.",
                "banglaTranslation": "সকল প্রশংসা আল্লাহর জন্য, যিনি বিশ্বজগতের প্রতিপালক।",
                "audioUrl": "",
            },
            {
                "ayahNumber": 3,
                "arabicText": "الرَّحْمَٰنِ الرَّحِيمِ",
                "englishTranslation": "The Entirely Merciful, the Especially Merciful.",
                "banglaTranslation": "যিনি পরম করুণাময়, অসীম দয়ালু।",
                "audioUrl": "",
            },
            {
                "ayahNumber": 4,
                "arabicText": "مَالِكِ يَوْمِ الدِّينِ",
                "englishTranslation": "Sovereign of the Day of Recompense.",
                "banglaTranslation": "যিনি বিচার দিবসের মালিক।",
                "audioUrl": "",
            },
            {
                "ayahNumber": 5,
                "arabicText": "إِيَّاكَ نَعْبُدُ وَإِيَّاكَ نَسْتَعِينُ",
                "englishTranslation": "It is You we worship and You we ask for help.",
                "banglaTranslation": "আমরা একমাত্র তোমারই ইবাদত করি এবং একমাত্র তোমারই নিকট সাহায্য প্রার্থনা করি।",
                "audioUrl": "",
            },
            {
                "ayahNumber": 6,
                "arabicText": "اهْدِنَا الصِّرَاطَ الْمُسْتَقِيمَ",
                "englishTranslation": "Guide us to the straight path.",
                "banglaTranslation": "আমাদেরকে সরল পথ দেখাও।",
                "audioUrl": "",
            },
            {
                "ayahNumber": 7,
                "arabicText": "صِرَاطَ الَّذِينَ أَنْعَمْتَ عَلَيْهِمْ غَيْرِ الْمَغْضُوبِ عَلَيْهِمْ وَلَا الضَّالِّينَ",
                "englishTranslation": "The path of those upon whom You have bestowed favor, not of those who "
                                      "have evoked [Your] anger or of those who are astray.",
                "banglaTranslation": "তাদের পথ, যাদের প্রতি তুমি অনুগ্রহ করেছ, যাদের প্রতি তুমি রাগান্বিত নও এবং যারা পথভ্রষ্ট নয়।",
                "audioUrl": "",
            },
        ],
        "createdAt": "2025-01-01T00:00:00+00:00",
    },
    {
        "id": "65b000000000000000000002",
        "surahNumber": 2,
        "surahName": "Al-Baqarah",
        "surahNameArabic": "البقرة",
        "surahNameEnglish": "The Cow",
        "totalAyahs": 286,
        "revelationPlace": "madinah",
        "ayahs": [
            {
                "ayahNumber": 1,
                "arabicText": "الم",
                "englishTranslation": "Alif, Lam, Meem.",
                "banglaTranslation": "আলিফ, লাম, মীম।",
                "audioUrl": "",
            },
            {
                "ayahNumber": 2,
                "arabicText": "ذَٰلِكَ الْكِتَابُ لَا رَيْبَ ۛ فِيهِ ۛ هُدًى لِّلْمُتَّقِينَ",
                "englishTranslation": "This is the Book about which there is no doubt, a guidance for those "
                                      "conscious of Allah.",
                "banglaTranslation": "এটি সেই কিতাব যাতে কোন সন্দেহ নেই, মুত্তাকীদের জন্য পথনির্দেশ।",
                "audioUrl": "",
            },
            {
                "ayahNumber": 3,
                "arabicText": "الَّذِينَ يُؤْمِنُونَ بِالْغَيْبِ وَيُقِيمُونَ الصَّلَاةَ وَمِمَّا رَزَقْنَاهُمْ يُنفِقُونَ",
                "englishTranslation": "Who believe in the unseen, establish prayer, and spend out of what We "
                                      "have provided for them.",
                "banglaTranslation": "যারা অদৃশ্যে বিশ্বাস করে, সালাত কায়েম করে এবং আমি তাদেরকে যে রিজিক দিয়েছি তা থেকে ব্যয় করে।",
                "audioUrl": "",
            },
        ],
        "createdAt": "2025-01-01T00:00:00+00:00",
    },
    {
        "id": "65b000000000000000000003",
        "surahNumber": 3,
        "surahName": "Al-Imran",
        "surahNameArabic": "آل عمران",
        "surahNameEnglish": "Family of Imran",
        "totalAyahs": 200,
        "revelationPlace": "madinah",
        "ayahs": [
            {
                "ayahNumber": 1,
                "arabicText": "الم",
                "englishTranslation": "Alif, Lam, Meem.",
                "banglaTranslation": "আলিফ, লাম, মীম।",
                "audioUrl": "",
            },
            {
                "ayahNumber": 2,
                "arabicText": "اللَّهُ لَا إِلَٰهَ إِلَّا هُوَ الْحَيُّ الْقَيُّومُ",
                "englishTranslation": "Allah - there is no deity except Him, the Ever-Living, the Sustainer "
                                      "of existence.",
                "banglaTranslation": "আল্লাহ, তিনি ছাড়া কোন ইলাহ নেই, তিনি চিরঞ্জীব, সব কিছুর ধারক।",
                "audioUrl": "",
            },
        ],
        "createdAt": "2025-01-01T00:00:00+00:00",
    },
])

HADITHS = _freeze([
    {
        "id": "65c000000000000000000001",
        "collectionName": "bukhari",
        "hadithNumber": "1",
        "arabicText": "إِنَّمَا الأَعْمَالُ بِالنِّيَّاتِ، وَإِنَّمَا لِكُلِّ امْرِئٍ مَا نَوَى",
        "englishTranslation": "Actions are according to intentions, and every person will have what they intended.",
        "banglaTranslation": "নিশ্চয়ই সকল কাজের ফলাফল নির্ভর করে নিয়তের উপর, এবং প্রত্যেক ব্যক্তিই তার নিয়ত অনুযায়ী ফল পাবে।",
        "narrator": "Umar ibn al-Khattab",
        "chapter": "How Revelation Started",
        "book": "Sahih al-Bukhari",
        "volume": "1",
        "page": "1",
        "tags": ["intention", "actions", "niyyah"],
        "createdAt": "2025-01-03T00:00:00+00:00",
    },
    {
        "id": "65c000000000000000000002",
        "collectionName": "muslim",
        "hadithNumber": "2564",
        "arabicText": "إِنَّ اللَّهَ لاَ يَنْظُرُ إِلَى صُوَرِكُمْ وَأَمْوَالِكُمْ وَلَكِنْ يَنْظُرُ إِلَى قُلُوبِكُمْ وَأَعْمَالِكُمْ",
        "englishTranslation": "Allah does not look at your appearance or your wealth, but He looks at your "
                              "hearts and your deeds.",
        "banglaTranslation": "আল্লাহ তোমাদের চেহারা ও সম্পদের দিকে তাকান না, বরং তিনি তোমাদের অন্তর ও আমলের দিকে তাকান।",
        "narrator": "Abu Hurairah",
        "chapter": "The Prohibition of Oppression",
        "book": "Sahih Muslim",
        "volume": "",
        "page": "",
        "tags": ["heart", "deeds", "sincerity"],
        "createdAt": "2025-01-02T00:00:00+00:00",
    },
    {
        "id": "65c000000000000000000003",
        "collectionName": "tirmidhi",
        "hadithNumber": "1987",
        "arabicText": "اتَّقِ اللَّهِ حَيْثُمَا كُنْتَ وَأَتْبِعِ السَّيِّئَةَ الْحَسَنَةَ تَمْحُهَا وَخَالِقِ النَّاسَ بِخُلُقٍ حَسَنٍ",
        "englishTranslation": "Fear Allah wherever you are, follow a bad deed with a good one and it will wipe "
                              "it out, and treat people with good character.",
        "banglaTranslation": "যেখানেই থাক আল্লাহকে ভয় কর, মন্দ কাজের পর ভালো কাজ কর যা তা মুছে দেবে, এবং মানুষের সাথে উত্তম আচরণ কর।",
        "narrator": "Abu Dharr al-Ghifari",
        "chapter": "Good Character",
        "book": "Jami at-Tirmidhi",
        "volume": "",
        "page": "",
        "tags": ["character", "taqwa"],
        "createdAt": "2025-01-01T00:00:00+00:00",
    },
])

NAVBAR_ITEMS = _freeze([
    {"id": "65d000000000000000000001", "title": "Home", "titleBengali": "প্রচ্ছদ", "href": "/",
     "type": "main", "parentId": None, "order": 1, "isActive": True, "icon": None,
     "createdAt": "2025-01-01T00:00:00+00:00"},
    {"id": "65d000000000000000000002", "title": "National", "titleBengali": "জাতীয়",
     "href": "/news?category=local", "type": "main", "parentId": None, "order": 2, "isActive": True,
     "icon": None, "createdAt": "2025-01-01T00:00:00+00:00"},
    {"id": "65d000000000000000000003", "title": "International", "titleBengali": "আন্তর্জাতিক",
     "href": "/news?category=world", "type": "main", "parentId": None, "order": 3, "isActive": True,
     "icon": None, "createdAt": "2025-01-01T00:00:00+00:00"},
    {"id": "65d000000000000000000004", "title": "Technology", "titleBengali": "তথ্যপ্রযুক্তি",
     "href": "/news?category=technology", "type": "main", "parentId": None, "order": 4, "isActive": True,
     "icon": None, "createdAt": "2025-01-01T00:00:00+00:00"},
    {"id": "65d000000000000000000005", "title": "Others", "titleBengali": "অন্যান্য", "href": "/news",
     "type": "main", "parentId": None, "order": 5, "isActive": True, "icon": None,
     "createdAt": "2025-01-01T00:00:00+00:00"},
    {"id": "65d000000000000000000006", "title": "Dhaka", "titleBengali": "ঢাকা",
     "href": "/news?location=dhaka", "type": "location", "parentId": None, "order": 1, "isActive": True,
     "icon": None, "createdAt": "2025-01-01T00:00:00+00:00"},
    {"id": "65d000000000000000000007", "title": "Chittagong", "titleBengali": "চট্টগ্রাম",
     "href": "/news?location=chittagong", "type": "location", "parentId": None, "order": 2, "isActive": True,
     "icon": None, "createdAt": "2025-01-01T00:00:00+00:00"},
    {"id": "65d000000000000000000008", "title": "Rajshahi", "titleBengali": "রাজশাহী",
     "href": "/news?location=rajshahi", "type": "location", "parentId": None, "order": 3, "isActive": True,
     "icon": None, "createdAt": "2025-01-01T00:00:00+00:00"},
])

CATALOG = MappingProxyType({
    "video": VIDEOS,
    "news": NEWS,
    "product": PRODUCTS,
    "quran": SURAHS,
    "hadith": HADITHS,
    "navbaritem": NAVBAR_ITEMS,
})


def thaw(record) -> Dict[str, Any]:
    return {key: deepcopy(value) for key, value in record.items()}


def catalog_for(collection: str) -> List[Dict[str, Any]]:
    """Fresh, mutable copies of the sample records for a collection."""
    return [thaw(r) for r in CATALOG.get(collection, ())]
