"""
Genre and language choices offered by the form.
Keys are the identifiers sent by clients; values are display names.
"""

GENRES: dict[str, str] = {
    "action": "Action",
    "adventure": "Adventure",
    "animation": "Animation",
    "comedy": "Comedy",
    "crime": "Crime",
    "documentary": "Documentary",
    "drama": "Drama",
    "family": "Family",
    "fantasy": "Fantasy",
    "history": "Historical",
    "horror": "Horror",
    "music": "Music",
    "mystery": "Mystery",
    "romance": "Romance",
    "scifi": "Science Fiction",
    "sports": "Sports",
    "thriller": "Thriller",
    "war": "War",
    "western": "Western",
}

LANGUAGES: dict[str, str] = {
    "id": "Indonesia",
    "en": "English",
    "es": "Spanish",
    "fr": "French",
    "hi": "Hindi",
    "ja": "Japanese",
    "ko": "Korean",
}


def language_name(code: str) -> str | None:
    return LANGUAGES.get(code)


def unknown_genres(genre_ids) -> list[str]:
    """Return the ids in *genre_ids* that are not part of the catalog, in order."""
    return [g for g in genre_ids if g not in GENRES]
