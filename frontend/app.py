"""
Flix.AI — Streamlit Frontend
"""

import streamlit as st
import streamlit.components.v1 as components
import requests
import os
import uuid
import html
import logging
from pathlib import Path
from typing import Optional

from form_state import (
    FormState,
    receive_outcome,
    select_language,
    set_genres,
    submit,
)

logging.basicConfig(level=logging.INFO, format="%(asctime)s  %(name)s  %(levelname)s  %(message)s")
logger = logging.getLogger("frontend")

API_URL = os.getenv("BACKEND_URL", "http://localhost:8000")
API_BASE = f"{API_URL}/api/v1"

# Used when the backend cannot be reached for /options
FALLBACK_GENRES = {
    "action": "Action", "adventure": "Adventure", "animation": "Animation",
    "comedy": "Comedy", "crime": "Crime", "documentary": "Documentary",
    "drama": "Drama", "family": "Family", "fantasy": "Fantasy",
    "history": "Historical", "horror": "Horror", "music": "Music",
    "mystery": "Mystery", "romance": "Romance", "scifi": "Science Fiction",
    "sports": "Sports", "thriller": "Thriller", "war": "War", "western": "Western",
}
FALLBACK_LANGUAGES = {
    "id": "Indonesia", "en": "English", "es": "Spanish", "fr": "French",
    "hi": "Hindi", "ja": "Japanese", "ko": "Korean",
}

_REQUEST_TIMEOUT_SECONDS = 180

st.set_page_config(
    page_title="Flix.AI",
    page_icon="🎬",
    layout="wide",
)

_CSS_PATH = Path(__file__).parent / "static" / "style.css"
st.markdown(f"<style>{_CSS_PATH.read_text(encoding='utf-8')}</style>", unsafe_allow_html=True)


@st.cache_data(ttl=3600, show_spinner=False)
def load_options() -> tuple[dict[str, str], dict[str, str]]:
    """Fetch genre/language choices from the backend; fall back to built-in lists."""
    try:
        resp = requests.get(f"{API_BASE}/options", timeout=10)
        resp.raise_for_status()
        data = resp.json()
        genres = {g["id"]: g["name"] for g in data.get("genres", [])}
        languages = {lang["id"]: lang["name"] for lang in data.get("languages", [])}
        if genres and languages:
            return genres, languages
    except Exception as exc:
        logger.warning("Options fetch failed, using fallback: %s", exc)
    return FALLBACK_GENRES, FALLBACK_LANGUAGES


def fetch_recommendations(genres: list[str], language: str) -> tuple[list[dict], Optional[str]]:
    """POST the selection to the backend and return (movies, error)."""
    try:
        logger.info("recommend → genres=%s language=%s", genres, language)
        resp = requests.post(
            f"{API_BASE}/recommendations",
            json={"genres": genres, "language": language},
            timeout=_REQUEST_TIMEOUT_SECONDS,
            headers={"x-request-id": str(uuid.uuid4())},
        )
        if resp.status_code == 200:
            data = resp.json()
            return data.get("movies", []), data.get("error")
        if resp.status_code == 422:
            return [], "The selection was rejected by the server. Pick genres and a language again."
        return [], f"Error {resp.status_code}: {resp.text}"

    except requests.exceptions.Timeout:
        return [], "Request timed out. Please try again."
    except requests.exceptions.ConnectionError:
        return [], "Cannot reach the backend — is the service running?"
    except Exception as exc:
        logger.error("fetch_recommendations error: %s", exc, exc_info=True)
        return [], f"Unexpected error: {exc}"


def _text(value, default: str = "-") -> str:
    if value is None or value == "":
        return default
    return html.escape(str(value))


def render_movie_card(movie: dict) -> None:
    """Render one record; the model may omit any field."""
    cast = movie.get("mainCast")
    cast_text = ", ".join(str(c) for c in cast) if isinstance(cast, list) and cast else None
    details = movie.get("additionalDetails")

    card = f"""
<div class="movie-card">
  <h2>{_text(movie.get("title"), "Untitled")}</h2>
  <p class="synopsis">{_text(movie.get("synopsis"), "")}</p>
  <div class="facts">
    <span>🎬 Director: {_text(movie.get("director"))}</span>
    <span>👥 Cast: {_text(cast_text)}</span>
    <span>⭐ Rating: {_text(movie.get("rating"))} / 10</span>
    <span>📅 Year: {_text(movie.get("releaseYear"))}</span>
  </div>
  {f'<div class="details">"{_text(details)}"</div>' if details else ""}
</div>
"""
    st.markdown(card, unsafe_allow_html=True)


def _scroll_to_results() -> None:
    components.html(
        """<script>
        const el = window.parent.document.getElementById("results");
        if (el) { el.scrollIntoView({behavior: "smooth"}); }
        </script>""",
        height=0,
    )


if "form" not in st.session_state:
    st.session_state.form = FormState()
if "scroll_to_results" not in st.session_state:
    st.session_state.scroll_to_results = False

genre_names, language_names = load_options()

# ---------------------------------------------------------------------------
# Header
# ---------------------------------------------------------------------------
st.markdown(
    '<div class="hero"><h1>🎬 Flix.AI</h1>'
    "<p>Find movie recommendations that match your taste</p></div>",
    unsafe_allow_html=True,
)

form: FormState = st.session_state.form

if form.error:
    st.error(form.error)

# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------
with st.container(border=True):
    # Widgets own their values across reruns; the form state mirrors them.
    selected_genres = st.multiselect(
        "Choose movie genres",
        options=list(genre_names),
        format_func=lambda g: genre_names.get(g, g),
        placeholder="Choose genres",
        key="genre_select",
    )
    selected_language = st.selectbox(
        "Movie language",
        options=list(language_names),
        index=None,
        format_func=lambda code: language_names.get(code, code),
        placeholder="Choose a language",
        key="language_select",
    )

    form = select_language(set_genres(form, selected_genres), selected_language)
    st.session_state.form = form

    label = "Finding the best movies..." if form.loading else "Find Movies"
    clicked = st.button(label, type="primary", use_container_width=True, disabled=not form.can_submit)

if clicked:
    form = submit(form)
    st.session_state.form = form
    with st.spinner("Finding the best movies..."):
        movies, error = fetch_recommendations(list(form.genres), form.language)
    st.session_state.form = receive_outcome(form, movies, error)
    st.session_state.scroll_to_results = True
    st.rerun()

# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------
if form.has_results:
    st.markdown('<div id="results"></div>', unsafe_allow_html=True)
    for movie in form.movies:
        render_movie_card(movie if isinstance(movie, dict) else {})
    if st.session_state.scroll_to_results:
        st.session_state.scroll_to_results = False
        _scroll_to_results()
