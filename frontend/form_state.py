"""
Form state for the recommendation page.

The page keeps one FormState in ``st.session_state`` and replaces it on
every user event; nothing mutates a state in place.
"""
from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class FormState:
    genres: tuple[str, ...] = ()
    language: Optional[str] = None
    loading: bool = False
    error: Optional[str] = None
    movies: tuple[dict, ...] = ()

    @property
    def can_submit(self) -> bool:
        return bool(self.genres) and bool(self.language) and not self.loading

    @property
    def has_results(self) -> bool:
        return len(self.movies) > 0


def toggle_genre(state: FormState, genre_id: str) -> FormState:
    if genre_id in state.genres:
        return replace(state, genres=tuple(g for g in state.genres if g != genre_id))
    return replace(state, genres=state.genres + (genre_id,))


def set_genres(state: FormState, genre_ids) -> FormState:
    """Replace the whole selection, as a multiselect widget reports it."""
    return replace(state, genres=tuple(dict.fromkeys(genre_ids)))


def select_language(state: FormState, code: Optional[str]) -> FormState:
    return replace(state, language=code)


def submit(state: FormState) -> FormState:
    """Start a request: busy, previous error and results cleared."""
    if not state.can_submit:
        return state
    return replace(state, loading=True, error=None, movies=())


def receive_outcome(state: FormState, movies, error: Optional[str] = None) -> FormState:
    return replace(state, loading=False, error=error, movies=tuple(movies or ()))
