from form_state import (
    FormState,
    receive_outcome,
    select_language,
    set_genres,
    submit,
    toggle_genre,
)


def test_initial_state_cannot_submit():
    state = FormState()

    assert not state.can_submit
    assert not state.has_results


def test_toggle_genre_adds_and_removes():
    state = toggle_genre(FormState(), "action")
    state = toggle_genre(state, "comedy")
    assert state.genres == ("action", "comedy")

    state = toggle_genre(state, "action")
    assert state.genres == ("comedy",)


def test_transitions_do_not_mutate():
    before = FormState()
    after = select_language(before, "en")

    assert before.language is None
    assert after.language == "en"


def test_set_genres_drops_duplicates():
    assert set_genres(FormState(), ["war", "war", "drama"]).genres == ("war", "drama")


def test_submit_requires_genres_and_language():
    only_genre = toggle_genre(FormState(), "drama")

    assert submit(only_genre) is only_genre
    assert not submit(only_genre).loading


def test_submit_sets_busy_and_clears_previous_results():
    state = select_language(toggle_genre(FormState(), "drama"), "fr")
    state = receive_outcome(state, [{"title": "Old"}], "old error")

    busy = submit(state)

    assert busy.loading
    assert busy.error is None
    assert busy.movies == ()
    assert not busy.can_submit
    assert submit(busy) is busy


def test_receive_outcome_clears_busy_flag():
    busy = submit(select_language(toggle_genre(FormState(), "drama"), "fr"))

    done = receive_outcome(busy, [{"title": "Amélie"}])

    assert not done.loading
    assert done.movies == ({"title": "Amélie"},)
    assert done.has_results
    assert done.can_submit


def test_receive_failure_keeps_fallback_and_error():
    busy = submit(select_language(toggle_genre(FormState(), "drama"), "fr"))

    done = receive_outcome(busy, [{"title": "Recommended Film"}], "An error occurred: boom")

    assert done.error == "An error occurred: boom"
    assert len(done.movies) == 1
