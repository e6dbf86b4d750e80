"""
Extractor Tests

Cleaning and parsing of free-form model output.
"""

import json
import logging

import pytest

from flixai.core.errors import ExtractionError, MalformedJSONError, UnexpectedShapeError
from flixai.services.extractor import clean_response_text, extract_movies


class TestWellFormedInput:
    """Bare JSON and JSON wrapped in prose or fences."""

    def test_bare_object_returns_records_in_order(self, five_movies):
        raw = json.dumps({"movies": five_movies})

        assert extract_movies(raw) == five_movies

    def test_fenced_json_matches_unwrapped(self, five_movies):
        payload = json.dumps({"movies": five_movies}, indent=2)
        fenced = f"```json\n{payload}\n```"

        assert extract_movies(fenced) == extract_movies(payload)

    def test_prose_around_fence_is_ignored(self):
        raw = 'Sure! Here\'s your list: ```json\n{"movies":[]}\n```'

        assert extract_movies(raw) == []

    def test_trailing_prose_and_newlines_are_ignored(self, five_movies):
        raw = "Here you go:\n\n" + json.dumps({"movies": five_movies[:2]}) + "\n\nEnjoy the movies!\n"

        assert extract_movies(raw) == five_movies[:2]

    def test_records_are_not_validated(self):
        raw = '{"movies": [{"title": "Only a title"}, 42, null]}'

        assert extract_movies(raw) == [{"title": "Only a title"}, 42, None]

    def test_extra_top_level_fields_are_allowed(self):
        raw = '{"note": "x", "movies": [{"title": "A"}]}'

        assert extract_movies(raw) == [{"title": "A"}]


class TestCleaning:
    def test_strips_fences_and_whitespace(self):
        assert clean_response_text('```json   {"movies": []}  ```') == '{"movies": []}'

    def test_text_without_braces_cleans_to_empty(self):
        assert clean_response_text("no json here, sorry") == ""

    def test_keeps_outermost_braces(self):
        raw = 'prefix {"a": {"b": 1}} suffix'

        assert clean_response_text(raw) == '{"a": {"b": 1}}'


class TestFailures:
    def test_no_object_span_is_malformed(self):
        raw = "I could not find any movies for that request."

        with pytest.raises(MalformedJSONError) as exc_info:
            extract_movies(raw)

        assert exc_info.value.raw_text == raw

    def test_broken_json_is_malformed(self):
        raw = '{"movies": [{"title": "Alien",}]}'

        with pytest.raises(MalformedJSONError) as exc_info:
            extract_movies(raw)

        assert exc_info.value.raw_text == raw
        assert str(exc_info.value)

    def test_oversized_integer_is_malformed(self):
        raw = '{"movies": [{"rating": ' + "9" * 5000 + "}]}"

        with pytest.raises(MalformedJSONError) as exc_info:
            extract_movies(raw)

        assert exc_info.value.raw_text == raw

    def test_deeply_nested_json_is_malformed(self):
        raw = '{"movies": ' + "[" * 100000 + "]" * 100000 + "}"

        with pytest.raises(MalformedJSONError):
            extract_movies(raw)

    def test_raw_response_is_logged_on_parse_failure(self, caplog):
        raw = "Sorry, no movies today {not json}"

        with caplog.at_level(logging.ERROR, logger="flixai.extractor"):
            with pytest.raises(MalformedJSONError):
                extract_movies(raw)

        messages = [r.getMessage() for r in caplog.records if r.name == "flixai.extractor"]
        assert f"Raw response: {raw}" in messages

    def test_empty_text_is_malformed(self):
        with pytest.raises(MalformedJSONError):
            extract_movies("")

    def test_missing_movies_field(self):
        with pytest.raises(UnexpectedShapeError, match="Invalid JSON structure"):
            extract_movies('{"films": []}')

    @pytest.mark.parametrize("value", ['{}', '"five"', 'null', '5'])
    def test_movies_not_a_list(self, value):
        with pytest.raises(UnexpectedShapeError, match="Invalid JSON structure"):
            extract_movies('{"movies": %s}' % value)

    def test_failures_share_extraction_base(self):
        with pytest.raises(ExtractionError) as exc_info:
            extract_movies('{"films": []}')

        assert exc_info.value.user_message() == (
            "Failed to parse movie recommendations: Invalid JSON structure"
        )
