"""
Pytest Configuration and Fixtures

Shared fixtures for all tests.
"""

import pytest
from llama_index.core.llms import CompletionResponse
from tenacity import wait_none

from flixai.core.config import settings


class FakeLLM:
    """
    Stands in for ConcentrateResponsesLLM.

    Each ``acomplete`` call consumes the next scripted reply: a string is
    returned as the completion text, an exception is raised.
    """

    def __init__(self, *replies):
        self.replies = list(replies)
        self.prompts = []

    async def acomplete(self, prompt, **kwargs):
        self.prompts.append(prompt)
        reply = self.replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        return CompletionResponse(text=reply)


@pytest.fixture
def fake_llm_factory():
    """Return a builder: fake_llm_factory(*replies) -> (factory, fake)."""
    def build(*replies):
        fake = FakeLLM(*replies)
        return (lambda: fake), fake
    return build


@pytest.fixture
def no_wait():
    return wait_none()


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setattr(settings, "CONCENTRATE_API_KEY", "test-key")
    return "test-key"


@pytest.fixture
def no_api_key(monkeypatch):
    monkeypatch.setattr(settings, "CONCENTRATE_API_KEY", None)


@pytest.fixture
def five_movies():
    return [
        {
            "title": "Die Hard",
            "synopsis": "An off-duty cop fights terrorists in a Los Angeles skyscraper.",
            "director": "John McTiernan",
            "mainCast": ["Bruce Willis", "Alan Rickman", "Bonnie Bedelia"],
            "rating": 8.2,
            "releaseYear": 1988,
            "additionalDetails": "Shot in the then-unfinished Fox Plaza.",
        },
        {
            "title": "Rush Hour",
            "synopsis": "A Hong Kong inspector and an LAPD detective team up.",
            "director": "Brett Ratner",
            "mainCast": ["Jackie Chan", "Chris Tucker", "Tom Wilkinson"],
            "rating": 7.0,
            "releaseYear": 1998,
        },
        {
            "title": "Hot Fuzz",
            "synopsis": "A London cop is transferred to a suspiciously quiet village.",
            "director": "Edgar Wright",
            "mainCast": ["Simon Pegg", "Nick Frost", "Timothy Dalton"],
            "rating": 7.8,
            "releaseYear": 2007,
        },
        {
            "title": "The Nice Guys",
            "synopsis": "A mismatched pair investigate a missing girl in 1970s Los Angeles.",
            "director": "Shane Black",
            "mainCast": ["Russell Crowe", "Ryan Gosling", "Angourie Rice"],
            "rating": 7.4,
            "releaseYear": 2016,
        },
        {
            "title": "Kung Fu Hustle",
            "synopsis": "A wannabe gangster stumbles into a slum full of retired masters.",
            "director": "Stephen Chow",
            "mainCast": ["Stephen Chow", "Yuen Wah", "Yuen Qiu"],
            "rating": 7.7,
            "releaseYear": 2004,
        },
    ]
