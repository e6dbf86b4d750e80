"""
Recommendation orchestration.

- A generation client is created per attempt from settings
- One prompt is built from the selection and reused for every attempt
- Transport and parsing failures are retried with tenacity, up to
  RECOMMENDATION_ATTEMPTS total attempts
- When every attempt fails the caller gets a single fallback record and
  a readable error, never an exception
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Optional, Sequence

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from flixai.core.catalog import language_name, unknown_genres
from flixai.core.config import settings
from flixai.core.errors import (
    ConfigurationError,
    ExtractionError,
    InvalidSelectionError,
    RecommendationError,
    TransportError,
)
from flixai.core.logger import get_logger
from flixai.schemas.recommendation import MovieRecord
from flixai.services.concentrate_llm import ConcentrateAPIError, ConcentrateResponsesLLM
from flixai.services.extractor import extract_movies

logger = get_logger("recommender")

PROMPT_TEMPLATE = """
IMPORTANT: Answer EXACTLY in valid JSON.
Do NOT add comments or any text outside the JSON structure.

Give {count} high-quality movie recommendations matching these criteria:
- Genre: {genres}
- Language: {language}

The answer MUST be valid JSON with the following structure:
{{
  "movies": [
    {{
      "title": "Movie Title",
      "synopsis": "Short, engaging synopsis (max 100 words)",
      "director": "Director Name",
      "mainCast": ["Actor 1", "Actor 2", "Actor 3"],
      "rating": 8.5,
      "releaseYear": 2023,
      "additionalDetails": "An interesting extra fact about the movie"
    }}
  ]
}}

Make sure:
- The movies really match the requested genres
- The movies are good and worth watching
- The information is accurate and up to date"""


@dataclass(frozen=True)
class RecommendationOutcome:
    """Either the parsed movie list, or the fallback record plus an error."""
    movies: list = field(default_factory=list)
    error: Optional[str] = None
    attempts: int = 1

    @property
    def success(self) -> bool:
        return self.error is None

    @classmethod
    def failed(cls, error: str, attempts: int) -> "RecommendationOutcome":
        return cls(movies=[fallback_movie()], error=error, attempts=attempts)


def fallback_movie() -> dict:
    """Placeholder shown when no recommendation could be produced."""
    return MovieRecord(
        title="Recommended Film",
        synopsis="Sorry, recommendations cannot be generated right now.",
        director="-",
        main_cast=["-"],
        rating=0,
        release_year=date.today().year,
    ).to_wire()


def build_prompt(genres: Sequence[str], language: str, count: Optional[int] = None) -> str:
    """Render the prompt for a selection; genre ids are joined with ', '."""
    if not genres:
        raise InvalidSelectionError("Select at least one genre.")
    unknown = unknown_genres(genres)
    if unknown:
        raise InvalidSelectionError(f"Unknown genre(s): {', '.join(unknown)}")
    display_language = language_name(language)
    if display_language is None:
        raise InvalidSelectionError(f"Unknown language: {language}")

    return PROMPT_TEMPLATE.format(
        count=count or settings.RECOMMENDATION_COUNT,
        genres=", ".join(genres),
        language=display_language,
    )


def create_llm(model: str | None = None) -> ConcentrateResponsesLLM:
    """
    Build the generation client from settings.
    Raises ConfigurationError instead of letting the request path crash.
    """
    if not settings.CONCENTRATE_API_KEY:
        raise ConfigurationError(
            "API key is not configured. Make sure the CONCENTRATE_API_KEY environment variable is set."
        )

    selected_model = model or settings.DEFAULT_MODEL
    try:
        return ConcentrateResponsesLLM(
            model=selected_model,
            api_key=settings.CONCENTRATE_API_KEY,
            base_url=settings.CONCENTRATE_BASE_URL,
            timeout=settings.HTTP_TIMEOUT,
            default_max_output_tokens=settings.MAX_OUTPUT_TOKENS,
            default_temperature=settings.TEMPERATURE,
            json_mode=settings.JSON_RESPONSE_MODE,
        )
    except Exception as e:
        raise ConfigurationError(f"Failed to initialize the generation client: {e}") from e


async def _generate_once(llm_factory: Callable, prompt: str) -> list:
    """One attempt: build the client, call it, extract the movie list."""
    llm = llm_factory()

    try:
        response = await llm.acomplete(prompt)
    except httpx.HTTPStatusError as e:
        logger.error(f"Generation HTTP {e.response.status_code}")
        raise TransportError(f"Generation API error: {e.response.status_code}") from e
    except httpx.RequestError as e:
        logger.error(f"Network error: {e}")
        raise TransportError(f"Network error: {e}") from e
    except ConcentrateAPIError as e:
        raise TransportError(str(e)) from e
    except Exception as e:
        logger.error(f"Unexpected generation error: {e}")
        raise TransportError(f"Unexpected error: {e}") from e

    return extract_movies(response.text)


def describe_error(exc: RecommendationError) -> str:
    message = exc.user_message() if isinstance(exc, ExtractionError) else str(exc)
    return f"An error occurred: {message}"


async def request_recommendations(
    genres: Sequence[str],
    language: str,
    *,
    llm_factory: Optional[Callable] = None,
    max_attempts: Optional[int] = None,
    wait: Optional[wait_base] = None,
    request_id: str = "-",
) -> RecommendationOutcome:
    """
    Ask the model for recommendations and return the outcome.

    Transport and extraction failures are retried; configuration and
    selection problems end the loop after the first attempt since
    repeating cannot change them.
    """
    factory = llm_factory or create_llm
    attempt_limit = max_attempts or settings.RECOMMENDATION_ATTEMPTS
    attempts = 1

    try:
        prompt = build_prompt(genres, language)
        logger.debug(f"[{request_id}] Prompt: {prompt[:200]}...")

        retrying = AsyncRetrying(
            stop=stop_after_attempt(attempt_limit),
            wait=wait or wait_exponential(
                multiplier=settings.RETRY_BACKOFF_FACTOR,
                min=settings.RETRY_WAIT_MIN,
                max=settings.RETRY_WAIT_MAX,
            ),
            retry=retry_if_exception_type((TransportError, ExtractionError)),
            before_sleep=lambda retry_state: logger.warning(
                f"[{request_id}] Recommendation retry {retry_state.attempt_number}: "
                f"{retry_state.outcome.exception()}"
            ),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                attempts = attempt.retry_state.attempt_number
                movies = await _generate_once(factory, prompt)

    except RecommendationError as e:
        logger.error(f"[{request_id}] Recommendation failed after {attempts} attempt(s): {e}")
        return RecommendationOutcome.failed(describe_error(e), attempts=attempts)

    logger.info(f"[{request_id}] Received {len(movies)} recommendation(s) in {attempts} attempt(s)")
    return RecommendationOutcome(movies=movies, attempts=attempts)
