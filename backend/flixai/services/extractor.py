"""
Pull the movie list out of free-form model output.

The model is asked for bare JSON but often wraps it in prose or markdown
fences, so the text is trimmed to the outermost ``{...}`` span before parsing.
"""
import json
import re

from flixai.core.errors import MalformedJSONError, UnexpectedShapeError
from flixai.core.logger import get_logger

logger = get_logger("extractor")

# \Z rather than $: a trailing newline must not survive the strip.
_LEADING_NOISE = re.compile(r"^[^{]*")
_TRAILING_NOISE = re.compile(r"[^}]*\Z")
_OPENING_FENCE = re.compile(r"```json\s*")
_CLOSING_FENCE = re.compile(r"```\s*\Z")


def clean_response_text(raw_text: str) -> str:
    """Apply the noise and fence stripping, in order, and trim whitespace."""
    text = _LEADING_NOISE.sub("", raw_text, count=1)
    text = _TRAILING_NOISE.sub("", text, count=1)
    text = _OPENING_FENCE.sub("", text, count=1)
    text = _CLOSING_FENCE.sub("", text, count=1)
    return text.strip()


def extract_movies(raw_text: str) -> list:
    """
    Return the ``movies`` list from *raw_text*, unchanged and in order.

    Raises:
        MalformedJSONError: nothing parseable was left after cleaning
        UnexpectedShapeError: the JSON is not an object with a ``movies`` list
    """
    cleaned = clean_response_text(raw_text)

    try:
        parsed = json.loads(cleaned)
    # ValueError covers JSONDecodeError and oversized integer literals.
    except (ValueError, RecursionError) as e:
        logger.error(f"JSON parsing error: {e}")
        logger.error(f"Raw response: {raw_text}")
        raise MalformedJSONError(str(e), raw_text) from e

    if not isinstance(parsed, dict) or not isinstance(parsed.get("movies"), list):
        logger.error(f"Unexpected JSON structure, raw response: {raw_text}")
        raise UnexpectedShapeError("Invalid JSON structure")

    movies = parsed["movies"]
    logger.debug(f"Extracted {len(movies)} movie record(s)")
    return movies
