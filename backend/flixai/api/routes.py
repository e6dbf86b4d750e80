from fastapi import APIRouter, Header
import uuid
from typing import Optional

from flixai.services.recommender import request_recommendations
from flixai.schemas.recommendation import (
    OptionsResponse,
    RecommendationRequest,
    RecommendationResponse,
)
from flixai.core.logger import get_logger


logger = get_logger("routes")
router = APIRouter()


@router.post("/recommendations", response_model=RecommendationResponse)
async def recommendations_handler(
    req: RecommendationRequest,
    x_request_id: Optional[str] = Header(None)
) -> RecommendationResponse:
    """
    Generate movie recommendations for a genre/language selection

    - **genres**: one or more genre ids from `/options`
    - **language**: a language code from `/options`

    Generation failures are not HTTP errors: the response carries
    `success=false`, the fallback record and a readable `error`.
    """
    request_id = x_request_id or str(uuid.uuid4())
    logger.info(f"[{request_id}] Recommendation request - genres={req.genres} language={req.language}")

    outcome = await request_recommendations(
        req.genres, req.language, request_id=request_id
    )

    if outcome.success:
        logger.info(f"[{request_id}] Recommendation completed successfully")
    else:
        logger.warning(f"[{request_id}] Returning fallback record: {outcome.error}")

    return RecommendationResponse(
        success=outcome.success,
        movies=outcome.movies,
        error=outcome.error,
        attempts=outcome.attempts,
        request_id=request_id,
    )


@router.get("/options", response_model=OptionsResponse)
async def list_options() -> OptionsResponse:
    """
    Genre and language choices for the form dropdowns
    """
    return OptionsResponse.from_catalog()
