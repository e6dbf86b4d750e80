"""
Pydantic models for recommendation API endpoints
Provides type-safe request/response validation
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List, Dict, Any
from datetime import datetime

from flixai.core.catalog import GENRES, LANGUAGES, unknown_genres


class MovieRecord(BaseModel):
    """
    One recommended movie, keyed the way the prompt asks the model to answer.

    Records coming from the model are passed through as plain dicts; this
    model is used to build the fallback record and to document the shape.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    title: Optional[str] = None
    synopsis: Optional[str] = None
    director: Optional[str] = None
    main_cast: List[str] = Field(default_factory=list, alias="mainCast")
    rating: Optional[float] = None
    release_year: Optional[int] = Field(None, alias="releaseYear")
    additional_details: Optional[str] = Field(None, alias="additionalDetails")

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class RecommendationRequest(BaseModel):
    """Filter selection submitted by the form"""
    genres: List[str] = Field(..., min_length=1, description="Genre ids, see /options")
    language: str = Field(..., min_length=1, description="Language code, see /options")

    class Config:
        json_schema_extra = {
            "example": {
                "genres": ["action", "comedy"],
                "language": "en"
            }
        }

    @field_validator("genres", mode="after")
    @classmethod
    def validate_genres(cls, v: List[str]) -> List[str]:
        """Known genre ids only; duplicates are dropped, first occurrence wins"""
        unknown = unknown_genres(v)
        if unknown:
            raise ValueError(f"Unknown genre(s): {', '.join(unknown)}")
        return list(dict.fromkeys(v))

    @field_validator("language", mode="after")
    @classmethod
    def validate_language(cls, v: str) -> str:
        if v not in LANGUAGES:
            raise ValueError(f"language must be one of {list(LANGUAGES)}")
        return v


class RecommendationResponse(BaseModel):
    """Outcome of one recommendation request"""
    success: bool = Field(..., description="False when the fallback record is returned")
    movies: List[Any] = Field(default_factory=list, description="Records as the model sent them, not validated per item")
    error: Optional[str] = Field(None, description="Readable error message on failure")
    attempts: int = Field(..., ge=1, description="Generation attempts made")
    request_id: Optional[str] = Field(None, description="Trace ID for debugging")
    timestamp: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        json_schema_extra = {
            "example": {
                "success": True,
                "movies": [
                    {
                        "title": "Kung Fu Hustle",
                        "synopsis": "A wannabe gangster stumbles into a slum full of retired kung fu masters...",
                        "director": "Stephen Chow",
                        "mainCast": ["Stephen Chow", "Yuen Wah", "Yuen Qiu"],
                        "rating": 7.7,
                        "releaseYear": 2004,
                        "additionalDetails": "Won six Hong Kong Film Awards."
                    }
                ],
                "error": None,
                "attempts": 1
            }
        }


class OptionItem(BaseModel):
    id: str
    name: str


class OptionsResponse(BaseModel):
    """Choices for the genre and language dropdowns"""
    genres: List[OptionItem]
    languages: List[OptionItem]

    @classmethod
    def from_catalog(cls) -> "OptionsResponse":
        return cls(
            genres=[OptionItem(id=k, name=v) for k, v in GENRES.items()],
            languages=[OptionItem(id=k, name=v) for k, v in LANGUAGES.items()],
        )


class ErrorResponse(BaseModel):
    """Standardized error response"""
    error: str = Field(..., description="Error message")
    error_code: str = Field(..., description="Error code for client handling")
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    request_id: Optional[str] = Field(None, description="Trace ID for debugging")
    details: Optional[List[str]] = Field(None, description="Field-level validation messages")


class HealthCheckResponse(BaseModel):
    """System health status"""
    status: str = Field(..., description="System status: 'healthy' or 'degraded'")
    components: Dict[str, str] = Field(..., description="Individual component statuses")
    timestamp: datetime = Field(default_factory=datetime.utcnow)
