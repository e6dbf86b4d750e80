"""
Failure kinds of a recommendation request.

Every one of these is caught by the orchestrator and turned into the
fallback result plus a readable message; none reach the HTTP layer.
"""


class RecommendationError(Exception):
    """Base exception for recommendation failures"""
    pass


class ConfigurationError(RecommendationError):
    """API key missing or the generation client could not be built"""
    pass


class TransportError(RecommendationError):
    """The generation call itself failed (network, HTTP status, quota, auth)"""
    pass


class InvalidSelectionError(RecommendationError):
    """Empty genre list or an unknown genre / language code"""
    pass


class ExtractionError(RecommendationError):
    """The model answered, but no movie list could be read from the text"""

    user_prefix = "Failed to parse movie recommendations"

    def user_message(self) -> str:
        return f"{self.user_prefix}: {self}"


class MalformedJSONError(ExtractionError):
    """No JSON object could be parsed out of the response text"""

    def __init__(self, message: str, raw_text: str):
        super().__init__(message)
        self.raw_text = raw_text


class UnexpectedShapeError(ExtractionError):
    """Parsed JSON has no ``movies`` list"""
    pass
