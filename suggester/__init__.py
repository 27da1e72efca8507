from suggester.generator import SuggestionGenerator
from suggester.schemas import FailureReason, SuggestionRequest, SuggestionResponse

__all__ = [
    "FailureReason",
    "SuggestionGenerator",
    "SuggestionRequest",
    "SuggestionResponse",
]
