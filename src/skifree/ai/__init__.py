"""AI module for SkiFree - Gemini-backed commentary."""

from skifree.ai.client import (
    GeminiClient,
    GeminiConfig,
    ProviderError,
    RateLimitError,
    get_gemini_client,
)
from skifree.ai.commentary import ANNOUNCEMENTS, CommentaryService, CommentaryTag, fallback
from skifree.ai.narrator import Narrator

__all__ = [
    # Client
    "GeminiClient",
    "GeminiConfig",
    "ProviderError",
    "RateLimitError",
    "get_gemini_client",
    # Commentary
    "ANNOUNCEMENTS",
    "CommentaryService",
    "CommentaryTag",
    "fallback",
    # Narrator
    "Narrator",
]
