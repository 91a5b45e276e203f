"""Gemini API client singleton for SkiFree commentary.

Text generation only. The google-genai SDK is imported lazily so the game
runs without network access or an API key.
"""

import os
import asyncio
import logging
from typing import Optional
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)

# Substrings that identify a quota / rate-limit failure from the API
RATE_LIMIT_MARKERS = ("429", "quota", "RESOURCE_EXHAUSTED")


class ProviderError(Exception):
    """The provider failed in a way retries will not fix."""


class RateLimitError(ProviderError):
    """The provider refused the request because of quota or rate limits."""


def is_rate_limit(error: BaseException) -> bool:
    message = str(error)
    return any(marker in message for marker in RATE_LIMIT_MARKERS)


class GeminiModel(Enum):
    """Available Gemini models."""

    # Short one-liners, fast
    FLASH = "gemini-2.5-flash"


@dataclass
class GeminiConfig:
    """Configuration for Gemini client."""

    api_key: str
    model: str = GeminiModel.FLASH.value
    timeout: float = 10.0
    max_retries: int = 2
    retry_delay: float = 1.0
    temperature: float = 0.9  # Snarky responses
    max_output_tokens: int = 256


class GeminiClient:
    """Singleton Gemini API client.

    Provides an async interface to Gemini text models. Quota failures raise
    ``RateLimitError`` so callers can back off.
    """

    _instance: Optional["GeminiClient"] = None
    _initialized: bool = False

    def __new__(cls, config: Optional[GeminiConfig] = None):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, config: Optional[GeminiConfig] = None):
        if self._initialized:
            return

        if config is None:
            api_key = os.environ.get("GEMINI_API_KEY", "")
            if not api_key:
                logger.warning("GEMINI_API_KEY not set, commentary will use fallbacks")
            config = GeminiConfig(api_key=api_key)

        self.config = config
        self._client = None
        self._initialized = True

        logger.info("GeminiClient initialized")

    async def _ensure_client(self) -> bool:
        """Ensure the API client is initialized."""
        if self._client is not None:
            return True

        if not self.config.api_key:
            logger.debug("Cannot initialize client: no API key")
            return False

        try:
            from google import genai

            self._client = genai.Client(api_key=self.config.api_key)
            logger.info("Gemini API client connected")
            return True

        except ImportError:
            logger.error("google-genai package not installed")
            return False
        except Exception as e:
            logger.error(f"Failed to initialize Gemini client: {e}")
            return False

    async def generate_text(self, prompt: str) -> Optional[str]:
        """Generate text using Gemini.

        Args:
            prompt: The user prompt

        Returns:
            Generated text, or None when there is no key, the response is
            empty or every retry timed out

        Raises:
            RateLimitError: the API reported a quota or rate limit
            ProviderError: any other API failure
        """
        if not await self._ensure_client():
            return None

        try:
            from google.genai import types

            config = types.GenerateContentConfig(
                temperature=self.config.temperature,
                max_output_tokens=self.config.max_output_tokens,
            )

            for attempt in range(self.config.max_retries):
                try:
                    response = await asyncio.wait_for(
                        asyncio.to_thread(
                            self._client.models.generate_content,
                            model=self.config.model,
                            contents=prompt,
                            config=config,
                        ),
                        timeout=self.config.timeout,
                    )

                    if response and response.text:
                        return response.text.strip()
                    return None

                except asyncio.TimeoutError:
                    logger.warning(f"Timeout on attempt {attempt + 1}")
                except Exception as e:
                    if is_rate_limit(e):
                        raise RateLimitError(str(e)) from e
                    if "503" in str(e) or "overloaded" in str(e).lower():
                        logger.warning(f"Service overloaded, retry {attempt + 1}")
                        await asyncio.sleep(self.config.retry_delay * (attempt + 1))
                    else:
                        raise

            logger.error("All retries exhausted")
            return None

        except ProviderError:
            raise
        except Exception as e:
            logger.error(f"Text generation failed: {e}")
            raise ProviderError(str(e)) from e

    @property
    def is_available(self) -> bool:
        """Check if AI features are available."""
        return bool(self.config.api_key)


# Module-level singleton accessor
_client: Optional[GeminiClient] = None


def get_gemini_client(config: Optional[GeminiConfig] = None) -> GeminiClient:
    """Get the singleton Gemini client instance.

    Args:
        config: Optional configuration (only used on first call)

    Returns:
        GeminiClient singleton instance
    """
    global _client
    if _client is None:
        _client = GeminiClient(config)
    return _client
