"""Commentary service: one-liners for the big moments of a run.

Lines come from Gemini when a key is configured. Every failure path ends in
a fixed line so the host always has something to show.
"""

import asyncio
import logging
import time
from enum import Enum
from typing import Any, Callable, Dict, Optional

from skifree.ai.client import RateLimitError, get_gemini_client, is_rate_limit

logger = logging.getLogger(__name__)

DEFAULT_COOLDOWN = 60.0
ERROR_LINE = "The Yeti disconnected the API cable."


class CommentaryTag(Enum):
    """Moments that get narrated."""

    START = "start"
    CRASH = "crash"
    EATEN = "eaten"
    HIGHSCORE = "highscore"


PROMPTS: Dict[CommentaryTag, str] = {
    CommentaryTag.START: (
        "Write a short, witty, one-sentence headline for a ski resort "
        "newspaper announcing a new skier is hitting the slopes."
    ),
    CommentaryTag.CRASH: (
        "The skier crashed into a {cause} after skiing {distance} meters. "
        "Write a short, snarky comment (max 10 words)."
    ),
    CommentaryTag.EATEN: (
        "The Abominable Snow Monster ate the skier after {distance} meters. "
        "Write a terrifying but funny message (max 10 words)."
    ),
    CommentaryTag.HIGHSCORE: (
        "New record set! {distance} meters! "
        "Write a celebratory shout (max 5 words)."
    ),
}

# Fixed lines for events that are never sent to the model
ANNOUNCEMENTS: Dict[str, str] = {
    "yeti_spawn": "RROOOAAAARRRR! The Yeti has spotted you!",
    "yeti_lunge": "LUNGE!",
    "yeti_hit": "CAFFEINE OVERLOAD! Yeti is retreating!",
    "yeti_scared": "The Yeti is scared of your size!",
}


def coerce_tag(tag: Any) -> Optional[CommentaryTag]:
    """Map a tag or its string value to a CommentaryTag, if it is one."""
    if isinstance(tag, CommentaryTag):
        return tag
    value = getattr(tag, "value", tag)
    try:
        return CommentaryTag(value)
    except ValueError:
        return None


def fallback(tag: Any, context: Optional[Dict[str, Any]] = None) -> str:
    """The canned line for a tag."""
    context = context or {}
    tag = coerce_tag(tag)
    if tag == CommentaryTag.EATEN:
        return "OM NOM NOM! The Yeti is full."
    if tag == CommentaryTag.CRASH:
        return f"Ouch! That looked painful. (Hit {context.get('cause') or 'something'})"
    if tag == CommentaryTag.HIGHSCORE:
        return "New Record! Amazing skiing!"
    return "SkiFree: Watch out for the Yeti!"


def build_prompt(tag: CommentaryTag, context: Dict[str, Any]) -> str:
    distance = int(context.get("distance") or 0)
    cause = context.get("cause") or "something"
    return PROMPTS[tag].format(distance=distance, cause=cause)


class CommentaryService:
    """Turns tagged moments into text without ever blocking the caller."""

    def __init__(
        self,
        client: Any = None,
        cooldown_s: float = DEFAULT_COOLDOWN,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._client = client if client is not None else get_gemini_client()
        self.cooldown_s = cooldown_s
        self._clock = clock
        self._blocked_until = 0.0
        self._tasks: set[asyncio.Task] = set()

    @property
    def is_available(self) -> bool:
        return bool(getattr(self._client, "is_available", False))

    @property
    def rate_limited(self) -> bool:
        return self._clock() < self._blocked_until

    async def generate(self, tag: Any, context: Optional[Dict[str, Any]] = None) -> str:
        """Produce a line for ``tag``. Never raises."""
        context = context or {}
        known = coerce_tag(tag)
        if known is None or not self.is_available:
            return fallback(tag, context)

        if self.rate_limited:
            logger.debug(f"Rate limit cooldown active, using fallback for {known.value}")
            return fallback(known, context)

        try:
            text = await self._client.generate_text(prompt=build_prompt(known, context))
        except Exception as e:
            if isinstance(e, RateLimitError) or is_rate_limit(e):
                self._blocked_until = self._clock() + self.cooldown_s
                logger.warning(f"Commentary rate limited, pausing for {self.cooldown_s:.0f}s: {e}")
                return fallback(known, context)
            logger.error(f"Commentary generation failed: {e}")
            return ERROR_LINE

        if not text or not text.strip():
            return fallback(known, context)
        return text.strip()

    def request(
        self,
        tag: Any,
        context: Optional[Dict[str, Any]],
        callback: Callable[[str], None],
    ) -> asyncio.Task:
        """Schedule ``generate`` on the running loop and hand the line to ``callback``."""

        async def _run() -> None:
            text = await self.generate(tag, context)
            try:
                callback(text)
            except Exception as e:
                logger.error(f"Commentary callback failed: {e}")

        task = asyncio.get_running_loop().create_task(_run())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def drain(self) -> None:
        """Wait for every outstanding request."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
