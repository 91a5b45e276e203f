"""Bridges the simulation's outbound event queue to the host.

Every drained ``GameEvent`` is republished on the event bus as a
``GAME_EVENT``. The narrator is itself a subscriber: narrated tags go to the
commentary service in the background, Yeti moments get their fixed
announcement straight away.
"""

import logging
from collections import deque
from typing import Deque, Iterable, Optional

from skifree.ai.commentary import ANNOUNCEMENTS, CommentaryService, coerce_tag
from skifree.core.events import Event, EventBus, EventType, commentary_event
from skifree.sim.entities import GameEvent

logger = logging.getLogger(__name__)


class Narrator:
    """Consumes simulation events and keeps the latest commentary line."""

    def __init__(
        self,
        bus: EventBus,
        service: CommentaryService,
        history: int = 5,
    ):
        self.bus = bus
        self.service = service
        self.latest: Optional[str] = None
        self.lines: Deque[str] = deque(maxlen=history)
        bus.subscribe(EventType.GAME_EVENT, self._on_game_event)

    def pump(self, simulation) -> int:
        """Drain ``simulation`` and handle what came out."""
        return self.handle(simulation.drain_events())

    def handle(self, events: Iterable[GameEvent]) -> int:
        count = 0
        for event in events:
            count += 1
            self.bus.emit(Event(
                EventType.GAME_EVENT,
                data={"tag": event.tag.value, "frame": event.frame, **event.context},
                source="simulation",
            ))
        return count

    def _on_game_event(self, event: Event) -> None:
        tag = event.data.get("tag")
        context = {k: v for k, v in event.data.items() if k not in ("tag", "frame")}

        if coerce_tag(tag) is not None:
            self.service.request(
                tag,
                context,
                lambda text, tag=tag: self.say(text, tag),
            )
        elif tag in ANNOUNCEMENTS:
            self.say(ANNOUNCEMENTS[tag], tag)

    def say(self, text: str, tag: str) -> None:
        self.latest = text
        self.lines.append(text)
        logger.info(f"[{tag}] {text}")
        self.bus.emit(commentary_event(text, tag))

    def clear(self) -> None:
        self.latest = None
        self.lines.clear()

    async def flush(self) -> None:
        """Wait for pending commentary requests to land."""
        await self.service.drain()
