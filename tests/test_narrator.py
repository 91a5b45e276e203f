"""Tests for the event bus and the narrator that feeds it."""

import pytest

from skifree.ai.commentary import ANNOUNCEMENTS, CommentaryService
from skifree.ai.narrator import Narrator
from skifree.core.events import Event, EventBus, EventType
from skifree.sim.clock import Simulation
from skifree.sim.entities import EventTag, GameEvent


class FakeClient:
    is_available = True

    def __init__(self, response="Fresh powder, fresh victim."):
        self.response = response
        self.prompts = []

    async def generate_text(self, prompt, **kwargs):
        self.prompts.append(prompt)
        return self.response


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def client():
    return FakeClient()


@pytest.fixture
def narrator(bus, client):
    return Narrator(bus, CommentaryService(client))


def test_bus_delivers_to_subscribers(bus):
    seen = []
    unsubscribe = bus.subscribe(EventType.COMMENTARY, seen.append)

    bus.emit(Event(EventType.COMMENTARY, data={"text": "hi"}))
    unsubscribe()
    bus.emit(Event(EventType.COMMENTARY, data={"text": "bye"}))

    assert [e.data["text"] for e in seen] == ["hi"]


def test_bus_isolates_failing_handlers(bus):
    seen = []

    def broken(event):
        raise RuntimeError("boom")

    bus.subscribe(EventType.RUN_STARTED, broken)
    bus.subscribe_all(seen.append)
    bus.emit(Event(EventType.RUN_STARTED))

    assert len(seen) == 1


def test_bus_history_filters_by_type(bus):
    bus.emit(Event(EventType.RUN_STARTED))
    bus.emit(Event(EventType.RUN_ENDED))
    assert [e.type for e in bus.get_history(EventType.RUN_ENDED)] == [EventType.RUN_ENDED]


async def test_bus_awaits_async_handlers(bus):
    seen = []

    async def handler(event):
        seen.append(event.type)

    bus.subscribe(EventType.GAME_EVENT, handler)
    bus.queue_event(Event(EventType.GAME_EVENT))
    await bus.process_queue()

    assert seen == [EventType.GAME_EVENT]


def test_yeti_moments_are_announced_immediately(narrator, bus, client):
    narrator.handle([GameEvent(EventTag.YETI_SPAWN, frame=10)])

    assert narrator.latest == ANNOUNCEMENTS["yeti_spawn"]
    assert client.prompts == []
    commentary = bus.get_history(EventType.COMMENTARY)
    assert commentary[-1].data == {"text": ANNOUNCEMENTS["yeti_spawn"], "tag": "yeti_spawn"}


def test_every_event_is_republished(narrator, bus):
    count = narrator.handle([
        GameEvent(EventTag.YETI_LUNGE, frame=1),
        GameEvent(EventTag.YETI_DESPAWN, frame=2, context={"distance": 4000.0}),
    ])

    assert count == 2
    published = bus.get_history(EventType.GAME_EVENT)
    assert [e.data["tag"] for e in published] == ["yeti_lunge", "yeti_despawn"]
    assert published[1].data["distance"] == 4000.0
    # Despawn is silent
    assert narrator.latest == ANNOUNCEMENTS["yeti_lunge"]


async def test_narrated_events_go_to_the_service(narrator, client):
    narrator.handle([GameEvent(EventTag.CRASH, frame=3, context={"cause": "tree", "distance": 900.0})])
    assert narrator.latest is None

    await narrator.flush()

    assert narrator.latest == "Fresh powder, fresh victim."
    assert "tree" in client.prompts[0]


async def test_pump_drains_the_simulation(narrator, client):
    sim = Simulation(seed=9)
    sim.reset()

    assert narrator.pump(sim) == 1
    assert sim.drain_events() == []

    await narrator.flush()
    assert len(client.prompts) == 1
    assert narrator.lines[-1] == "Fresh powder, fresh victim."


def test_clear_forgets_lines(narrator):
    narrator.say("hello", "start")
    narrator.clear()
    assert narrator.latest is None
    assert len(narrator.lines) == 0
