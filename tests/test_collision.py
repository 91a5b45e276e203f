"""Tests for collision outcomes and their precedence."""

import pytest

from skifree.sim.collision import (
    CollisionResolver,
    Outcome,
    check_collision,
    entity_hitbox,
    player_hitbox,
)
from skifree.sim.entities import EntityType, EventTag, Player, PlayerState


@pytest.fixture
def player():
    # Hitbox spans x 392..408, y 985..1015
    return Player(x=400.0, y=1000.0, speed=10.0)


@pytest.fixture
def events():
    return []


@pytest.fixture
def resolver(tuning, events):
    return CollisionResolver(tuning, emit=lambda tag, ctx: events.append((tag, ctx)))


def on_player(store, kind, size=(24.0, 24.0)):
    return store.spawn(kind, 390.0, 990.0, *size)


def test_player_hitbox_doubles_with_powerup(player):
    normal = player_hitbox(player)
    player.powerup_timer = 10
    big = player_hitbox(player)

    assert (normal.w, normal.h) == (16, 30)
    assert (big.w, big.h) == (32, 60)
    # Grows around the same centre
    assert big.x + big.w / 2 == pytest.approx(normal.x + normal.w / 2)
    assert big.y + big.h / 2 == pytest.approx(normal.y + normal.h / 2)


def test_tree_only_collides_at_the_trunk(store, player):
    trunk_hit = store.spawn(EntityType.TREE, 390.0, 980.0, 24, 24)
    canopy_only = store.spawn(EntityType.TREE, 390.0, 1001.0, 24, 24)

    assert entity_hitbox(trunk_hit).w == 8
    assert check_collision(player, trunk_hit)
    assert not check_collision(player, canopy_only)


def test_crash_stops_the_skier(store, player, resolver, events):
    rock = on_player(store, EntityType.ROCK)

    contacts = resolver.resolve(player, store)

    assert [c.outcome for c in contacts] == [Outcome.CRASH]
    assert player.state == PlayerState.CRASHED
    assert player.speed == 0.0
    assert rock in store.entities
    assert events == [(EventTag.CRASH, {"distance": 1000.0, "cause": "rock"})]


def test_only_one_crash_per_tick(store, player, resolver, events):
    on_player(store, EntityType.ROCK)
    on_player(store, EntityType.STUMP)
    coffee = on_player(store, EntityType.COFFEE, (20.0, 20.0))

    contacts = resolver.resolve(player, store)

    assert len(contacts) == 1
    assert len(events) == 1
    # Entities after the crash are left alone
    assert coffee in store.entities
    assert player.ammo == 0


def test_pickups_before_a_crash_still_count(store, player, resolver):
    on_player(store, EntityType.COFFEE, (20.0, 20.0))
    on_player(store, EntityType.TREE)

    contacts = resolver.resolve(player, store)

    assert [c.outcome for c in contacts] == [Outcome.AMMO, Outcome.CRASH]
    assert player.ammo == 1
    assert player.state == PlayerState.CRASHED
    assert [e.type for e in store.entities] == [EntityType.TREE]


def test_powerup_ignores_trees(store, player, resolver, events):
    player.powerup_timer = 100
    tree = store.spawn(EntityType.TREE, 390.0, 980.0, 24, 24)

    contacts = resolver.resolve(player, store)

    assert contacts == []
    assert tree in store.entities
    assert player.state == PlayerState.SKIING
    assert player.speed == 10.0
    assert events == []


def test_powerup_does_not_clear_mushrooms(store, player, resolver):
    player.powerup_timer = 100
    on_player(store, EntityType.MUSHROOM)

    resolver.resolve(player, store)

    assert player.state == PlayerState.CRASHED


@pytest.mark.parametrize("speed", [5.0, 24.5])
def test_boost_pad_sets_exact_speed(store, player, resolver, tuning, speed):
    player.speed = speed
    pad = on_player(store, EntityType.BOOST_PAD, (20.0, 30.0))

    resolver.resolve(player, store)

    assert player.speed == tuning.boost_speed
    assert pad not in store.entities


def test_super_mushroom_grants_powerup(store, player, resolver, tuning):
    on_player(store, EntityType.SUPER_MUSHROOM, (20.0, 20.0))

    resolver.resolve(player, store)

    assert player.powerup_timer == tuning.powerup_duration
    assert store.entities == []


def test_snow_mound_slows_unless_powered(store, player, resolver):
    on_player(store, EntityType.SNOW_MOUND)
    resolver.resolve(player, store)
    assert player.speed == pytest.approx(6.5)
    assert store.entities == []

    player.speed = 10.0
    player.powerup_timer = 50
    on_player(store, EntityType.SNOW_MOUND)
    contacts = resolver.resolve(player, store)
    assert contacts[0].outcome == Outcome.SLOWED
    assert player.speed == 10.0


def test_jumping_clears_low_hazards_but_not_trees(store, player, resolver):
    player.state = PlayerState.JUMPING
    player.jump_height = 20.0
    rock = on_player(store, EntityType.ROCK)

    assert resolver.resolve(player, store) == []
    assert rock in store.entities

    store.spawn(EntityType.TREE, 390.0, 980.0, 24, 24)
    resolver.resolve(player, store)
    assert player.state == PlayerState.CRASHED
    assert player.jump_height == 0.0


def test_cosmetic_bumps_never_collide(store, player, resolver):
    on_player(store, EntityType.SNOW_BUMP)
    assert resolver.resolve(player, store) == []


def test_inactive_skier_is_not_resolved(store, player, resolver):
    player.state = PlayerState.EATEN
    coffee = on_player(store, EntityType.COFFEE, (20.0, 20.0))

    assert resolver.resolve(player, store) == []
    assert coffee in store.entities
