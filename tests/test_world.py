"""Tests for procedural slope generation."""

import pytest

from skifree.sim.entities import EntityType
from skifree.sim.world import WorldGenerator


def test_difficulty_tier_boundaries(tuning):
    world = WorldGenerator(tuning)
    assert world.difficulty_tier(0) == 0
    assert world.difficulty_tier(1999) == 0
    assert world.difficulty_tier(2000) == 1
    assert world.difficulty_tier(4500) == 2


def test_chances_grow_with_depth_and_cap(tuning):
    world = WorldGenerator(tuning)
    previous = (0.0, 0.0, 0.0)
    for tier in range(40):
        current = (world.obstacle_chance(tier), world.pickup_chance(tier), world.mound_share(tier))
        assert all(c >= p for c, p in zip(current, previous))
        previous = current

    assert world.obstacle_chance(0) == pytest.approx(0.15)
    assert world.obstacle_chance(100) == pytest.approx(0.75)
    assert world.pickup_chance(100) == pytest.approx(0.13)
    assert world.mound_share(100) == pytest.approx(0.90)


@pytest.mark.parametrize("roll, expected", [
    (0.05, EntityType.SNOW_MOUND),
    (0.50, EntityType.TREE),
    (0.85, EntityType.ROCK),
    (0.97, EntityType.STUMP),
])
def test_obstacle_roll_at_surface(tuning, fixed_rng, roll, expected):
    world = WorldGenerator(tuning, fixed_rng(roll))
    assert world.pick_obstacle(0) == expected


def test_deep_slopes_are_mostly_mounds(tuning, fixed_rng):
    world = WorldGenerator(tuning, fixed_rng(0.5))
    assert world.pick_obstacle(5) == EntityType.SNOW_MOUND


def test_populate_stays_in_band(tuning, seeded_rng, store):
    world = WorldGenerator(tuning, seeded_rng)
    world.populate(store, 1000, 4000, player_x=250)

    assert store.entities
    half = tuning.spawn_half_band
    for entity in store.entities:
        assert 250 - half <= entity.x <= 250 + half
        assert 1000 <= entity.y < 4000 + tuning.row_jitter
    assert store.frontier == 4000


def test_cosmetic_features_are_kept_apart(tuning, seeded_rng, store):
    world = WorldGenerator(tuning, seeded_rng)
    world.populate(store, 0, 600, player_x=400)

    assert store.features
    entity_ids = {e.id for e in store.entities}
    assert not entity_ids & {f.id for f in store.features}
    assert all(0.3 <= f.opacity <= 0.8 for f in store.features)
    assert not any(e.type == EntityType.SNOW_BUMP for e in store.entities)


def test_empty_band_generates_nothing(tuning, seeded_rng, store):
    world = WorldGenerator(tuning, seeded_rng)
    world.populate(store, 500, 500, player_x=400)
    assert store.entities == []
    assert store.frontier == 0.0


def test_ensure_ahead_tops_up_in_whole_rows(tuning, seeded_rng, store):
    world = WorldGenerator(tuning, seeded_rng)

    assert world.ensure_ahead(store, 400, 100)
    # Starts at the viewport bottom (700), 17 rows of 30 cover the 500 margin
    assert store.frontier == pytest.approx(700 + 17 * 30)
    assert not world.ensure_ahead(store, 400, 100)


def test_lookahead_never_falls_behind(tuning, seeded_rng, store):
    world = WorldGenerator(tuning, seeded_rng)
    y = 100.0
    for _ in range(1000):
        y += 23.75
        world.ensure_ahead(store, 400, y)
        assert store.frontier - y >= tuning.view_height + tuning.lookahead_margin


def test_generation_is_reproducible(tuning):
    import random
    from skifree.sim.store import EntityStore

    a, b = EntityStore(), EntityStore()
    WorldGenerator(tuning, random.Random(7)).populate(a, 0, 3000, 400)
    WorldGenerator(tuning, random.Random(7)).populate(b, 0, 3000, 400)

    assert [(e.type, e.x, e.y) for e in a.entities] == [(e.type, e.x, e.y) for e in b.entities]
