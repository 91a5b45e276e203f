"""Tests for skier physics and firing."""

import pytest

from skifree.sim.entities import PlayerState, Yeti
from skifree.sim.inputs import InputState
from skifree.sim.player import PlayerController


def step(controller, player, store, inputs, frame=0, yeti=None):
    projectile = controller.apply_input(player, inputs, store, yeti, frame)
    controller.integrate(player)
    return projectile


def test_accelerating_from_rest_moves_straight_down(store):
    controller = PlayerController()
    player = controller.new_player()
    assert (player.x, player.y, player.speed) == (400.0, 100.0, 0.0)

    step(controller, player, store, InputState(down=True))

    assert player.speed == pytest.approx(0.25)
    assert player.y == pytest.approx(100.25)
    assert player.x == pytest.approx(400.0)


def test_speed_and_direction_stay_bounded(store, seeded_rng, tuning):
    controller = PlayerController(tuning)
    player = controller.new_player()

    for frame in range(3000):
        inputs = InputState(
            left=seeded_rng.random() < 0.3,
            right=seeded_rng.random() < 0.3,
            down=seeded_rng.random() < 0.6,
            up=seeded_rng.random() < 0.05,
            fire=seeded_rng.random() < 0.1,
        )
        if frame % 200 == 0:
            # Pretend a boost pad was hit
            player.speed = tuning.boost_speed
        step(controller, player, store, inputs, frame)

        assert 0.0 <= player.speed <= tuning.global_speed_limit
        assert -tuning.max_direction <= player.direction <= tuning.max_direction
        assert player.jump_height >= 0.0


def test_turning_clamps_at_max_direction(store):
    controller = PlayerController()
    player = controller.new_player()

    for _ in range(30):
        step(controller, player, store, InputState(left=True))
    assert player.direction == -2.0

    for _ in range(60):
        step(controller, player, store, InputState(right=True))
    assert player.direction == 2.0


def test_cruise_settles_on_target_from_above(store, tuning):
    controller = PlayerController(tuning)
    player = controller.new_player()
    player.speed = 15.0

    for _ in range(100):
        step(controller, player, store, InputState())

    # Gravity nudges it back over the target every other tick
    for _ in range(10):
        step(controller, player, store, InputState())
        assert tuning.cruise_speed - 1e-9 <= player.speed <= tuning.cruise_speed + tuning.slope_gravity + 1e-9


def test_turned_skier_cruises_slower(tuning):
    controller = PlayerController(tuning)
    assert controller.cruise_target(0.0) == pytest.approx(10.0)
    assert controller.cruise_target(2.0) == pytest.approx(2.0)
    assert controller.cruise_target(-1.0) < controller.cruise_target(0.0)


def test_boosted_speed_bleeds_while_accelerating(store, tuning):
    controller = PlayerController(tuning)
    player = controller.new_player()
    player.speed = tuning.boost_speed

    step(controller, player, store, InputState(down=True))

    assert player.speed == pytest.approx(tuning.boost_speed - tuning.boost_decay)


def test_jump_arc_lands_cleanly(store, tuning):
    controller = PlayerController(tuning)
    player = controller.new_player()
    player.speed = 5.0

    step(controller, player, store, InputState(up=True))
    assert player.state == PlayerState.JUMPING
    assert player.jump_height > 0

    landed = False
    for _ in range(100):
        step(controller, player, store, InputState())
        assert player.jump_height >= 0.0
        if player.state == PlayerState.SKIING:
            landed = True
            break

    assert landed
    assert player.jump_height == 0.0
    assert player.jump_velocity == 0.0


def test_jump_cannot_restart_midair(store, tuning):
    controller = PlayerController(tuning)
    player = controller.new_player()

    step(controller, player, store, InputState(up=True))
    velocity = player.jump_velocity
    step(controller, player, store, InputState(up=True))

    assert player.jump_velocity == pytest.approx(velocity - tuning.jump_gravity)


def test_fire_without_ammo_does_nothing(store):
    controller = PlayerController()
    player = controller.new_player()

    projectile = step(controller, player, store, InputState(fire=True))

    assert projectile is None
    assert player.ammo == 0
    assert store.projectiles == []


def test_fire_respects_interval(store, tuning):
    controller = PlayerController(tuning)
    player = controller.new_player()
    player.ammo = 5

    assert controller.fire(player, store, None, 0) is not None
    assert controller.fire(player, store, None, 10) is None
    assert controller.fire(player, store, None, tuning.fire_interval) is None
    assert controller.fire(player, store, None, tuning.fire_interval + 1) is not None
    assert player.ammo == 3
    assert len(store.projectiles) == 2


def test_fire_goes_uphill_without_a_yeti(store, tuning):
    controller = PlayerController(tuning)
    player = controller.new_player()
    player.ammo = 1

    projectile = controller.fire(player, store, None, 0)

    assert (projectile.x, projectile.y) == (player.x, player.y - 20)
    assert projectile.vx == 0.0
    assert projectile.vy == -tuning.projectile_speed


def test_fire_aims_at_the_yeti(store):
    controller = PlayerController()
    player = controller.new_player()
    player.ammo = 1
    yeti = Yeti(x=player.x + 300, y=player.y + 400)

    projectile = controller.fire(player, store, yeti, 0)

    assert projectile.vx == pytest.approx(18.0)
    assert projectile.vy == pytest.approx(24.0)


def test_crashed_skier_ignores_input(store):
    controller = PlayerController()
    player = controller.new_player()
    player.state = PlayerState.CRASHED
    player.ammo = 3

    step(controller, player, store, InputState(down=True, left=True, fire=True))

    assert player.speed == 0.0
    assert player.direction == 0.0
    assert player.ammo == 3
    assert player.y == 100.0


def test_powerup_timer_counts_down(store):
    controller = PlayerController()
    player = controller.new_player()
    player.powerup_timer = 2

    step(controller, player, store, InputState())
    assert player.is_powered_up
    step(controller, player, store, InputState())
    assert not player.is_powered_up
    step(controller, player, store, InputState())
    assert player.powerup_timer == 0
