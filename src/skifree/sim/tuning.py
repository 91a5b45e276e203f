"""Reference difficulty curve for the slope.

Every number the simulation uses lives here. Speeds are expressed on the
classic 0-100 "ski scale" and multiplied by SPEED_SCALE so that 100 maps
to 25 px per tick.
"""

from dataclasses import dataclass

from skifree.sim.errors import InvalidTuningError

SPEED_SCALE = 0.25


@dataclass(frozen=True)
class Tuning:
    """Tunable constants. Defaults are the reference game feel."""

    # Viewport the lookahead and culling windows are measured against
    view_width: float = 800.0
    view_height: float = 600.0

    # Player spawn
    player_start_x: float = 400.0
    player_start_y: float = 100.0

    # Speed limits
    global_speed_limit: float = 100 * SPEED_SCALE   # 25.00, reachable via boost only
    boost_speed: float = 95 * SPEED_SCALE           # 23.75
    normal_max_speed: float = 80 * SPEED_SCALE      # 20.00
    cruise_speed: float = 40 * SPEED_SCALE          # 10.00

    # Player physics
    accel: float = 0.25
    boost_decay: float = 0.02
    turn_speed: float = 0.2
    max_direction: float = 2.0
    drag: float = 0.1
    slope_gravity: float = 0.05
    slope_divisor: float = 2.5
    jump_strength: float = 8.0
    jump_gravity: float = 0.4
    jump_speed_bump: float = 0.5

    # Firing
    projectile_speed: float = 30.0
    fire_interval: int = 20
    projectile_offset_y: float = 20.0
    projectile_size: float = 10.0
    projectile_range: float = 500.0
    projectile_range_tracking: float = 1000.0

    # Pickups and hazards
    powerup_duration: int = 180
    ammo_per_pickup: int = 1
    mound_damping: float = 0.65

    # Yeti
    yeti_base_speed: float = 60 * SPEED_SCALE       # 15.00
    yeti_top_speed: float = 85 * SPEED_SCALE        # 21.25
    yeti_accel_factor: float = 0.12
    yeti_lunge_accel: float = 1.0
    yeti_lunge_multiplier: float = 1.5
    yeti_pre_lunge_multiplier: float = 0.5
    yeti_retreat_speed: float = -6.0
    yeti_min_spawn_depth: float = 2500.0
    yeti_spawn_chance: float = 0.01
    yeti_spawn_offset_x: float = -300.0
    yeti_spawn_offset_y: float = -400.0
    yeti_width: float = 40.0
    yeti_height: float = 50.0
    yeti_despawn_distance: float = 1500.0
    yeti_lunge_chance: float = 0.02
    yeti_pre_lunge_ticks: int = 30
    yeti_lunge_ticks: int = 40
    yeti_cooldown_ticks: int = 120
    yeti_scare_ticks: int = 240
    yeti_hit_radius: float = 10.0
    yeti_lunge_hit_radius: float = 30.0
    yeti_projectile_hit_radius: float = 30.0
    yeti_urgency_distance: float = 400.0
    yeti_difficulty_depth: float = 3000.0
    yeti_difficulty_step: float = 0.03
    yeti_swerve_amplitude: float = 2.0
    yeti_swerve_frequency: float = 0.05
    yeti_jitter: float = 6.0
    yeti_stop_distance: float = 5.0

    # World generation
    difficulty_depth: float = 2000.0
    row_spacing: float = 30.0
    row_jitter: float = 50.0
    obstacle_base_chance: float = 0.15
    obstacle_chance_step: float = 0.05
    obstacle_chance_cap: float = 0.6
    pickup_base_chance: float = 0.03
    pickup_chance_step: float = 0.01
    pickup_chance_cap: float = 0.10
    mound_base_share: float = 0.10
    mound_share_step: float = 0.15
    mound_share_cap: float = 0.80
    rock_threshold: float = 0.8
    stump_threshold: float = 0.95
    spawn_band_widths: float = 3.0
    feature_spacing: float = 15.0
    feature_attempts: int = 3
    feature_chance: float = 0.7
    feature_jitter: float = 20.0
    lookahead_margin: float = 500.0
    initial_spawn_start: float = 200.0
    initial_spawn_end: float = 1000.0

    def __post_init__(self) -> None:
        if not 0 < self.cruise_speed <= self.normal_max_speed:
            raise InvalidTuningError("cruise_speed must be in (0, normal_max_speed]")
        if self.normal_max_speed > self.global_speed_limit:
            raise InvalidTuningError("normal_max_speed exceeds global_speed_limit")
        if self.boost_speed > self.global_speed_limit:
            raise InvalidTuningError("boost_speed exceeds global_speed_limit")
        if self.yeti_base_speed > self.yeti_top_speed:
            raise InvalidTuningError("yeti_base_speed exceeds yeti_top_speed")
        if self.lookahead_margin <= 0 or self.row_spacing <= 0 or self.feature_spacing <= 0:
            raise InvalidTuningError("generation spacing and lookahead must be positive")

    @property
    def spawn_half_band(self) -> float:
        """Half-width of the lateral spawn band around the player."""
        return self.view_width * self.spawn_band_widths / 2


DEFAULT_TUNING = Tuning()
