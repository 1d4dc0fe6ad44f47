#!/usr/bin/env python3
"""
sim/policy.py
=============
Tunable geometry, vehicle, controller and spawn parameters for the
driving simulation.  Every constant lives in the frozen
:class:`SimulationPolicy` dataclass so that experiments can swap
policies without touching code.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class SimulationPolicy:
    """Immutable bag of every tunable simulation parameter.

    Groups: geometry, vehicle limits, hazard scanner, pedestrians,
    spawn layout, loop timing.
    """

    # ── Geometry ──────────────────────────────────────────────────────────
    road_length: float = 4000.0
    """Distance the car must cover before the run counts as finished."""

    road_width: float = 110.0
    """Lateral extent of the drivable corridor, ``0 <= y <= road_width``."""

    lane_center_y: float = 55.0
    """Lateral threshold the avoidance steering biases around."""

    car_start_x: float = 0.0
    """Rear-edge position of the car after :meth:`World.init`."""

    # ── Vehicle limits ────────────────────────────────────────────────────
    max_speed: float = 100.0
    """Hard upper clamp on the car speed."""

    max_front_angle: float = 0.8
    """Steering-angle clamp (radians)."""

    max_steer_rate: float = 100.0
    """Clamp on the steering-rate command (rad/s)."""

    steer_return_rate: float = 5.0
    """Self-aligning pull of the front wheels back to centre (1/s)."""

    wheelbase: float = 40.0
    """Distance between axles used by the bicycle model."""

    # ── Hazard scanner ────────────────────────────────────────────────────
    instability_deadband: float = 0.2
    """Yaw / steering magnitude (rad) above which the car is unstable."""

    instability_min_speed: float = 10.0
    """Instability only matters at or above this speed."""

    hard_brake: float = -100.0
    """Acceleration commanded for an emergency stop."""

    full_throttle: float = 100.0
    """Acceleration commanded when nothing is in the way."""

    max_deceleration: float = 100.0
    """Deceleration assumed by the braking-distance estimate."""

    pedestrian_fear_radius: float = 10.0
    """Margin grown around each pedestrian when assessing hazards."""

    obstacle_lane_margin: float = 3.0
    """Extra lateral margin on each side of the car for the braking rule."""

    obstacle_lookahead: float = 200.0
    """Obstacles further ahead than this are ignored."""

    obstacle_slow_speed: float = 25.0
    obstacle_slow_accel: float = -10.0
    obstacle_fast_speed: float = 60.0
    obstacle_fast_gain: float = 8_000_000.0
    """Distance-scaled braking: ``-gain / distance`` at or above the fast speed."""

    steer_avoid_command: float = 100.0
    """Steering-rate magnitude used to swerve around an obstacle."""

    steer_centering_gain: float = 0.5
    """Proportional gain of the yaw self-centering command."""

    # ── Pedestrians ───────────────────────────────────────────────────────
    pedestrian_speed: float = 15.0
    pedestrian_radius: float = 5.0
    """Body radius used for physical collisions."""

    pedestrian_heading_jitter: float = 0.01
    """Std-dev (rad) of the per-tick random heading perturbation."""

    pedestrians_per_crosswalk: int = 2

    # ── Spawn layout ──────────────────────────────────────────────────────
    seed: int = 1991
    crosswalk_count: int = 6
    crosswalk_width: float = 40.0
    obstacle_count: int = 8
    obstacle_radius_range: Tuple[float, float] = (8.0, 15.0)
    spawn_min_x: float = 300.0
    """Nothing spawns closer to the start line than this."""

    # ── Loop timing ───────────────────────────────────────────────────────
    tick_s: float = 0.01
    """Fixed simulation step (seconds)."""

    time_limit_s: float = 300.0
    """Simulated time after which the run is abandoned."""

    def __post_init__(self) -> None:
        if self.tick_s <= 0.0:
            raise ValueError(f"tick_s must be positive, got {self.tick_s}")
        lo, hi = self.obstacle_radius_range
        if lo <= 0.0 or hi < lo:
            raise ValueError(f"invalid obstacle_radius_range {self.obstacle_radius_range}")

