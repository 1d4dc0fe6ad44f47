#!/usr/bin/env python3
"""
sim/hazard.py
=============
Rule-based longitudinal and lateral controller.

Every function here is pure: it reads a :class:`~sim.entities.Car` and
the entity lists of a :class:`~sim.world.World` and returns a command.

Acceleration rules, first match wins:

1. yaw or steering outside the deadband at speed → hard brake;
2. pedestrian on / heading into the lane at the next crosswalk within
   braking distance → hard brake;
3. obstacle ahead in the margin-expanded corridor → distance-scaled
   braking at high speed, mild braking at medium speed;
4. otherwise full throttle.

Steering swerves around the nearest obstacle ahead or gently recentres
the heading.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, NamedTuple, Optional

from sim.entities import Car, Crosswalk, Obstacle, Pedestrian
from sim.physics import braking_distance, intervals_overlap
from sim.policy import SimulationPolicy
from sim.world import World

log = logging.getLogger("hazard")


class Controls(NamedTuple):
    """One tick's worth of control inputs."""

    acceleration: float
    steering: float


# ── nearest-ahead lookups ─────────────────────────────────────────────────────

def nearest_crosswalk_ahead(
    car: Car, crosswalks: Iterable[Crosswalk]
) -> Optional[Crosswalk]:
    """Crosswalk with the smallest ``lx`` beyond the car's front edge, or *None*."""
    ahead = [cw for cw in crosswalks if cw.lx > car.front_x]
    if not ahead:
        return None
    return min(ahead, key=lambda cw: cw.lx)


def nearest_obstacle_ahead(
    car: Car, obstacles: Iterable[Obstacle]
) -> Optional[Obstacle]:
    """Obstacle with the smallest ``x`` beyond the car's front edge, or *None*."""
    ahead = [obs for obs in obstacles if obs.x > car.front_x]
    if not ahead:
        return None
    return min(ahead, key=lambda obs: obs.x)


# ── predicates ────────────────────────────────────────────────────────────────

def is_unstable(car: Car, policy: SimulationPolicy) -> bool:
    """Heading or steering outside the deadband while moving fast enough."""
    if car.v < policy.instability_min_speed:
        return False
    band = policy.instability_deadband
    return abs(car.psi) > band or abs(car.front_angle) > band


def is_pedestrian_hazard(
    car: Car,
    ped: Pedestrian,
    crosswalk: Crosswalk,
    policy: SimulationPolicy,
) -> bool:
    """True when *ped* forces the car to stop before *crosswalk*.

    All three must hold: the pedestrian (grown by the fear radius) is on
    the crosswalk; it is in the car's lane or walking toward it; the
    car's front edge is within one braking distance of the crossing.
    """
    fear = policy.pedestrian_fear_radius

    on_crosswalk = intervals_overlap(
        ped.x - fear, ped.x + fear, crosswalk.lx, crosswalk.rx
    )
    if not on_crosswalk:
        return False

    in_lane = intervals_overlap(
        ped.y - fear, ped.y + fear, car.y - Car.WIDTH, car.y + Car.WIDTH
    )
    heading_down = ped_heading_sign(ped) > 0
    moving_to_lane = (ped.y > car.y and not heading_down) or (
        ped.y < car.y and heading_down
    )
    if not (in_lane or moving_to_lane):
        return False

    reach = braking_distance(car.v, policy.max_deceleration)
    return car.front_x + fear >= crosswalk.lx - reach


def ped_heading_sign(ped: Pedestrian) -> int:
    """+1 when the pedestrian walks toward larger ``y``, -1 otherwise."""
    return -1 if math.sin(ped.yaw) < 0.0 else 1


def _obstacle_in_corridor(
    car: Car, obs: Obstacle, margin: float, policy: SimulationPolicy
) -> bool:
    half = Car.WIDTH / 2.0 + margin
    in_corridor = intervals_overlap(
        car.y - half, car.y + half, obs.y - obs.r, obs.y + obs.r
    )
    gap = obs.x - car.x
    return in_corridor and 0.0 < gap < policy.obstacle_lookahead


# ── policies ──────────────────────────────────────────────────────────────────

def get_acceleration(
    car: Car, world: World, policy: Optional[SimulationPolicy] = None
) -> float:
    """Longitudinal command for the next tick.

    Parameters
    ----------
    car : Car
        Ego state (normally ``world.get_my_car()``).
    world : World
        Source of crosswalks, pedestrians and obstacles.
    policy : SimulationPolicy or None
        Defaults to ``world.policy``.
    """
    policy = policy or world.policy

    if is_unstable(car, policy):
        return policy.hard_brake

    crosswalk = nearest_crosswalk_ahead(car, world.get_crosswalks())
    if crosswalk is not None:
        for ped in world.get_pedestrians():
            if is_pedestrian_hazard(car, ped, crosswalk, policy):
                return policy.hard_brake

    obs = nearest_obstacle_ahead(car, world.get_obstacles())
    if obs is not None and _obstacle_in_corridor(
        car, obs, policy.obstacle_lane_margin, policy
    ):
        distance = obs.x - car.x
        if car.v >= policy.obstacle_fast_speed:
            return -policy.obstacle_fast_gain / distance
        if car.v >= policy.obstacle_slow_speed:
            return policy.obstacle_slow_accel

    return policy.full_throttle


def get_steering(
    car: Car, world: World, policy: Optional[SimulationPolicy] = None
) -> float:
    """Steering-rate command for the next tick."""
    policy = policy or world.policy

    obs = nearest_obstacle_ahead(car, world.get_obstacles())
    if obs is not None and _obstacle_in_corridor(car, obs, 0.0, policy):
        if car.y < policy.lane_center_y:
            return policy.steer_avoid_command
        return -policy.steer_avoid_command

    return -policy.steer_centering_gain * car.psi


def plan_controls(world: World, policy: Optional[SimulationPolicy] = None) -> Controls:
    """Acceleration and steering computed from the same car snapshot."""
    car = world.get_my_car()
    controls = Controls(
        acceleration=get_acceleration(car, world, policy),
        steering=get_steering(car, world, policy),
    )
    if world.ticks % 100 == 0:
        log.debug(
            "t=%.2f x=%.1f y=%.1f v=%.1f psi=%.3f delta=%.3f -> a=%.1f df=%.3f",
            world.get_time_since_start(), car.x, car.y, car.v, car.psi,
            car.front_angle, controls.acceleration, controls.steering,
        )
    return controls
