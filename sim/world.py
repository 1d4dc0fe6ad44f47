#!/usr/bin/env python3
"""
sim/world.py
============
Single-car road world.

The :class:`World` owns the ego :class:`~sim.entities.Car`, the walking
pedestrians, the static obstacles and crosswalks, and the simulated
clock.  Only the simulation loop mutates a live instance; everyone else
gets deep copies from the getters or from :meth:`World.copy`.
"""

from __future__ import annotations

import copy
import enum
import logging
import math
import random
from typing import List, Optional

from sim.entities import Car, Crosswalk, Obstacle, Pedestrian
from sim.physics import circle_hits_car, step_car
from sim.policy import SimulationPolicy

log = logging.getLogger("world")


class GameOverReason(enum.Enum):
    """Why a run stopped."""

    FINISHED = "finished"
    LEFT_ROAD = "left_road"
    TIME_LIMIT = "time_limit"


class World:
    """Road corridor with one car, pedestrians, obstacles and crosswalks.

    A freshly constructed world is *empty*: a parked car at the start
    line and nothing else.  :meth:`init` populates it from the seed.

    Parameters
    ----------
    policy : SimulationPolicy or None
        Tunable constants; uses defaults when *None*.
    seed : int or None
        Layout seed; falls back to ``policy.seed``.
    """

    def __init__(
        self,
        policy: Optional[SimulationPolicy] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.policy = policy or SimulationPolicy()
        self.seed = self.policy.seed if seed is None else int(seed)
        self._rng = random.Random(self.seed)
        self._car = Car(x=self.policy.car_start_x, y=self.policy.lane_center_y)
        self._pedestrians: List[Pedestrian] = []
        self._obstacles: List[Obstacle] = []
        self._crosswalks: List[Crosswalk] = []
        self._time_s: float = 0.0
        self.ticks: int = 0
        self.collisions: int = 0

    # ── initialisation / reset ────────────────────────────────────────────

    def init(self) -> None:
        """(Re)build every entity from the seed and rewind the clock.

        Two calls in a row leave the world in the same state.
        """
        self._rng = random.Random(self.seed)
        self._car = Car(x=self.policy.car_start_x, y=self.policy.lane_center_y)
        self._crosswalks = self._spawn_crosswalks()
        self._pedestrians = self._spawn_pedestrians(self._crosswalks)
        self._obstacles = self._spawn_obstacles(self._crosswalks)
        self._time_s = 0.0
        self.ticks = 0
        log.debug(
            "world init seed=%d crosswalks=%d pedestrians=%d obstacles=%d",
            self.seed, len(self._crosswalks), len(self._pedestrians),
            len(self._obstacles),
        )

    def _spawn_crosswalks(self) -> List[Crosswalk]:
        p = self.policy
        if p.crosswalk_count <= 0:
            return []
        span = (p.road_length - p.spawn_min_x) / p.crosswalk_count
        crosswalks = []
        for idx in range(p.crosswalk_count):
            # One crosswalk per equal slice of road, jittered inside its slice.
            lo = p.spawn_min_x + idx * span
            lx = self._rng.uniform(lo, lo + max(0.0, span - p.crosswalk_width))
            crosswalks.append(Crosswalk(lx=lx, rx=lx + p.crosswalk_width))
        return crosswalks

    def _spawn_pedestrians(self, crosswalks: List[Crosswalk]) -> List[Pedestrian]:
        p = self.policy
        pedestrians = []
        for cw in crosswalks:
            for _ in range(p.pedestrians_per_crosswalk):
                x = self._rng.uniform(cw.lx, cw.rx)
                y = self._rng.uniform(0.0, p.road_width)
                yaw = math.pi / 2.0 if self._rng.random() < 0.5 else -math.pi / 2.0
                pedestrians.append(
                    Pedestrian(x=x, y=y, yaw=yaw, speed=p.pedestrian_speed, home=cw)
                )
        return pedestrians

    def _spawn_obstacles(self, crosswalks: List[Crosswalk]) -> List[Obstacle]:
        p = self.policy
        lo_r, hi_r = p.obstacle_radius_range
        obstacles: List[Obstacle] = []
        attempts = 0
        while len(obstacles) < p.obstacle_count and attempts < p.obstacle_count * 50:
            attempts += 1
            r = self._rng.uniform(lo_r, hi_r)
            x = self._rng.uniform(p.spawn_min_x, p.road_length)
            y = self._rng.uniform(r, p.road_width - r)
            # Keep crosswalks walkable.
            if any(cw.lx - r <= x <= cw.rx + r for cw in crosswalks):
                continue
            obstacles.append(Obstacle(x=x, y=y, r=r))
        return obstacles

    # ── mutation (simulation loop only) ───────────────────────────────────

    def update_pedestrians(self, dt: Optional[float] = None) -> None:
        """Walk every pedestrian one tick along its heading.

        Headings wander by a small seeded jitter.  A pedestrian reaching a
        road edge turns round; one drifting off the side of its home
        crosswalk is put back on the crosswalk and squared up to walk
        straight across again.
        """
        dt = self.policy.tick_s if dt is None else dt
        jitter = self.policy.pedestrian_heading_jitter
        width = self.policy.road_width
        for ped in self._pedestrians:
            if jitter > 0.0:
                ped.yaw += self._rng.gauss(0.0, jitter)
            ped.x += ped.speed * math.cos(ped.yaw) * dt
            ped.y += ped.speed * math.sin(ped.yaw) * dt
            home = ped.home
            if home is not None and not home.lx <= ped.x <= home.rx:
                ped.x = min(max(ped.x, home.lx), home.rx)
                ped.yaw = math.pi / 2.0 if math.sin(ped.yaw) >= 0.0 else -math.pi / 2.0
            if ped.y < 0.0 or ped.y > width:
                ped.y = min(max(ped.y, 0.0), width)
                ped.yaw = math.pi / 2.0 if ped.y <= 0.0 else -math.pi / 2.0

    def make_step(self, acceleration: float, steering: float) -> None:
        """Advance the car by one tick and the clock by ``policy.tick_s``."""
        step_car(self._car, acceleration, steering, self.policy.tick_s, self.policy)
        self._time_s += self.policy.tick_s
        self.ticks += 1

    # ── queries ───────────────────────────────────────────────────────────

    def check_collisions(self) -> bool:
        """True when the car body touches an obstacle or a pedestrian."""
        car = self._car
        for obs in self._obstacles:
            if circle_hits_car(car, obs.x, obs.y, obs.r):
                return True
        radius = self.policy.pedestrian_radius
        for ped in self._pedestrians:
            if circle_hits_car(car, ped.x, ped.y, radius):
                return True
        return False

    def game_over_reason(self) -> Optional[GameOverReason]:
        """Which terminal condition holds, or *None* while the run continues."""
        car = self._car
        if car.front_x >= self.policy.road_length:
            return GameOverReason.FINISHED
        half_w = Car.WIDTH / 2.0
        if car.y + half_w < 0.0 or car.y - half_w > self.policy.road_width:
            return GameOverReason.LEFT_ROAD
        if self._time_s >= self.policy.time_limit_s:
            return GameOverReason.TIME_LIMIT
        return None

    def game_over(self) -> bool:
        return self.game_over_reason() is not None

    def get_crosswalks(self) -> List[Crosswalk]:
        return list(self._crosswalks)

    def get_pedestrians(self) -> List[Pedestrian]:
        return [copy.copy(ped) for ped in self._pedestrians]

    def get_obstacles(self) -> List[Obstacle]:
        return list(self._obstacles)

    def get_my_car(self) -> Car:
        return copy.copy(self._car)

    def get_time_since_start(self) -> float:
        return self._time_s

    def copy(self) -> "World":
        """Deep, independent copy (RNG state included)."""
        return copy.deepcopy(self)

    # ── test / scenario hooks ─────────────────────────────────────────────

    def place(
        self,
        car: Optional[Car] = None,
        pedestrians: Optional[List[Pedestrian]] = None,
        obstacles: Optional[List[Obstacle]] = None,
        crosswalks: Optional[List[Crosswalk]] = None,
    ) -> None:
        """Replace entity collections with copies of the given ones.

        Used to stage hand-built scenarios; arguments left as *None* keep
        the current contents.
        """
        if car is not None:
            self._car = copy.copy(car)
        if pedestrians is not None:
            self._pedestrians = [copy.copy(ped) for ped in pedestrians]
        if obstacles is not None:
            self._obstacles = list(obstacles)
        if crosswalks is not None:
            self._crosswalks = list(crosswalks)

    def __repr__(self) -> str:
        return (
            f"World(seed={self.seed}, t={self._time_s:.2f}s, car={self._car!r}, "
            f"pedestrians={len(self._pedestrians)}, obstacles={len(self._obstacles)}, "
            f"crosswalks={len(self._crosswalks)})"
        )
