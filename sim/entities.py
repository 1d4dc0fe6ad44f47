#!/usr/bin/env python3
"""
sim/entities.py
===============
Plain data describing everything that lives on the road.

These classes carry no behaviour beyond small geometric conveniences;
:class:`~sim.world.World` owns and mutates them, :mod:`sim.hazard` only
reads them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

PEDESTRIAN_SPEED: float = 15.0
"""Default walking speed (units per second)."""


@dataclass
class Car:
    """The ego vehicle.

    Attributes
    ----------
    x : float
        Longitudinal position of the rear edge.
    y : float
        Lateral position of the centre line.
    psi : float
        Heading / yaw in radians (0 = straight down the road).
    front_angle : float
        Front-wheel steering angle in radians.
    v : float
        Scalar speed, never negative.
    """

    LENGTH: ClassVar[float] = 40.0
    WIDTH: ClassVar[float] = 20.0

    x: float = 0.0
    y: float = 0.0
    psi: float = 0.0
    front_angle: float = 0.0
    v: float = 0.0

    @property
    def front_x(self) -> float:
        """Longitudinal coordinate of the front edge."""
        return self.x + self.LENGTH

    def as_dict(self) -> dict:
        return {
            "x": self.x,
            "y": self.y,
            "psi": self.psi,
            "front_angle": self.front_angle,
            "v": self.v,
        }


@dataclass
class Pedestrian:
    """A walker crossing the road, moving along ``yaw`` at ``speed``.

    ``home`` is the crosswalk the walker was spawned on; the world keeps
    it inside that crosswalk's extent.  Hand-placed walkers without a
    home roam freely.
    """

    x: float
    y: float
    yaw: float
    speed: float = PEDESTRIAN_SPEED
    home: Optional[Crosswalk] = None

    def as_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "yaw": self.yaw, "speed": self.speed}


@dataclass(frozen=True)
class Obstacle:
    """Static circular hazard centred at *(x, y)* with radius *r*."""

    x: float
    y: float
    r: float


@dataclass(frozen=True)
class Crosswalk:
    """Zebra crossing spanning the full road width between ``lx`` and ``rx``."""

    lx: float
    rx: float

    def __post_init__(self) -> None:
        if not self.lx < self.rx:
            raise ValueError(
                f"crosswalk left edge {self.lx} must lie before right edge {self.rx}"
            )