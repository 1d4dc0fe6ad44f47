#!/usr/bin/env python3
"""
sim/physics.py
==============
Kinematic stepping and low-level geometry helpers used by
:mod:`sim.world` and :mod:`sim.hazard`.

Keeping these in a separate module avoids circular imports and makes unit
testing straightforward.
"""

from __future__ import annotations

import math

from sim.entities import Car
from sim.policy import SimulationPolicy


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def wrap_angle(angle: float) -> float:
    """Fold *angle* into ``(-pi, pi]``."""
    wrapped = math.fmod(angle + math.pi, 2.0 * math.pi)
    if wrapped <= 0.0:
        wrapped += 2.0 * math.pi
    return wrapped - math.pi


def braking_distance(speed: float, max_deceleration: float) -> float:
    """Distance needed to stop from *speed*.

    Parameters
    ----------
    speed : float
        Current speed (units per second).
    max_deceleration : float
        Deceleration assumed available.

    Returns
    -------
    float
        ``speed² / max_deceleration``, the scanner's look-ahead, not the
        kinematic ``v² / 2a``.
    """
    return (speed * speed) / max(1e-9, max_deceleration)


def intervals_overlap(lo_a: float, hi_a: float, lo_b: float, hi_b: float) -> bool:
    """True when the open intervals ``(lo_a, hi_a)`` and ``(lo_b, hi_b)`` intersect."""
    return lo_a < hi_b and lo_b < hi_a


def circle_hits_car(car: Car, cx: float, cy: float, radius: float) -> bool:
    """Oriented-rectangle vs circle test.

    The circle centre is moved into the car frame (origin at the rear
    centre, +x along the heading) and compared with the closest point of
    the body rectangle.
    """
    dx = cx - car.x
    dy = cy - car.y
    cos_p = math.cos(car.psi)
    sin_p = math.sin(car.psi)
    local_x = dx * cos_p + dy * sin_p
    local_y = -dx * sin_p + dy * cos_p

    near_x = clamp(local_x, 0.0, Car.LENGTH)
    near_y = clamp(local_y, -Car.WIDTH / 2.0, Car.WIDTH / 2.0)
    return math.hypot(local_x - near_x, local_y - near_y) < radius


def step_car(
    car: Car,
    acceleration: float,
    steering: float,
    dt: float,
    policy: SimulationPolicy,
) -> None:
    """Advance *car* in place by one tick of the kinematic bicycle model.

    ``steering`` is a steering-rate command.  The front wheels also
    relax back toward centre at ``policy.steer_return_rate``, which keeps
    the yaw-centering command from ringing.  Speed is floored at zero
    (no reverse travel) and capped at ``policy.max_speed``; the steering
    angle is clamped to ``±policy.max_front_angle``.
    """
    if not (math.isfinite(acceleration) and math.isfinite(steering)):
        raise ValueError(f"non-finite control input a={acceleration} df={steering}")
    if dt <= 0.0:
        raise ValueError(f"dt must be positive, got {dt}")

    car.v = clamp(car.v + acceleration * dt, 0.0, policy.max_speed)

    rate = clamp(steering, -policy.max_steer_rate, policy.max_steer_rate)
    car.front_angle = clamp(
        car.front_angle + (rate - policy.steer_return_rate * car.front_angle) * dt,
        -policy.max_front_angle,
        policy.max_front_angle,
    )

    yaw_rate = car.v / policy.wheelbase * math.tan(car.front_angle)
    car.psi = wrap_angle(car.psi + yaw_rate * dt)

    car.x += car.v * math.cos(car.psi) * dt
    car.y += car.v * math.sin(car.psi) * dt
