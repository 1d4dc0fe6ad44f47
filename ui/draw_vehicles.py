#!/usr/bin/env python3
"""Ego-car sprite drawing (mixin)."""

from __future__ import annotations

import math

import pygame

from sim.entities import Car

from .helpers import rect_corners


class VehicleRenderer:
    """Mixin that draws the car body, windshield and front wheels."""

    def draw_car(self, surface: pygame.Surface, car: Car) -> None:
        body = [
            self.camera.world_to_screen(px, py)
            for px, py in rect_corners(car.x, car.y, Car.LENGTH, Car.WIDTH, car.psi)
        ]
        pygame.draw.polygon(surface, self.CAR_COLOR, body)

        # Windshield band over the front third.
        shield = [
            self.camera.world_to_screen(px, py)
            for px, py in rect_corners(
                *self._along(car, Car.LENGTH * 0.55),
                Car.LENGTH * 0.2,
                Car.WIDTH * 0.8,
                car.psi,
            )
        ]
        pygame.draw.polygon(surface, self.CAR_WINDSHIELD_COLOR, shield)

        # Front wheels turned by the steering angle.
        wheel_heading = car.psi + car.front_angle
        for side in (-1.0, 1.0):
            wx, wy = self._along(car, Car.LENGTH * 0.8, side * Car.WIDTH / 2.0)
            wheel = [
                self.camera.world_to_screen(px, py)
                for px, py in rect_corners(
                    wx - 3.0 * math.cos(wheel_heading),
                    wy - 3.0 * math.sin(wheel_heading),
                    6.0, 3.0, wheel_heading,
                )
            ]
            pygame.draw.polygon(surface, (10, 10, 10), wheel)

    @staticmethod
    def _along(car: Car, forward: float, lateral: float = 0.0):
        """Point *forward* units along the heading and *lateral* to the side."""
        c, s = math.cos(car.psi), math.sin(car.psi)
        return car.x + forward * c - lateral * s, car.y + forward * s + lateral * c
