#!/usr/bin/env python3
"""Road, crosswalk, obstacle and pedestrian drawing (mixin)."""

from __future__ import annotations

import pygame

from sim.world import World

from .helpers import draw_alpha_circle


class RoadRenderer:
    """Mixin that draws the static road and everything standing on it."""

    def draw_road(self, surface: pygame.Surface, world: World) -> None:
        width = world.policy.road_width
        x0, x1 = self.camera.visible_x_range()
        left, top = self.camera.world_to_screen(x0, 0.0)
        right, bottom = self.camera.world_to_screen(x1, width)
        pygame.draw.rect(
            surface, self.ROAD_COLOR, pygame.Rect(left, top, right - left, bottom - top)
        )
        pygame.draw.line(surface, self.LANE_EDGE_COLOR, (left, top), (right, top), 2)
        pygame.draw.line(surface, self.LANE_EDGE_COLOR, (left, bottom), (right, bottom), 2)

        # Dashed centre line, phase-locked to road x so it scrolls.
        period = self.LANE_DASH_LEN + self.LANE_DASH_GAP
        x = x0 - (x0 % period)
        while x < x1:
            a = self.camera.world_to_screen(x, world.policy.lane_center_y)
            b = self.camera.world_to_screen(
                x + self.LANE_DASH_LEN, world.policy.lane_center_y
            )
            pygame.draw.line(surface, self.LANE_DASH_COLOR, a, b, 2)
            x += period

        # Finish line.
        fx, fy0 = self.camera.world_to_screen(world.policy.road_length, 0.0)
        _, fy1 = self.camera.world_to_screen(world.policy.road_length, width)
        pygame.draw.line(surface, self.FINISH_COLOR, (fx, fy0), (fx, fy1), 3)

    def draw_crosswalks(self, surface: pygame.Surface, world: World) -> None:
        width = world.policy.road_width
        stripe = self.CROSSWALK_STRIPE
        for cw in world.get_crosswalks():
            y = 0.0
            while y < width:
                left, top = self.camera.world_to_screen(cw.lx, y)
                right, bottom = self.camera.world_to_screen(
                    cw.rx, min(width, y + stripe)
                )
                pygame.draw.rect(
                    surface,
                    self.CROSSWALK_COLOR,
                    pygame.Rect(left, top, right - left, bottom - top),
                )
                y += 2 * stripe

    def draw_obstacles(self, surface: pygame.Surface, world: World) -> None:
        for obs in world.get_obstacles():
            sx, sy = self.camera.world_to_screen(obs.x, obs.y)
            pygame.draw.circle(
                surface,
                self.OBSTACLE_COLOR,
                (int(sx), int(sy)),
                max(1, int(obs.r * self.camera.zoom)),
            )

    def draw_pedestrians(self, surface: pygame.Surface, world: World) -> None:
        zoom = self.camera.zoom
        fear = world.policy.pedestrian_fear_radius
        body = world.policy.pedestrian_radius
        for ped in world.get_pedestrians():
            sx, sy = self.camera.world_to_screen(ped.x, ped.y)
            centre = (int(sx), int(sy))
            draw_alpha_circle(
                surface, self.FEAR_RADIUS_COLOR, centre, int((body + fear) * zoom)
            )
            pygame.draw.circle(surface, self.PEDESTRIAN_COLOR, centre, max(1, int(body * zoom)))
