#!/usr/bin/env python3
"""HUD panel, key legend and end-of-run banner (mixin)."""

from __future__ import annotations

import math

import pygame

from sim.sim_bridge import SimState
from sim.world import GameOverReason, World

from .helpers import render_text


class HudRenderer:
    """Mixin that draws every overlay / HUD element."""

    def draw_hud(self, surface: pygame.Surface, world: World, state: SimState) -> None:
        if self.font_small is None:
            return
        car = world.get_my_car()
        rows = [
            f"TIME   {world.get_time_since_start():7.2f} s",
            f"SPEED  {car.v:7.1f}",
            f"X      {car.x:7.1f} / {world.policy.road_length:.0f}",
            f"YAW    {math.degrees(car.psi):7.1f} deg",
            f"STEER  {math.degrees(car.front_angle):7.1f} deg",
            f"HITS   {world.collisions:7d}",
            f"STATE  {state.value.upper()}",
        ]
        row_h = 16
        panel = pygame.Rect(12, 12, 230, 12 + row_h * len(rows))
        pygame.draw.rect(surface, self.HUD_BG_COLOR, panel, border_radius=6)
        pygame.draw.rect(surface, self.HUD_BORDER_COLOR, panel, width=1, border_radius=6)
        for idx, row in enumerate(rows):
            render_text(
                surface, self.font_small, row,
                (panel.x + 10, panel.y + 6 + idx * row_h), self.HUD_TEXT_COLOR,
            )

    def _draw_legend(self, surface: pygame.Surface) -> None:
        if self.font_tiny is None:
            return
        render_text(
            surface,
            self.font_tiny,
            "W/UP accelerate   S/DOWN brake   A/LEFT steer left   D/RIGHT steer right",
            (self.width // 2, self.height - 8),
            (160, 160, 160),
            anchor="midbottom",
        )

    def _draw_end_banner(self, surface: pygame.Surface, reason: GameOverReason) -> None:
        overlay = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 100))
        surface.blit(overlay, (0, 0))
        if self.font_title:
            color = self.FINISH_COLOR if reason is GameOverReason.FINISHED else self.WARNING_COLOR
            text = self.font_title.render(reason.value.replace("_", " ").upper(), True, color)
            surface.blit(text, text.get_rect(center=(self.width // 2, self.height // 2)))
