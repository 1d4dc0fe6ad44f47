#!/usr/bin/env python3
"""
Main view class: combines all UI mixins into one runnable Pygame window.

Module layout
─────────────
    ui/
    ├── types.py           – ColorRGB, ColorRGBA, Camera
    ├── constants.py       – ViewConstants mixin (all class-level constants)
    ├── helpers.py         – rectangle geometry, alpha drawing, text
    ├── draw_road.py       – RoadRenderer mixin (road, crosswalks, obstacles, pedestrians)
    ├── draw_vehicles.py   – VehicleRenderer mixin (ego car)
    ├── hud.py             – HudRenderer mixin  (HUD, legend, end banner)
    └── pygame_view.py     – DrivingView (this file – main loop)

The view never holds the simulation lock while drawing: each frame
takes one :meth:`SimBridge.frame` and renders from that copy only.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

import pygame

from sim.sim_bridge import Command, SimBridge

from .constants import ViewConstants
from .draw_road import RoadRenderer
from .draw_vehicles import VehicleRenderer
from .hud import HudRenderer
from .types import Camera

log = logging.getLogger("ui")

_KEY_COMMANDS: Dict[int, Command] = {
    pygame.K_w: Command.FORWARD,
    pygame.K_UP: Command.FORWARD,
    pygame.K_s: Command.BRAKE,
    pygame.K_DOWN: Command.BRAKE,
    pygame.K_a: Command.LEFT,
    pygame.K_LEFT: Command.LEFT,
    pygame.K_d: Command.RIGHT,
    pygame.K_RIGHT: Command.RIGHT,
}


class DrivingView(
    ViewConstants,
    RoadRenderer,
    VehicleRenderer,
    HudRenderer,
):
    """Road-corridor visualiser powered by Pygame.

    Inherits drawing logic from focused mixin modules so each file
    stays small and single-purpose.
    """

    def __init__(self, bridge: SimBridge, width: int = 1200, height: int = 400, fps: int = 60):
        self.bridge = bridge
        self.width = width
        self.height = height
        self.fps = fps

        self.screen: Optional[pygame.Surface] = None
        self.clock: Optional[pygame.time.Clock] = None
        self.font_small: Optional[pygame.font.Font] = None
        self.font_tiny: Optional[pygame.font.Font] = None
        self.font_title: Optional[pygame.font.Font] = None

        self.camera = Camera(screen_w=width, screen_h=height)
        self.show_legend = True

    @staticmethod
    def _load_font(size: int, bold: bool = False) -> pygame.font.Font:
        return pygame.font.SysFont("monospace", size, bold=bold)

    def _handle_resize(self, new_w: int, new_h: int) -> None:
        self.width = max(400, new_w)
        self.height = max(200, new_h)
        self.camera.screen_w = self.width
        self.camera.screen_h = self.height
        self.screen = pygame.display.set_mode(
            (self.width, self.height), pygame.RESIZABLE
        )

    # ------------------------------------------------------------------ #
    #  Main loop                                                           #
    # ------------------------------------------------------------------ #
    def run(self) -> None:
        pygame.init()
        pygame.display.set_caption("CROSSWALK DRIVING SIM")
        self.screen = pygame.display.set_mode(
            (self.width, self.height), pygame.RESIZABLE
        )
        self.clock = pygame.time.Clock()
        self.font_small = self._load_font(13)
        self.font_tiny = self._load_font(11)
        self.font_title = self._load_font(28, bold=True)

        running = True
        while running:
            self.clock.tick(self.fps)

            # ---- events ------------------------------------------------- #
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.VIDEORESIZE:
                    self._handle_resize(event.w, event.h)
                elif event.type == pygame.KEYDOWN:
                    command = _KEY_COMMANDS.get(event.key)
                    if command is not None:
                        self.bridge.press(command)
                    elif event.key == pygame.K_l:
                        self.show_legend = not self.show_legend
                    elif event.key in (pygame.K_EQUALS, pygame.K_PLUS):
                        self.camera.zoom = min(6.0, self.camera.zoom + 0.25)
                    elif event.key == pygame.K_MINUS:
                        self.camera.zoom = max(0.5, self.camera.zoom - 0.25)

            # ---- snapshot (the only lock-holding step) ------------------ #
            world, state, reason = self.bridge.frame()

            # ---- render ------------------------------------------------- #
            car = world.get_my_car()
            self.camera.follow(car.x, world.policy.lane_center_y, lead=self.CAMERA_LEAD)

            self.screen.fill(self.BG_COLOR)
            self.draw_road(self.screen, world)
            self.draw_crosswalks(self.screen, world)
            self.draw_obstacles(self.screen, world)
            self.draw_pedestrians(self.screen, world)
            self.draw_car(self.screen, car)

            self.draw_hud(self.screen, world, state)
            if self.show_legend:
                self._draw_legend(self.screen)
            if reason is not None:
                self._draw_end_banner(self.screen, reason)

            pygame.display.flip()

        log.info("view closed")
        pygame.quit()


# ---------------------------------------------------------------------- #
#  Convenience entry point                                                 #
# ---------------------------------------------------------------------- #
def run_driving_view(
    bridge: SimBridge, width: int = 1200, height: int = 400, fps: int = 60
) -> None:
    view = DrivingView(bridge=bridge, width=width, height=height, fps=fps)
    view.run()


if __name__ == "__main__":
    raise SystemExit(
        "pygame_view.py needs a SimBridge. Run `python main.py` "
        "or call run_driving_view(your_bridge)."
    )
