"""
ui/types.py
===========
Lightweight data containers used across every UI module.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

ColorRGB = Tuple[int, int, int]
ColorRGBA = Tuple[int, int, int, int]


@dataclass
class Camera:
    """Viewport mapping road coordinates to screen pixels.

    Road ``y`` already grows downward, so unlike a map view there is no
    axis flip.
    """
    screen_w: int
    screen_h: int
    world_x: float = 0.0
    world_y: float = 0.0
    zoom: float = 2.5

    def world_to_screen(self, wx: float, wy: float) -> Tuple[float, float]:
        cx = self.screen_w / 2
        cy = self.screen_h / 2
        sx = cx + (wx - self.world_x) * self.zoom
        sy = cy + (wy - self.world_y) * self.zoom
        return sx, sy

    def follow(self, x: float, y: float, lead: float = 0.0) -> None:
        """Centre the view on *(x + lead, y)*."""
        self.world_x = x + lead
        self.world_y = y

    def visible_x_range(self) -> Tuple[float, float]:
        half = self.screen_w / 2 / self.zoom
        return self.world_x - half, self.world_x + half
