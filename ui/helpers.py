"""
ui/helpers.py
=============
Pure utility functions shared across UI modules:
rotated-rectangle geometry, alpha-surface drawing and text rendering.
"""

from __future__ import annotations

import math
from typing import List, Tuple

import pygame


def rect_corners(
    x: float, y: float, length: float, width: float, heading: float
) -> List[Tuple[float, float]]:
    """Corners of a rectangle anchored at its rear centre *(x, y)*."""
    c, s = math.cos(heading), math.sin(heading)
    half = width / 2.0
    local = ((0.0, -half), (length, -half), (length, half), (0.0, half))
    return [(x + lx * c - ly * s, y + lx * s + ly * c) for lx, ly in local]


# ── Alpha drawing helpers ────────────────────────────────────────────────────

def draw_alpha_circle(
    target: pygame.Surface,
    color: Tuple[int, ...],
    centre: Tuple[int, int],
    radius: int,
) -> None:
    """Draw a semi-transparent circle."""
    if radius < 1:
        return
    size = radius * 2
    tmp = pygame.Surface((size, size), pygame.SRCALPHA)
    pygame.draw.circle(tmp, color, (radius, radius), radius)
    target.blit(tmp, (centre[0] - radius, centre[1] - radius))


# ── Text helper ──────────────────────────────────────────────────────────────

def render_text(
    surface: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    pos: Tuple[int, int],
    color: Tuple[int, ...] = (230, 230, 235),
    anchor: str = "topleft",
) -> pygame.Rect:
    """Render text with flexible *anchor* ('topleft', 'center', 'midright' …)."""
    img = font.render(text, True, color)
    rect = img.get_rect(**{anchor: pos})
    surface.blit(img, rect)
    return rect
