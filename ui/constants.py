#!/usr/bin/env python3
"""Visual constants shared across all renderers."""

from __future__ import annotations

from .types import ColorRGB, ColorRGBA


class ViewConstants:
    """Mixin providing every visual / layout constant."""

    BG_COLOR: ColorRGB = (24, 70, 32)
    ROAD_COLOR: ColorRGB = (30, 30, 30)
    LANE_DASH_COLOR: ColorRGB = (120, 120, 120)
    LANE_EDGE_COLOR: ColorRGB = (200, 200, 200)
    CROSSWALK_COLOR: ColorRGB = (235, 235, 235)
    OBSTACLE_COLOR: ColorRGB = (150, 95, 60)
    PEDESTRIAN_COLOR: ColorRGB = (255, 200, 60)
    FEAR_RADIUS_COLOR: ColorRGBA = (255, 200, 60, 50)
    CAR_COLOR: ColorRGB = (86, 168, 255)
    CAR_WINDSHIELD_COLOR: ColorRGB = (20, 40, 70)
    HUD_BG_COLOR: ColorRGB = (22, 22, 22)
    HUD_BORDER_COLOR: ColorRGB = (42, 42, 42)
    HUD_TEXT_COLOR: ColorRGB = (230, 230, 235)
    WARNING_COLOR: ColorRGB = (255, 60, 60)
    FINISH_COLOR: ColorRGB = (0, 255, 127)

    LANE_DASH_LEN = 30.0
    LANE_DASH_GAP = 20.0
    CROSSWALK_STRIPE = 8.0
    CAMERA_LEAD = 150.0
    """Road units the camera looks ahead of the car."""
