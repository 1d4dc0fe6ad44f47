#!/usr/bin/env python3

from .types import Camera, ColorRGB, ColorRGBA
from .constants import ViewConstants
from .draw_road import RoadRenderer
from .draw_vehicles import VehicleRenderer
from .hud import HudRenderer
from .pygame_view import DrivingView, run_driving_view

__all__ = [
    "Camera",
    "ColorRGB",
    "ColorRGBA",
    "ViewConstants",
    "RoadRenderer",
    "VehicleRenderer",
    "HudRenderer",
    "DrivingView",
    "run_driving_view",
]
