#!/usr/bin/env python3
"""
config.py
=========
Application-wide configuration constants.

Values can be overridden via environment variables (see :mod:`main`).
This module is a thin, import-safe leaf; it never imports from
other project packages.
"""

# ── Simulation defaults ──────────────────────────────────────────────────────
DEFAULT_SEED: int = 1991
DEFAULT_TICK_S: float = 0.01
DEFAULT_TIME_LIMIT_S: float = 300.0
DEFAULT_HEADLESS: bool = False

# ── UI defaults ──────────────────────────────────────────────────────────────
WINDOW_WIDTH: int = 1200
WINDOW_HEIGHT: int = 400
TARGET_FPS: int = 60

# ── Logging ──────────────────────────────────────────────────────────────────
LOG_FILE: str = "drivesim.log"
WORLD_DEBUG_LOG_FILE: str = "world_debug.log"
DEFAULT_LOG_LEVEL: str = "INFO"

# ── Environment variable names ───────────────────────────────────────────────
ENV_SEED: str = "DRIVESIM_SEED"
ENV_TIME_LIMIT_S: str = "DRIVESIM_TIME_LIMIT_S"
ENV_HEADLESS: str = "DRIVESIM_HEADLESS"
ENV_LOG_LEVEL: str = "DRIVESIM_LOG_LEVEL"
