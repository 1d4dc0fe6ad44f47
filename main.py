#!/usr/bin/env python3

import logging
import os
from dataclasses import replace

import config
# Logging
from logging_setup import setup_logging
# Simulation
from sim.policy import SimulationPolicy
from sim.sim_bridge import SimBridge

log = logging.getLogger("main")


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        log.warning("ignoring %s=%r (not an integer)", name, raw)
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        log.warning("ignoring %s=%r (not a number)", name, raw)
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def build_policy() -> SimulationPolicy:
    """Default policy with environment overrides applied."""
    return replace(
        SimulationPolicy(),
        seed=_env_int(config.ENV_SEED, config.DEFAULT_SEED),
        tick_s=config.DEFAULT_TICK_S,
        time_limit_s=_env_float(config.ENV_TIME_LIMIT_S, config.DEFAULT_TIME_LIMIT_S),
    )


def main():
    level_name = os.environ.get(config.ENV_LOG_LEVEL, config.DEFAULT_LOG_LEVEL)
    setup_logging(getattr(logging, level_name.upper(), logging.INFO))
    log.info("Started solution")

    bridge = SimBridge(policy=build_policy())
    bridge.start()

    try:
        if _env_bool(config.ENV_HEADLESS, config.DEFAULT_HEADLESS):
            while not bridge.join(timeout=1.0):
                pass
        else:
            from ui import run_driving_view

            run_driving_view(
                bridge,
                width=config.WINDOW_WIDTH,
                height=config.WINDOW_HEIGHT,
                fps=config.TARGET_FPS,
            )
    except KeyboardInterrupt:
        log.info("Shutting down...")
    finally:
        bridge.stop()


if __name__ == "__main__":
    main()
