"""
sim/sim_bridge.py
=================
Background-thread simulation loop plus the snapshot hand-off to the
presentation path.

The loop thread is the only writer of the canonical
:class:`~sim.world.World`.  The UI thread never touches it directly: it
calls :meth:`SimBridge.snapshot` for a deep copy taken under the lock and
:meth:`SimBridge.press` to latch a manual command for the next tick.

Public API consumed by :mod:`ui.pygame_view`
--------------------------------------------
* ``snapshot()``      → ``World``
* ``frame()``         → ``Frame`` (world copy + state + reason, one lock hold)
* ``press(Command)``  → ``None``
* ``state``           → ``SimState``
* ``is_finished()``   → ``bool``
* ``collisions``      → ``int``
"""

from __future__ import annotations

import enum
import logging
import threading
import time
from dataclasses import dataclass
from typing import NamedTuple, Optional

from sim.hazard import Controls, plan_controls
from sim.policy import SimulationPolicy
from sim.world import GameOverReason, World

log = logging.getLogger("sim_bridge")


class SimState(enum.Enum):
    """Loop state.

    ``COLLISION_RECOVERING`` is reported for the tick whose collision
    rebuilt the world and holds until the next tick starts.
    """

    RUNNING = "running"
    COLLISION_RECOVERING = "collision_recovering"
    TERMINATED = "terminated"


class Command(enum.Enum):
    """Discrete manual inputs produced by the keyboard."""

    FORWARD = "forward"
    BRAKE = "brake"
    LEFT = "left"
    RIGHT = "right"


_MANUAL_ACCEL = 100.0
_MANUAL_STEER = 0.8


class Frame(NamedTuple):
    """Everything the presentation path draws in one render cycle."""

    world: World
    state: SimState
    reason: Optional[GameOverReason]


@dataclass
class PendingCommand:
    """Latched manual override, consumed and cleared once per tick.

    Only one latch exists: a second key press before the next tick
    overwrites the axis it touches and leaves the other one alone.
    """

    acceleration: float = 0.0
    steering: float = 0.0
    pressed: bool = False

    def latch(self, command: Command) -> None:
        if command is Command.FORWARD:
            self.acceleration = _MANUAL_ACCEL
        elif command is Command.BRAKE:
            self.acceleration = -_MANUAL_ACCEL
        elif command is Command.LEFT:
            self.steering = -_MANUAL_STEER
        elif command is Command.RIGHT:
            self.steering = _MANUAL_STEER
        self.pressed = True

    def consume(self) -> Optional[Controls]:
        """Return the latched controls (or *None*) and reset the latch."""
        controls = (
            Controls(self.acceleration, self.steering) if self.pressed else None
        )
        self.acceleration = 0.0
        self.steering = 0.0
        self.pressed = False
        return controls


class SimBridge:
    """Simulation orchestrator running in a background thread.

    The thread calls :meth:`tick` every ``policy.tick_s`` seconds of wall
    time.  Each tick holds the lock for the world mutation only; the
    sleep to the next period happens after release.

    Parameters
    ----------
    policy : SimulationPolicy or None
        Tunable constants; uses defaults when *None*.
    world : World or None
        Pre-built world (tests); a fresh one is built and initialised
        from *policy* when *None*.
    realtime : bool
        When False the loop runs ticks back to back without sleeping.
    """

    def __init__(
        self,
        policy: Optional[SimulationPolicy] = None,
        world: Optional[World] = None,
        realtime: bool = True,
    ) -> None:
        if world is None:
            world = World(policy=policy)
            world.init()
        self.policy = policy or world.policy
        self._world = world
        self._realtime = realtime
        self._lock = threading.Lock()
        self._pending = PendingCommand()
        self._state = SimState.RUNNING
        self._reason: Optional[GameOverReason] = None

        self._thread: Optional[threading.Thread] = None
        self._running = False

    # ── Lifecycle ─────────────────────────────────────────────────────────────

    def start(self) -> None:
        """Spawn the background simulation thread."""
        if self._running:
            return
        self._running = True
        self._thread = threading.Thread(
            target=self._loop, daemon=True, name="SimBridge"
        )
        self._thread.start()
        log.info("SimBridge started at %.0f Hz", 1.0 / self.policy.tick_s)

    def stop(self) -> None:
        """Ask the thread to exit after the current tick and wait for it."""
        self._running = False
        if self._thread:
            self._thread.join(timeout=2.0)
        log.info("SimBridge stopped")

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the loop to terminate; True once it has."""
        if self._thread is not None:
            self._thread.join(timeout)
        return self.is_finished()

    # ── Presentation API ─────────────────────────────────────────────────────

    def snapshot(self) -> World:
        """Deep copy of the canonical world, taken under the lock."""
        with self._lock:
            return self._world.copy()

    def frame(self) -> Frame:
        """World copy plus loop status, all read under a single lock hold."""
        with self._lock:
            return Frame(self._world.copy(), self._state, self._reason)

    def press(self, command: Command) -> None:
        """Latch a manual command for the next tick."""
        with self._lock:
            self._pending.latch(command)

    @property
    def state(self) -> SimState:
        with self._lock:
            return self._state

    @property
    def game_over_reason(self) -> Optional[GameOverReason]:
        with self._lock:
            return self._reason

    @property
    def collisions(self) -> int:
        with self._lock:
            return self._world.collisions

    def is_finished(self) -> bool:
        return self.state is SimState.TERMINATED

    # ── Background loop ───────────────────────────────────────────────────────

    def _loop(self) -> None:
        period = self.policy.tick_s
        while self._running:
            t0 = time.perf_counter()
            try:
                state = self.tick()
            except Exception:
                log.exception("SimBridge tick error")
                with self._lock:
                    self._state = SimState.TERMINATED
                break
            if state is SimState.TERMINATED:
                break
            if self._realtime:
                time.sleep(max(0.0, period - (time.perf_counter() - t0)))
        self._running = False

    # ── tick ──────────────────────────────────────────────────────────────────

    def tick(self) -> SimState:
        """Run one full simulation step under the lock and return the new state."""
        with self._lock:
            if self._state is SimState.TERMINATED:
                return self._state
            if self._state is SimState.COLLISION_RECOVERING:
                self._state = SimState.RUNNING
            world = self._world

            world.update_pedestrians()
            planned = plan_controls(world, self.policy)
            manual = self._pending.consume()
            controls = manual if manual is not None else planned
            world.make_step(controls.acceleration, controls.steering)

            if world.check_collisions():
                self._state = SimState.COLLISION_RECOVERING
                world.collisions += 1
                log.error("collision in %.2f sec.", world.get_time_since_start())
                world.init()

            reason = world.game_over_reason()
            if reason is not None:
                self._reason = reason
                self._state = SimState.TERMINATED
                elapsed = world.get_time_since_start()
                if reason is GameOverReason.FINISHED:
                    log.info("%.2f sec.", elapsed)
                else:
                    log.warning("%.2f sec. (%s)", elapsed, reason.value)
            return self._state
