#!/usr/bin/env python3
"""
Simulation-loop tests: manual command latch, collision recovery,
termination and snapshot isolation.
"""

from __future__ import annotations

import time
import unittest
from dataclasses import replace

from sim.entities import Car, Obstacle
from sim.policy import SimulationPolicy
from sim.sim_bridge import Command, PendingCommand, SimBridge, SimState
from sim.world import GameOverReason, World


def _bridge_with(car: Car, obstacles=(), policy=None) -> SimBridge:
    world = World(policy=policy)
    world.place(car=car, obstacles=list(obstacles))
    return SimBridge(world=world, realtime=False)


class PendingCommandTests(unittest.TestCase):
    def test_consume_resets_latch(self) -> None:
        pending = PendingCommand()
        self.assertIsNone(pending.consume())
        pending.latch(Command.FORWARD)
        controls = pending.consume()
        self.assertEqual((controls.acceleration, controls.steering), (100.0, 0.0))
        self.assertIsNone(pending.consume())

    def test_latches_combine_per_axis(self) -> None:
        pending = PendingCommand()
        pending.latch(Command.LEFT)
        pending.latch(Command.BRAKE)
        self.assertEqual(tuple(pending.consume()), (-100.0, -0.8))
        pending.latch(Command.RIGHT)
        self.assertEqual(tuple(pending.consume()), (0.0, 0.8))


class SimBridgeTickTests(unittest.TestCase):
    def test_planned_controls_drive_the_car(self) -> None:
        bridge = _bridge_with(Car(x=0.0, y=55.0))
        self.assertIs(bridge.tick(), SimState.RUNNING)
        self.assertAlmostEqual(bridge.snapshot().get_my_car().v, 1.0)

    def test_manual_override_applies_for_one_tick(self) -> None:
        bridge = _bridge_with(Car(x=0.0, y=55.0, v=5.0))
        bridge.press(Command.BRAKE)
        bridge.tick()
        self.assertAlmostEqual(bridge.snapshot().get_my_car().v, 4.0)
        bridge.tick()
        self.assertAlmostEqual(bridge.snapshot().get_my_car().v, 5.0)

    def test_collision_resets_world_and_keeps_running(self) -> None:
        bridge = _bridge_with(
            Car(x=0.0, y=55.0, v=50.0),
            obstacles=[Obstacle(x=45.0, y=55.0, r=10.0)],
        )
        with self.assertLogs("sim_bridge", level="ERROR") as logs:
            state = bridge.tick()
        self.assertIn("collision in", logs.output[0])
        self.assertIs(state, SimState.COLLISION_RECOVERING)
        self.assertIs(bridge.state, SimState.COLLISION_RECOVERING)
        self.assertEqual(bridge.collisions, 1)
        snap = bridge.snapshot()
        self.assertEqual(snap.get_time_since_start(), 0.0)
        self.assertEqual(snap.get_my_car().x, snap.policy.car_start_x)
        self.assertTrue(snap.get_crosswalks())
        self.assertEqual(snap.collisions, 1)
        self.assertIs(bridge.tick(), SimState.RUNNING)
        self.assertEqual(bridge.collisions, 1)

    def test_frame_reads_world_and_status_together(self) -> None:
        bridge = _bridge_with(
            Car(x=0.0, y=55.0, v=50.0),
            obstacles=[Obstacle(x=45.0, y=55.0, r=10.0)],
        )
        with self.assertLogs("sim_bridge", level="ERROR"):
            bridge.tick()
        world, state, reason = bridge.frame()
        self.assertIs(state, SimState.COLLISION_RECOVERING)
        self.assertIsNone(reason)
        self.assertEqual(world.collisions, 1)
        self.assertEqual(world.get_time_since_start(), 0.0)

    def test_finish_terminates_and_freezes(self) -> None:
        start = SimulationPolicy().road_length - Car.LENGTH - 0.05
        bridge = _bridge_with(Car(x=start, y=55.0, v=20.0))
        with self.assertLogs("sim_bridge", level="INFO"):
            self.assertIs(bridge.tick(), SimState.TERMINATED)
        self.assertTrue(bridge.is_finished())
        self.assertIs(bridge.game_over_reason, GameOverReason.FINISHED)
        elapsed = bridge.snapshot().get_time_since_start()
        self.assertIs(bridge.tick(), SimState.TERMINATED)
        self.assertEqual(bridge.snapshot().get_time_since_start(), elapsed)

    def test_snapshot_mutation_does_not_leak(self) -> None:
        bridge = _bridge_with(Car(x=0.0, y=55.0, v=10.0))
        snap = bridge.snapshot()
        snap.place(obstacles=[Obstacle(x=45.0, y=55.0, r=10.0)])
        snap.make_step(100.0, 100.0)
        self.assertTrue(snap.check_collisions())

        bridge.tick()
        self.assertEqual(bridge.collisions, 0)
        self.assertEqual(bridge.snapshot().get_obstacles(), [])


class SimBridgeThreadTests(unittest.TestCase):
    def test_background_loop_runs_until_time_limit(self) -> None:
        policy = replace(SimulationPolicy(), time_limit_s=0.5)
        bridge = SimBridge(policy=policy, realtime=False)
        bridge.start()
        self.assertTrue(bridge.join(timeout=10.0))
        self.assertIs(bridge.state, SimState.TERMINATED)
        self.assertIs(bridge.game_over_reason, GameOverReason.TIME_LIMIT)
        self.assertGreaterEqual(bridge.snapshot().get_time_since_start(), 0.49)

    def test_presentation_calls_do_not_wait_out_the_tick(self) -> None:
        policy = replace(SimulationPolicy(), tick_s=0.05)
        world = World(policy=policy)
        world.place(car=Car(x=0.0, y=55.0, v=10.0))
        bridge = SimBridge(world=world, realtime=True)
        bridge.start()
        try:
            last_t = 0.0
            for _ in range(5):
                t0 = time.perf_counter()
                snap = bridge.snapshot()
                self.assertLess(time.perf_counter() - t0, policy.tick_s / 2)
                self.assertGreaterEqual(snap.get_time_since_start(), last_t)
                last_t = snap.get_time_since_start()
                time.sleep(0.01)

            ticks_before = bridge.snapshot().ticks
            bridge.press(Command.BRAKE)
            deadline = time.perf_counter() + 2.0
            snap = bridge.snapshot()
            while snap.ticks < ticks_before + 2 and time.perf_counter() < deadline:
                time.sleep(0.002)
                snap = bridge.snapshot()
            self.assertGreaterEqual(snap.ticks, ticks_before + 2)
            # Full throttle every tick except the single braking one.
            self.assertAlmostEqual(snap.get_my_car().v, 5.0 * snap.ticks)
        finally:
            bridge.stop()

    def test_tick_error_terminates_loop(self) -> None:
        class BrokenWorld(World):
            def make_step(self, acceleration: float, steering: float) -> None:
                raise RuntimeError("boom")

        world = BrokenWorld()
        world.init()
        bridge = SimBridge(world=world, realtime=False)
        with self.assertLogs("sim_bridge", level="ERROR"):
            bridge.start()
            bridge.join(timeout=10.0)
        self.assertIs(bridge.state, SimState.TERMINATED)


if __name__ == "__main__":
    unittest.main()
