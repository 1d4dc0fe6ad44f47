#!/usr/bin/env python3
"""
World tests: seeded initialisation, copies, pedestrian motion,
collision geometry and terminal conditions.
"""

from __future__ import annotations

import math
import unittest
from dataclasses import replace

from sim.entities import Car, Crosswalk, Obstacle, Pedestrian
from sim.hazard import get_acceleration
from sim.policy import SimulationPolicy
from sim.world import GameOverReason, World


def _state(world: World) -> tuple:
    return (
        world.get_my_car().as_dict(),
        [ped.as_dict() for ped in world.get_pedestrians()],
        world.get_obstacles(),
        world.get_crosswalks(),
        world.get_time_since_start(),
    )


class WorldInitTests(unittest.TestCase):
    def test_init_twice_yields_identical_state(self) -> None:
        world = World(seed=1991)
        world.init()
        first = _state(world)
        world.init()
        self.assertEqual(first, _state(world))

    def test_init_after_running_rewinds_everything(self) -> None:
        world = World(seed=42)
        world.init()
        first = _state(world)
        for _ in range(50):
            world.update_pedestrians()
            world.make_step(100.0, 0.3)
        self.assertNotEqual(first, _state(world))
        world.init()
        self.assertEqual(first, _state(world))
        self.assertEqual(world.get_time_since_start(), 0.0)

    def test_same_seed_same_layout(self) -> None:
        a, b = World(seed=7), World(seed=7)
        a.init()
        b.init()
        self.assertEqual(_state(a), _state(b))

    def test_constructed_world_is_empty(self) -> None:
        world = World()
        self.assertEqual(world.get_pedestrians(), [])
        self.assertEqual(world.get_obstacles(), [])
        self.assertEqual(world.get_crosswalks(), [])
        self.assertEqual(world.get_time_since_start(), 0.0)

    def test_layout_respects_policy(self) -> None:
        policy = SimulationPolicy()
        world = World(policy=policy)
        world.init()
        crosswalks = world.get_crosswalks()
        self.assertEqual(len(crosswalks), policy.crosswalk_count)
        self.assertEqual(
            len(world.get_pedestrians()),
            policy.crosswalk_count * policy.pedestrians_per_crosswalk,
        )
        self.assertLessEqual(len(world.get_obstacles()), policy.obstacle_count)
        for obs in world.get_obstacles():
            self.assertGreaterEqual(obs.x, policy.spawn_min_x)
            self.assertGreaterEqual(obs.y - obs.r, 0.0)
            self.assertLessEqual(obs.y + obs.r, policy.road_width)
            for cw in crosswalks:
                self.assertFalse(cw.lx - obs.r <= obs.x <= cw.rx + obs.r)
        car = world.get_my_car()
        self.assertEqual((car.x, car.y, car.v), (0.0, policy.lane_center_y, 0.0))
        self.assertFalse(world.check_collisions())

    def test_crosswalk_extent_validated(self) -> None:
        with self.assertRaises(ValueError):
            Crosswalk(lx=10.0, rx=10.0)


class WorldCopyTests(unittest.TestCase):
    def test_getters_return_copies(self) -> None:
        world = World()
        world.init()
        car = world.get_my_car()
        car.x = 999.0
        peds = world.get_pedestrians()
        peds[0].y = -50.0
        peds.clear()
        self.assertEqual(world.get_my_car().x, 0.0)
        self.assertNotEqual(world.get_pedestrians()[0].y, -50.0)

    def test_mutating_copy_leaves_canonical_outcomes(self) -> None:
        world = World()
        world.init()
        world.place(car=Car(x=0.0, y=55.0, v=30.0))
        collided = world.check_collisions()
        accel = get_acceleration(world.get_my_car(), world)

        clone = world.copy()
        clone.place(obstacles=[Obstacle(x=20.0, y=55.0, r=30.0)])
        for _ in range(20):
            clone.update_pedestrians()
            clone.make_step(-100.0, 100.0)

        self.assertTrue(clone.check_collisions())
        self.assertEqual(world.check_collisions(), collided)
        self.assertEqual(get_acceleration(world.get_my_car(), world), accel)
        self.assertEqual(world.get_time_since_start(), 0.0)


class PedestrianMotionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.world = World(policy=replace(SimulationPolicy(), pedestrian_heading_jitter=0.0))

    def test_walks_along_heading(self) -> None:
        self.world.place(pedestrians=[Pedestrian(x=100.0, y=50.0, yaw=math.pi / 2)])
        self.world.update_pedestrians()
        ped = self.world.get_pedestrians()[0]
        self.assertAlmostEqual(ped.x, 100.0)
        self.assertAlmostEqual(ped.y, 50.15)

    def test_turns_round_at_road_edge(self) -> None:
        width = self.world.policy.road_width
        self.world.place(
            pedestrians=[
                Pedestrian(x=100.0, y=width - 0.01, yaw=math.pi / 2),
                Pedestrian(x=200.0, y=0.01, yaw=-math.pi / 2),
            ]
        )
        self.world.update_pedestrians()
        bottom, top = self.world.get_pedestrians()
        self.assertEqual(bottom.y, width)
        self.assertAlmostEqual(bottom.yaw, -math.pi / 2)
        self.assertEqual(top.y, 0.0)
        self.assertAlmostEqual(top.yaw, math.pi / 2)

    def test_drifting_off_home_crosswalk_squares_up(self) -> None:
        home = Crosswalk(lx=100.0, rx=140.0)
        self.world.place(
            pedestrians=[Pedestrian(x=139.99, y=50.0, yaw=0.3, home=home)]
        )
        self.world.update_pedestrians()
        ped = self.world.get_pedestrians()[0]
        self.assertEqual(ped.x, 140.0)
        self.assertAlmostEqual(ped.yaw, math.pi / 2)


class PedestrianCrosswalkTests(unittest.TestCase):
    def test_spawned_walkers_stay_on_their_crosswalk(self) -> None:
        world = World()
        world.init()
        fear = world.policy.pedestrian_fear_radius
        crosswalks = world.get_crosswalks()
        for _ in range(12000):
            world.update_pedestrians()
            world.make_step(0.0, 0.0)
        for ped in world.get_pedestrians():
            self.assertIn(ped.home, crosswalks)
            self.assertTrue(ped.home.lx - fear <= ped.x <= ped.home.rx + fear, ped)
            self.assertTrue(0.0 <= ped.y <= world.policy.road_width, ped)

    def test_spawned_walkers_start_on_their_home(self) -> None:
        world = World(seed=3)
        world.init()
        for ped in world.get_pedestrians():
            self.assertTrue(ped.home.lx <= ped.x <= ped.home.rx)


class CollisionTests(unittest.TestCase):
    def _hit(self, car, obstacles=(), pedestrians=()) -> bool:
        world = World()
        world.place(car=car, obstacles=list(obstacles), pedestrians=list(pedestrians))
        return world.check_collisions()

    def test_obstacle_overlap(self) -> None:
        car = Car(x=0.0, y=55.0)
        self.assertTrue(self._hit(car, obstacles=[Obstacle(x=20.0, y=55.0, r=5.0)]))
        self.assertTrue(self._hit(car, obstacles=[Obstacle(x=45.0, y=55.0, r=6.0)]))
        self.assertFalse(self._hit(car, obstacles=[Obstacle(x=60.0, y=55.0, r=5.0)]))
        self.assertFalse(self._hit(car, obstacles=[Obstacle(x=20.0, y=80.0, r=5.0)]))

    def test_pedestrian_body_radius(self) -> None:
        car = Car(x=0.0, y=55.0)
        self.assertTrue(self._hit(car, pedestrians=[Pedestrian(x=44.0, y=55.0, yaw=0.0)]))
        self.assertFalse(self._hit(car, pedestrians=[Pedestrian(x=46.0, y=55.0, yaw=0.0)]))

    def test_heading_rotates_the_body(self) -> None:
        car = Car(x=0.0, y=0.0, psi=math.pi / 2)
        self.assertTrue(self._hit(car, obstacles=[Obstacle(x=0.0, y=30.0, r=1.0)]))
        self.assertFalse(self._hit(car, obstacles=[Obstacle(x=30.0, y=0.0, r=1.0)]))

    def test_verdict_invariant_under_translation(self) -> None:
        scenes = [
            (Car(x=0.0, y=55.0, psi=0.1), [Obstacle(x=45.0, y=58.0, r=6.0)],
             [Pedestrian(x=80.0, y=55.0, yaw=0.0)]),
            (Car(x=10.0, y=40.0, psi=-0.3), [Obstacle(x=100.0, y=40.0, r=5.0)],
             [Pedestrian(x=30.0, y=48.0, yaw=1.0)]),
            (Car(x=0.0, y=55.0), [], [Pedestrian(x=60.0, y=55.0, yaw=0.0)]),
        ]
        for car, obstacles, peds in scenes:
            base = self._hit(car, obstacles, peds)
            for dx, dy in ((123.5, -40.0), (-1000.0, 7.25), (0.0, 300.0)):
                moved_car = replace(car, x=car.x + dx, y=car.y + dy)
                moved_obs = [replace(o, x=o.x + dx, y=o.y + dy) for o in obstacles]
                moved_peds = [replace(p, x=p.x + dx, y=p.y + dy) for p in peds]
                self.assertEqual(base, self._hit(moved_car, moved_obs, moved_peds))


class GameOverTests(unittest.TestCase):
    def test_running_world_is_not_over(self) -> None:
        world = World()
        world.init()
        self.assertFalse(world.game_over())
        self.assertIsNone(world.game_over_reason())

    def test_finish_line(self) -> None:
        world = World()
        world.place(car=Car(x=world.policy.road_length - Car.LENGTH, y=55.0))
        self.assertTrue(world.game_over())
        self.assertIs(world.game_over_reason(), GameOverReason.FINISHED)

    def test_leaving_the_road(self) -> None:
        world = World()
        world.place(car=Car(x=100.0, y=-Car.WIDTH))
        self.assertIs(world.game_over_reason(), GameOverReason.LEFT_ROAD)
        world.place(car=Car(x=100.0, y=world.policy.road_width + Car.WIDTH))
        self.assertIs(world.game_over_reason(), GameOverReason.LEFT_ROAD)

    def test_time_limit(self) -> None:
        world = World(policy=replace(SimulationPolicy(), time_limit_s=0.05))
        for _ in range(6):
            world.make_step(0.0, 0.0)
        self.assertAlmostEqual(world.get_time_since_start(), 0.06)
        self.assertIs(world.game_over_reason(), GameOverReason.TIME_LIMIT)


if __name__ == "__main__":
    unittest.main()
