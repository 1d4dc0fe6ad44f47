"""
sim: Simulation core
====================

Modules
-------
entities
    :class:`Car`, :class:`Pedestrian`, :class:`Obstacle`, :class:`Crosswalk`.
policy
    :class:`SimulationPolicy` tunable constants.
physics
    Kinematic stepper and geometry helpers.
world
    :class:`World` entity owner and simulated clock.
hazard
    Rule-based acceleration / steering controller.
sim_bridge
    :class:`SimBridge` background-thread loop and snapshot hand-off.
"""

