"""Live force-directed layout."""

from topicmap.simulation.interaction import (
    InteractionController,
    ScreenTransform,
    ZoomControl,
    screen_to_sim_space,
)
from topicmap.simulation.loop import LoopState, SimulationLoop
from topicmap.simulation.physics import ForceSimulation, SimulationState, step

__all__ = [
    "ForceSimulation",
    "SimulationState",
    "step",
    "LoopState",
    "SimulationLoop",
    "InteractionController",
    "ScreenTransform",
    "ZoomControl",
    "screen_to_sim_space",
]
