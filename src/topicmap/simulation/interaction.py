"""Pointer, zoom and selection handling for a running layout."""

import logging
from dataclasses import dataclass

from topicmap.graph.config import ZoomConfig
from topicmap.models import Node
from topicmap.simulation.physics import ForceSimulation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScreenTransform:
    """Screen placement of the drawing surface (a, d, e, f of a screen CTM)."""

    scale_x: float = 1.0
    scale_y: float = 1.0
    origin_x: float = 0.0
    origin_y: float = 0.0


def screen_to_sim_space(
    transform: ScreenTransform,
    scale: float,
    point: tuple[float, float],
) -> tuple[float, float]:
    """
    Map a pointer position to simulation coordinates.

    Args:
        transform: Current screen transform of the drawing surface
        scale: Active zoom
        point: Pointer (x, y) in screen pixels

    Returns:
        (x, y) in simulation space
    """
    px, py = point
    return (
        (px - transform.origin_x) / transform.scale_x / scale,
        (py - transform.origin_y) / transform.scale_y / scale,
    )


class ZoomControl:
    """Stepwise zoom clamped to a closed interval."""

    def __init__(self, config: ZoomConfig) -> None:
        self.config = config
        self.scale = config.initial

    def _clamp(self, value: float) -> float:
        # Round away float drift from repeated 0.1 steps
        return round(min(self.config.maximum, max(self.config.minimum, value)), 6)

    def zoom_in(self) -> float:
        self.scale = self._clamp(self.scale + self.config.step)
        return self.scale

    def zoom_out(self) -> float:
        self.scale = self._clamp(self.scale - self.config.step)
        return self.scale


class InteractionController:
    """
    Routes pointer events into the simulation.

    Drag: pointer-down on a node marks it dragged, pointer-move places it
    directly, pointer-up or leave releases it. Selection only changes on
    click, never on drag movement.
    """

    def __init__(self, simulation: ForceSimulation, zoom: ZoomControl) -> None:
        self.simulation = simulation
        self.zoom = zoom
        self.selected_id: str | None = None
        self.simulation.set_scale(zoom.scale)

    @property
    def dragged_id(self) -> str | None:
        return self.simulation.dragged_id

    def pointer_down(self, node_id: str) -> bool:
        """Start dragging a node."""
        return self.simulation.mark_dragged(node_id)

    def pointer_move(self, point: tuple[float, float], transform: ScreenTransform) -> bool:
        """Move the dragged node under the pointer; ignored when not dragging."""
        if self.dragged_id is None:
            return False
        x, y = screen_to_sim_space(transform, self.zoom.scale, point)
        return self.simulation.move_dragged(x, y)

    def pointer_up(self) -> None:
        self.simulation.release()

    def pointer_leave(self) -> None:
        self.simulation.release()

    def click(self, node_id: str | None) -> Node | None:
        """Select a node, or clear the selection for empty canvas / unknown ids."""
        node = self.simulation.state.node(node_id) if node_id is not None else None
        self.selected_id = node.id if node is not None else None
        return node

    def clear_selection(self) -> None:
        self.selected_id = None

    @property
    def selected_node(self) -> Node | None:
        if self.selected_id is None:
            return None
        return self.simulation.state.node(self.selected_id)

    def zoom_in(self) -> float:
        self.simulation.set_scale(self.zoom.zoom_in())
        return self.zoom.scale

    def zoom_out(self) -> float:
        self.simulation.set_scale(self.zoom.zoom_out())
        return self.zoom.scale
