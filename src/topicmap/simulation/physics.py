"""Force-directed layout: repulsion, springs, center gravity and friction.

Each tick is a pure function of the previous snapshot:

    state' = step(state, edges, forces, center)

so anything holding the old state keeps seeing a complete, consistent layout.
"""

import logging
from dataclasses import dataclass, replace

import numpy as np

from topicmap.graph.config import ForceConfig
from topicmap.models import Edge, Node, TopicGraph

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationState:
    """Snapshot of a running layout."""

    nodes: tuple[Node, ...] = ()
    dragged_id: str | None = None  # Excluded from forces while set
    scale: float = 1.0  # Active view zoom

    def node(self, node_id: str) -> Node | None:
        """Look up a node by id."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def with_dragged(self, node_id: str | None) -> "SimulationState":
        """Mark (or clear) the dragged node."""
        return replace(self, dragged_id=node_id)

    def with_node_at(self, node_id: str, x: float, y: float) -> "SimulationState":
        """Place a node directly and stop it."""
        nodes = tuple(
            replace(n, x=x, y=y, vx=0.0, vy=0.0) if n.id == node_id else n
            for n in self.nodes
        )
        return replace(self, nodes=nodes)

    def with_scale(self, scale: float) -> "SimulationState":
        return replace(self, scale=scale)


def _repulsion(
    positions: np.ndarray,
    radii: np.ndarray,
    forces: ForceConfig,
) -> np.ndarray:
    """Summed pairwise repulsion acting on every node."""
    delta = positions[:, None, :] - positions[None, :, :]  # a - b
    dist_sq = (delta ** 2).sum(axis=-1)
    dist = np.sqrt(dist_sq)
    dist = np.where(dist == 0, 1.0, dist)

    min_dist = radii[:, None] + radii[None, :] + forces.overlap_padding
    magnitude = np.where(
        dist < min_dist,
        (min_dist - dist) * forces.overlap_stiffness,
        forces.repulsion_strength / (dist_sq + 1),
    )
    magnitude = np.minimum(magnitude, forces.max_force)

    in_range = dist < forces.cutoff
    np.fill_diagonal(in_range, False)
    magnitude = np.where(in_range, magnitude, 0.0)

    return (delta / dist[..., None] * magnitude[..., None]).sum(axis=1)


def step(
    state: SimulationState,
    edges: tuple[Edge, ...] | list[Edge],
    forces: ForceConfig,
    center: tuple[float, float],
) -> SimulationState:
    """
    Advance the layout by one tick.

    Algorithm:
    1. Repulsion between every pair closer than the cutoff: a linear push
       while circles overlap, inverse-square beyond, clamped per pair
    2. Springs pull each edge toward (sum of radii + spring length)
    3. Gravity toward the center, integrate velocity, apply friction

    The dragged node receives no force and does not move, but still repels
    others. Edges to unknown nodes are skipped.

    Args:
        state: Previous snapshot (not modified)
        edges: Graph edges
        forces: Force constants
        center: Gravity target in simulation space

    Returns:
        New snapshot
    """
    nodes = state.nodes
    if not nodes:
        return state

    positions = np.array([[n.x, n.y] for n in nodes], dtype=float)
    velocities = np.array([[n.vx, n.vy] for n in nodes], dtype=float)
    radii = np.array([n.radius for n in nodes], dtype=float)
    free = np.array([n.id != state.dragged_id for n in nodes])

    # 1. Repulsion
    velocities[free] += _repulsion(positions, radii, forces)[free]

    # 2. Springs
    index = {n.id: i for i, n in enumerate(nodes)}
    for edge in edges:
        s = index.get(edge.source_id)
        t = index.get(edge.target_id)
        if s is None or t is None:
            continue

        delta = positions[t] - positions[s]
        dist = float(np.hypot(delta[0], delta[1])) or 1.0
        rest = radii[s] + radii[t] + forces.spring_length
        pull = delta * (dist - rest) * forces.spring_stiffness * edge.strength

        if free[s]:
            velocities[s] += pull
        if free[t]:
            velocities[t] -= pull

    # 3. Gravity and integration
    velocities[free] += (np.asarray(center, dtype=float) - positions[free]) * forces.gravity
    positions[free] += velocities[free]
    velocities[free] *= forces.friction

    next_nodes = tuple(
        replace(
            node,
            x=float(positions[i, 0]),
            y=float(positions[i, 1]),
            vx=float(velocities[i, 0]),
            vy=float(velocities[i, 1]),
        )
        if free[i]
        else node
        for i, node in enumerate(nodes)
    )
    return replace(state, nodes=next_nodes)


class ForceSimulation:
    """
    Owns the live layout of one visualization.

    The tick and the pointer handlers both replace `state` wholesale; nothing
    mutates a published snapshot.
    """

    def __init__(
        self,
        graph: TopicGraph,
        forces: ForceConfig,
        center: tuple[float, float],
        scale: float = 1.0,
    ) -> None:
        self.edges = tuple(graph.edges)
        self.forces = forces
        self.center = center
        self.state = SimulationState(nodes=tuple(graph.nodes), scale=scale)
        self.tick_count = 0

        known = {n.id for n in graph.nodes}
        dangling = [
            e for e in self.edges
            if e.source_id not in known or e.target_id not in known
        ]
        if dangling:
            logger.debug(f"{len(dangling)} edges reference missing nodes and will be ignored")

    @property
    def nodes(self) -> tuple[Node, ...]:
        return self.state.nodes

    @property
    def dragged_id(self) -> str | None:
        return self.state.dragged_id

    def tick(self) -> SimulationState:
        """Compute and publish the next snapshot."""
        self.state = step(self.state, self.edges, self.forces, self.center)
        self.tick_count += 1
        return self.state

    def run(self, ticks: int) -> SimulationState:
        """Advance several ticks synchronously (headless layout)."""
        for _ in range(ticks):
            self.tick()
        return self.state

    def mark_dragged(self, node_id: str) -> bool:
        """Make a node the exclusive dragged node. Unknown ids are ignored."""
        if self.state.node(node_id) is None:
            return False
        self.state = self.state.with_dragged(node_id)
        return True

    def move_dragged(self, x: float, y: float) -> bool:
        """Place the dragged node directly; no-op when nothing is dragged."""
        if self.state.dragged_id is None:
            return False
        self.state = self.state.with_node_at(self.state.dragged_id, x, y)
        return True

    def release(self) -> None:
        """Return the dragged node to normal physics."""
        if self.state.dragged_id is not None:
            self.state = self.state.with_dragged(None)

    def set_scale(self, scale: float) -> None:
        self.state = self.state.with_scale(scale)
