"""Graph primitives derived from topic clusters (or raw topic chains)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import networkx as nx


def owner_key(owner: Any) -> Any:
    """Identity used to de-duplicate cluster owners (conversations, messages, ids)."""
    return getattr(owner, "id", owner)


@dataclass
class Cluster:
    """A group of topic-label variations judged to refer to the same subject."""

    label: str
    variations: list[str] = field(default_factory=list)  # Ordered, distinct
    owners: list[Any] = field(default_factory=list)  # Ordered, distinct by owner_key
    count: int = 0  # Distinct owners after the final recount

    def add_variation(self, label: str) -> None:
        """Record a label variation if not already present."""
        if label not in self.variations:
            self.variations.append(label)

    def add_owner(self, owner: Any) -> None:
        """Record an owner if not already present."""
        key = owner_key(owner)
        if all(owner_key(o) != key for o in self.owners):
            self.owners.append(owner)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "label": self.label,
            "variations": list(self.variations),
            "owners": [owner_key(o) for o in self.owners],
            "count": self.count,
        }


@dataclass(frozen=True)
class Node:
    """A graph node; the simulator publishes new Node values every tick."""

    id: str
    label: str
    radius: float
    weight: int  # Message count (chain) or distinct conversations (map)
    color: str
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    payload: Any = None  # Topic (chain) or list of conversations (map)

    def to_dict(self) -> dict:
        """Convert to dictionary for rendering."""
        return {
            "id": self.id,
            "label": self.label,
            "radius": self.radius,
            "weight": self.weight,
            "color": self.color,
            "x": self.x,
            "y": self.y,
            "vx": self.vx,
            "vy": self.vy,
            "members": _payload_to_dict(self.payload),
        }


def _payload_to_dict(payload: Any) -> Any:
    if payload is None:
        return None
    if isinstance(payload, (list, tuple)):
        return [owner_key(p) for p in payload]
    if hasattr(payload, "to_dict"):
        return payload.to_dict()
    return payload


@dataclass(frozen=True)
class Edge:
    """A weighted link between two nodes."""

    source_id: str
    target_id: str
    strength: float = 1.0  # Unitless; scales spring stiffness and stroke width

    def to_dict(self) -> dict:
        """Convert to dictionary for rendering."""
        return {
            "source_id": self.source_id,
            "target_id": self.target_id,
            "strength": self.strength,
        }


@dataclass
class TopicGraph:
    """Nodes and edges of one visualization."""

    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)

    def node(self, node_id: str) -> Node | None:
        """Look up a node by id."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def to_dict(self) -> dict:
        """Convert to dictionary for rendering."""
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }

    def to_networkx(self) -> "nx.Graph":
        """Build an undirected networkx graph (edges to missing nodes are dropped)."""
        import networkx as nx

        graph = nx.Graph()
        for node in self.nodes:
            graph.add_node(node.id, label=node.label, weight=node.weight)
        for edge in self.edges:
            if edge.source_id in graph.nodes and edge.target_id in graph.nodes:
                graph.add_edge(edge.source_id, edge.target_id, strength=edge.strength)
        return graph
