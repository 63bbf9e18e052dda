"""Graph construction for topic visualizations.

Provides:
- Per-view profiles (radius law, edge strategy, force constants, zoom bounds)
- Chain graph (one conversation) and similarity graph (many conversations)
"""

from topicmap.graph.builder import (
    build_chain_graph,
    build_graph,
    build_similarity_graph,
    node_radius,
    topic_weights,
)
from topicmap.graph.config import (
    EdgeStrategy,
    ForceConfig,
    RadiusLaw,
    ViewProfile,
    ZoomConfig,
    chain_profile,
    map_profile,
)

__all__ = [
    # Config
    "EdgeStrategy",
    "ForceConfig",
    "RadiusLaw",
    "ViewProfile",
    "ZoomConfig",
    "chain_profile",
    "map_profile",
    # Builders
    "build_chain_graph",
    "build_graph",
    "build_similarity_graph",
    "node_radius",
    "topic_weights",
]
