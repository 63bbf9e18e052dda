"""Compute a settled topic graph layout from a conversation export.

This script:
1. Loads conversations from a JSON export of the chat client's storage
2. Builds the topic map (all recent conversations) or the topic chain of one
   conversation
3. Runs the force simulation headless for a fixed number of ticks
4. Prints graph statistics (components, degrees) and node positions, or
   writes the layout as JSON

Usage:
    uv run python scripts/compute_layout.py data/chats.json
    uv run python scripts/compute_layout.py data/chats.json --conversation 1712345678901
    uv run python scripts/compute_layout.py data/chats.json --ticks 500 --output layout.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

# Load .env file from project root
project_root = Path(__file__).parent.parent
load_dotenv(project_root / ".env")

# Add src to path
sys.path.insert(0, str(project_root / "src"))

from topicmap.config import settings
from topicmap.graph import build_chain_graph, build_similarity_graph, chain_profile, map_profile
from topicmap.models import TopicGraph
from topicmap.simulation import ForceSimulation
from topicmap.storage import ConversationStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def describe_graph(graph: TopicGraph) -> None:
    """Print connected components and the best-connected nodes."""
    import networkx as nx

    G = graph.to_networkx()
    print(f"Graph: {G.number_of_nodes()} nodes, {G.number_of_edges()} edges")

    if G.number_of_nodes() == 0:
        return

    components = list(nx.connected_components(G))
    print(f"Connected components: {len(components)}")

    labels = nx.get_node_attributes(G, "label")
    top = sorted(G.degree, key=lambda item: item[1], reverse=True)[:5]
    for node_id, degree in top:
        print(f"  {labels[node_id]!r}: degree {degree}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Compute a settled topic graph layout")
    parser.add_argument("data", help="JSON export of conversations")
    parser.add_argument("--conversation", help="Lay out the topic chain of this conversation id")
    parser.add_argument("--ticks", type=int, default=settings.settle_ticks, help="Simulation ticks")
    parser.add_argument("--limit", type=int, default=None, help="Recent conversations for the topic map")
    parser.add_argument("--output", help="Write the layout JSON here instead of printing positions")
    args = parser.parse_args()

    store = ConversationStore.load_json(args.data)

    if args.conversation:
        conversation = store.get(args.conversation)
        if conversation is None:
            print(f"Conversation not found: {args.conversation}")
            sys.exit(1)
        profile = chain_profile()
        graph = build_chain_graph(conversation, profile)
    else:
        profile = map_profile()
        if args.limit is not None:
            profile.recent_limit = args.limit
        graph = build_similarity_graph(store.list_recent(), profile)

    describe_graph(graph)

    print(f"Running {args.ticks} ticks ({profile.name} profile)...")
    simulation = ForceSimulation(graph, profile.forces, profile.center)
    state = simulation.run(args.ticks)

    if args.output:
        layout = TopicGraph(nodes=list(state.nodes), edges=graph.edges).to_dict()
        Path(args.output).write_text(json.dumps(layout, indent=2, ensure_ascii=False), encoding="utf-8")
        print(f"Layout written to {args.output}")
        return

    for node in state.nodes:
        print(f"  {node.label:<40} x={node.x:8.1f} y={node.y:8.1f} r={node.radius:5.1f} w={node.weight}")

    if state.nodes:
        xs = [n.x for n in state.nodes]
        ys = [n.y for n in state.nodes]
        print(f"Bounding box: x=[{min(xs):.1f}, {max(xs):.1f}], y=[{min(ys):.1f}, {max(ys):.1f}]")


if __name__ == "__main__":
    main()
