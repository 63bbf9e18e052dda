"""Build node/edge graphs from conversations.

Two shapes, selected by the view profile:
- Chain graph: one node per topic of a conversation, linked in emission order
- Similarity graph: one node per topic cluster across conversations, linked
  when cluster labels share significant words
"""

import logging
import math
import random

from topicmap.clustering.builder import build_clusters
from topicmap.clustering.matcher import MatcherVariant
from topicmap.clustering.tokenizer import tokenize
from topicmap.graph.config import EdgeStrategy, RadiusLaw, ViewProfile, chain_profile, map_profile
from topicmap.models import Conversation, Edge, Node, TopicGraph

logger = logging.getLogger(__name__)

EDGE_STRENGTH_PER_SHARED_WORD = 0.1


def node_radius(weight: int, profile: ViewProfile) -> float:
    """Radius for a node weight; monotonically non-decreasing in weight."""
    weight = max(1, weight)
    if profile.radius_law == RadiusLaw.LOG:
        return profile.radius_base + math.log(weight) * profile.radius_scale
    return profile.radius_base + math.sqrt(weight) * profile.radius_scale


def palette_color(index: int, profile: ViewProfile) -> str:
    """Color by creation order; neighbours may share a color."""
    return profile.palette[index % len(profile.palette)]


def topic_weights(conversation: Conversation) -> list[int]:
    """Messages covered by each topic, from its start message to the next topic's.

    A start or end message missing from the conversation yields the minimum
    weight of 1.
    """
    weights: list[int] = []
    total = len(conversation.messages)

    for index, topic in enumerate(conversation.topics):
        start = conversation.message_index(topic.message_id)
        if index + 1 < len(conversation.topics):
            end = conversation.message_index(conversation.topics[index + 1].message_id)
        else:
            end = total

        if start is None or end is None:
            weights.append(1)
        else:
            weights.append(max(1, end - start))

    return weights


def build_chain_graph(
    conversation: Conversation,
    profile: ViewProfile | None = None,
) -> TopicGraph:
    """
    Build the topic chain of one conversation.

    Args:
        conversation: Conversation whose topics become nodes
        profile: View profile (defaults to the chain profile)

    Returns:
        TopicGraph with one node per topic and edges between neighbours
    """
    profile = profile or chain_profile()
    topics = conversation.topics
    if not topics:
        return TopicGraph()

    cx, cy = profile.center
    weights = topic_weights(conversation)
    nodes: list[Node] = []

    for index, (topic, weight) in enumerate(zip(topics, weights)):
        # Outward spiral so consecutive topics start apart
        angle = index / len(topics) * 2 * math.pi
        distance = profile.spiral_base + index * profile.spiral_step
        nodes.append(
            Node(
                id=topic.id,
                label=topic.title,
                radius=node_radius(weight, profile),
                weight=weight,
                color=palette_color(index, profile),
                x=cx + math.cos(angle) * distance,
                y=cy + math.sin(angle) * distance,
                payload=topic,
            )
        )

    edges = [
        Edge(source_id=a.id, target_id=b.id, strength=1.0)
        for a, b in zip(nodes, nodes[1:])
    ]

    logger.debug(f"Chain graph for {conversation.id}: {len(nodes)} nodes, {len(edges)} edges")
    return TopicGraph(nodes=nodes, edges=edges)


def topic_items(conversations: list[Conversation]) -> list[tuple[str, Conversation]]:
    """(label, conversation) pairs; a conversation without topics contributes its title."""
    items: list[tuple[str, Conversation]] = []
    for conversation in conversations:
        for topic in conversation.topics:
            items.append((topic.title, conversation))
        if not conversation.topics and conversation.title:
            items.append((conversation.title, conversation))
    return items


def overlap_edges(nodes: list[Node]) -> list[Edge]:
    """Edges between nodes whose labels share significant words."""
    tokens = [tokenize(node.label) for node in nodes]
    edges: list[Edge] = []

    for i in range(len(nodes)):
        for j in range(i + 1, len(nodes)):
            shared = [w for w in tokens[i] if w in tokens[j]]
            if shared:
                edges.append(
                    Edge(
                        source_id=nodes[i].id,
                        target_id=nodes[j].id,
                        strength=len(shared) * EDGE_STRENGTH_PER_SHARED_WORD,
                    )
                )
    return edges


def build_similarity_graph(
    conversations: list[Conversation],
    profile: ViewProfile | None = None,
) -> TopicGraph:
    """
    Build the cross-conversation topic map.

    Args:
        conversations: Conversations, newest first
        profile: View profile (defaults to the map profile)

    Returns:
        TopicGraph with one node per topic cluster
    """
    profile = profile or map_profile()
    if profile.recent_limit is not None:
        conversations = conversations[: profile.recent_limit]

    items = topic_items(conversations)
    if not items:
        return TopicGraph()

    clusters = build_clusters(
        items,
        variant=profile.matcher or MatcherVariant.INTERSECTION,
        min_label_length=profile.min_label_length,
    )

    rng = random.Random(profile.seed)
    cx, cy = profile.center
    nodes: list[Node] = []

    for index, cluster in enumerate(clusters):
        nodes.append(
            Node(
                id=f"cluster-{index}",
                label=cluster.label,
                radius=node_radius(cluster.count, profile),
                weight=cluster.count,
                color=palette_color(index, profile),
                x=cx + rng.uniform(-profile.jitter, profile.jitter),
                y=cy + rng.uniform(-profile.jitter, profile.jitter),
                payload=list(cluster.owners),
            )
        )

    edges = overlap_edges(nodes)

    logger.info(
        f"Topic map: {len(conversations)} conversations, {len(items)} topics -> "
        f"{len(nodes)} clusters, {len(edges)} links"
    )
    return TopicGraph(nodes=nodes, edges=edges)


def build_graph(
    profile: ViewProfile,
    conversations: list[Conversation],
) -> TopicGraph:
    """Build the graph shape the profile asks for.

    The chain shape uses the first conversation only.
    """
    if profile.edge_strategy == EdgeStrategy.SEQUENTIAL:
        if not conversations:
            return TopicGraph()
        return build_chain_graph(conversations[0], profile)
    return build_similarity_graph(conversations, profile)
