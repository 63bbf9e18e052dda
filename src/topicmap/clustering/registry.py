"""Cross-conversation topic registry (the topic explorer list)."""

import logging

from topicmap.clustering.builder import build_clusters
from topicmap.clustering.matcher import MatcherVariant
from topicmap.models import Cluster, Conversation

logger = logging.getLogger(__name__)


class TopicRegistry:
    """
    Frequency-ordered topic clusters across conversations.

    Each distinct topic title counts once per conversation. The most common
    titles are clustered first with the LCS matcher, so they seed the
    clusters that rarer phrasings fold into.
    """

    def __init__(self, conversations: list[Conversation]) -> None:
        self.conversations = list(conversations)
        self.clusters = self._build()

    def _build(self) -> list[Cluster]:
        items = []
        for conversation in self.conversations:
            seen: set[str] = set()
            for topic in conversation.topics:
                title = topic.title.strip()
                if title and title not in seen:
                    seen.add(title)
                    items.append((title, conversation))

        clusters = build_clusters(
            items,
            variant=MatcherVariant.LCS,
            presort=True,
            dedupe=True,
        )
        clusters.sort(key=lambda c: c.count, reverse=True)

        logger.info(
            f"Topic registry: {len(items)} topic titles from "
            f"{len(self.conversations)} conversations -> {len(clusters)} clusters"
        )
        return clusters

    def cluster(self, label: str) -> Cluster | None:
        """Find a cluster by its display label."""
        for cluster in self.clusters:
            if cluster.label == label:
                return cluster
        return None

    def conversations_for(self, label: str) -> list[Conversation]:
        """Conversations with at least one topic among the cluster's variations."""
        cluster = self.cluster(label)
        if cluster is None:
            return []
        return [
            conversation
            for conversation in self.conversations
            if any(t.title.strip() in cluster.variations for t in conversation.topics)
        ]

    def search(self, query: str) -> list[Conversation]:
        """Conversations whose title contains the query (case-insensitive)."""
        needle = query.lower()
        return [c for c in self.conversations if needle in c.title.lower()]
