"""Greedy first-match clustering of topic labels."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Iterable

from topicmap.clustering.matcher import MatcherVariant, match
from topicmap.models import Cluster

logger = logging.getLogger(__name__)


def title_case(label: str) -> str:
    """Upper-case the first character, leave the rest untouched."""
    return label[:1].upper() + label[1:]


def build_clusters(
    items: Iterable[tuple[str, Any]],
    variant: MatcherVariant = MatcherVariant.INTERSECTION,
    presort: bool = False,
    min_label_length: int = 0,
    dedupe: bool = False,
) -> list[Cluster]:
    """
    Group (label, owner) pairs into clusters in a single greedy pass.

    Algorithm:
    1. Optionally sort items by descending frequency of their exact label
    2. For each item, scan clusters in creation order; the first cluster whose
       label matches takes the item. The cluster label becomes the merge label
       only when that is strictly shorter (and longer than min_label_length)
    3. Recount owners of every cluster against its final variations and
       title-case the label

    Clusters are never merged with each other after creation, so the result
    depends on input order.

    Args:
        items: (label, owner) pairs; owners are conversations, messages or ids
        variant: Matching heuristic
        presort: Sort by label frequency first (stable)
        min_label_length: Merge labels must be longer than this to be adopted
        dedupe: Place each distinct label only once

    Returns:
        Clusters in creation order
    """
    pairs = [(label, owner) for label, owner in items if label and label.strip()]

    if presort:
        frequency = Counter(label for label, _ in pairs)
        pairs.sort(key=lambda pair: frequency[pair[0]], reverse=True)

    clusters: list[Cluster] = []
    placed: set[str] = set()

    for label, owner in pairs:
        if dedupe and label in placed:
            continue
        placed.add(label)

        target: Cluster | None = None
        for cluster in clusters:
            merge_label = match(cluster.label, label, variant)
            if merge_label is None:
                continue
            target = cluster
            if min_label_length < len(merge_label) < len(cluster.label):
                cluster.label = merge_label
            break

        if target is None:
            target = Cluster(label=label)
            clusters.append(target)

        target.add_variation(label)
        target.add_owner(owner)

    # Second pass: an owner counts for every cluster holding one of its labels
    for cluster in clusters:
        cluster.owners = []
        for label, owner in pairs:
            if label in cluster.variations:
                cluster.add_owner(owner)
        cluster.count = len(cluster.owners)
        cluster.label = title_case(cluster.label)

    logger.debug(
        f"Clustered {len(pairs)} labels into {len(clusters)} clusters ({variant.value})"
    )
    return clusters
