"""Topicmap data models."""

from topicmap.models.conversation import Conversation, Message, Role, Topic
from topicmap.models.graph import Cluster, Edge, Node, TopicGraph, owner_key

__all__ = [
    "Conversation",
    "Message",
    "Role",
    "Topic",
    "Cluster",
    "Edge",
    "Node",
    "TopicGraph",
    "owner_key",
]
