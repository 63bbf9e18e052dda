"""Topic graph visualizations: one engine, two views.

- ConversationTopicView: topic chain of one conversation, with fork
- TopicMapView: clusters across recent conversations, with open-conversation
"""

import asyncio
import logging
from typing import Callable

from topicmap.graph.builder import build_chain_graph, build_similarity_graph
from topicmap.graph.config import ViewProfile, chain_profile, map_profile
from topicmap.models import Conversation, Node, Topic, TopicGraph
from topicmap.simulation import (
    ForceSimulation,
    InteractionController,
    SimulationLoop,
    ZoomControl,
)

logger = logging.getLogger(__name__)

ForkCallback = Callable[[Conversation, str], None]
SelectConversationCallback = Callable[[Conversation], None]


class TopicGraphView:
    """
    A visualization instance: graph, simulation, frame loop and controls.

    Derived state lives only while the view is open; close() stops the loop
    and drops the selection.
    """

    def __init__(
        self,
        graph: TopicGraph,
        profile: ViewProfile,
        frame_interval: float | None = None,
    ) -> None:
        self.graph = graph
        self.profile = profile
        self.simulation = ForceSimulation(graph, profile.forces, profile.center)
        self.zoom = ZoomControl(profile.zoom)
        self.controller = InteractionController(self.simulation, self.zoom)
        self.loop = SimulationLoop(self.simulation, frame_interval)
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    @property
    def nodes(self) -> tuple[Node, ...]:
        return self.simulation.nodes

    @property
    def selected_node(self) -> Node | None:
        return self.controller.selected_node

    def open(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Show the view; the layout runs only when there is something to lay out."""
        if self._open:
            return
        self._open = True
        if self.graph.nodes:
            self.loop.start(loop)
        logger.info(
            f"Opened {self.profile.name} view: {len(self.graph.nodes)} nodes, "
            f"{len(self.graph.edges)} edges"
        )

    def close(self) -> None:
        """Hide the view, cancel the pending tick and drop any drag or selection.

        Safe to call repeatedly.
        """
        self.loop.stop()
        self.controller.pointer_up()
        self.controller.clear_selection()
        if self._open:
            self._open = False
            logger.info(f"Closed {self.profile.name} view")

    def snapshot(self) -> dict:
        """Current layout for rendering."""
        state = self.simulation.state
        return {
            "view": self.profile.name,
            "scale": state.scale,
            "dragged_id": state.dragged_id,
            "selected_id": self.controller.selected_id,
            "nodes": [n.to_dict() for n in state.nodes],
            "edges": [e.to_dict() for e in self.graph.edges],
        }


class ConversationTopicView(TopicGraphView):
    """Topic chain of one conversation; selecting a topic offers a fork."""

    def __init__(
        self,
        conversation: Conversation,
        on_fork: ForkCallback,
        profile: ViewProfile | None = None,
        frame_interval: float | None = None,
    ) -> None:
        profile = profile or chain_profile()
        super().__init__(build_chain_graph(conversation, profile), profile, frame_interval)
        self.conversation = conversation
        self.on_fork = on_fork

    @property
    def selected_topic(self) -> Topic | None:
        node = self.selected_node
        return node.payload if node is not None else None

    def select_topic(self, topic_id: str) -> Topic | None:
        """Select from the topic list or by clicking the node."""
        node = self.controller.click(topic_id)
        return node.payload if node is not None else None

    def cancel_fork(self) -> None:
        self.controller.clear_selection()

    def confirm_fork(self) -> bool:
        """Hand the selected topic to the host for forking, then close."""
        topic = self.selected_topic
        if topic is None:
            return False
        self.on_fork(self.conversation, topic.id)
        self.close()
        return True


class TopicMapView(TopicGraphView):
    """Topic clusters across recent conversations; a cluster lists its conversations."""

    def __init__(
        self,
        conversations: list[Conversation],
        on_select_conversation: SelectConversationCallback,
        profile: ViewProfile | None = None,
        frame_interval: float | None = None,
    ) -> None:
        profile = profile or map_profile()
        super().__init__(build_similarity_graph(conversations, profile), profile, frame_interval)
        self.on_select_conversation = on_select_conversation

    def selected_conversations(self) -> list[Conversation]:
        """Conversations of the selected cluster (empty without a selection)."""
        node = self.selected_node
        if node is None:
            return []
        return list(node.payload or [])

    def open_conversation(self, conversation: Conversation) -> None:
        """Navigate the host to a conversation, then close."""
        self.on_select_conversation(conversation)
        self.close()
