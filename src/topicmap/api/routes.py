"""API routes for topicmap.

Provides:
- /conversations/{id}/graph topic chain of one conversation
- /topic-map cross-conversation topic clusters
- /topics topic registry and per-topic conversation lists
- /conversations/{id}/fork fork a conversation at a topic
"""

import logging
import time

from fastapi import APIRouter, HTTPException, Query, Request
from pydantic import BaseModel, Field

from topicmap.clustering import TopicRegistry
from topicmap.config import settings
from topicmap.conversations import fork_conversation
from topicmap.graph import build_chain_graph, build_similarity_graph, chain_profile, map_profile
from topicmap.graph.config import ViewProfile
from topicmap.models import Conversation, TopicGraph
from topicmap.simulation import ForceSimulation
from topicmap.storage import ConversationStore

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================================================
# Models
# ============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    conversations: int
    timestamp: int


class NodeInfo(BaseModel):
    """Laid-out graph node."""

    id: str
    label: str
    radius: float
    weight: int
    color: str
    x: float
    y: float
    members: list[str] = Field(default_factory=list)  # Conversation or topic ids


class EdgeInfo(BaseModel):
    """Graph edge."""

    source_id: str
    target_id: str
    strength: float


class GraphResponse(BaseModel):
    """Graph with node positions after a headless layout run."""

    view: str
    ticks: int
    nodes: list[NodeInfo]
    edges: list[EdgeInfo]


class ClusterInfo(BaseModel):
    """Topic registry entry."""

    label: str
    count: int
    variations: list[str]


class ConversationSummary(BaseModel):
    """Conversation listed under a topic."""

    id: str
    title: str
    timestamp: int


class ForkRequest(BaseModel):
    """Fork a conversation at a topic."""

    topic_id: str


class ConversationResponse(BaseModel):
    """Full conversation record."""

    id: str
    title: str
    timestamp: int
    messages: list[dict]
    topics: list[dict]
    user_id: str | None = None
    is_favorite: bool = False


# ============================================================================
# Helpers
# ============================================================================


def get_store(request: Request) -> ConversationStore:
    """Get conversation store from app state."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Conversation store not initialized")
    return store


def _layout(graph: TopicGraph, profile: ViewProfile, ticks: int) -> GraphResponse:
    simulation = ForceSimulation(graph, profile.forces, profile.center)
    state = simulation.run(ticks)

    nodes = []
    for node in state.nodes:
        payload = node.payload
        if isinstance(payload, list):
            members = [c.id for c in payload]
        else:
            members = [payload.id] if payload is not None else []
        nodes.append(
            NodeInfo(
                id=node.id,
                label=node.label,
                radius=node.radius,
                weight=node.weight,
                color=node.color,
                x=node.x,
                y=node.y,
                members=members,
            )
        )

    return GraphResponse(
        view=profile.name,
        ticks=ticks,
        nodes=nodes,
        edges=[EdgeInfo(**e.to_dict()) for e in graph.edges],
    )


def _summary(conversation: Conversation) -> ConversationSummary:
    return ConversationSummary(
        id=conversation.id,
        title=conversation.title,
        timestamp=conversation.timestamp,
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Health check endpoint."""
    store = get_store(request)
    return HealthResponse(
        status="healthy",
        conversations=len(store),
        timestamp=int(time.time()),
    )


@router.get("/conversations/{conversation_id}/graph", response_model=GraphResponse)
async def conversation_graph(
    request: Request,
    conversation_id: str,
    ticks: int | None = Query(default=None, ge=0, le=5000),
) -> GraphResponse:
    """Topic chain of one conversation."""
    store = get_store(request)
    conversation = store.get(conversation_id)
    if conversation is None:
        raise HTTPException(status_code=404, detail="Conversation not found")

    profile = chain_profile()
    graph = build_chain_graph(conversation, profile)
    return _layout(graph, profile, settings.settle_ticks if ticks is None else ticks)


@router.get("/topic-map", response_model=GraphResponse)
async def topic_map(
    request: Request,
    limit: int | None = Query(default=None, ge=1, le=100),
    ticks: int | None = Query(default=None, ge=0, le=5000),
) -> GraphResponse:
    """Topic clusters across the most recent conversations."""
    store = get_store(request)

    try:
        profile = map_profile()
        if limit is not None:
            profile.recent_limit = limit
        graph = build_similarity_graph(store.list_recent(), profile)
        return _layout(graph, profile, settings.settle_ticks if ticks is None else ticks)
    except Exception as e:
        logger.error(f"Topic map failed: {e}")
        raise HTTPException(status_code=500, detail=f"Topic map failed: {e}")


@router.get("/topics", response_model=list[ClusterInfo])
async def list_topics(request: Request) -> list[ClusterInfo]:
    """Topic registry, most discussed first."""
    store = get_store(request)
    registry = TopicRegistry(store.list_recent())
    return [
        ClusterInfo(label=c.label, count=c.count, variations=list(c.variations))
        for c in registry.clusters
    ]


@router.get("/topics/{label}/conversations", response_model=list[ConversationSummary])
async def topic_conversations(request: Request, label: str) -> list[ConversationSummary]:
    """Conversations that discussed a registry topic."""
    store = get_store(request)
    registry = TopicRegistry(store.list_recent())
    if registry.cluster(label) is None:
        raise HTTPException(status_code=404, detail="Topic not found")
    return [_summary(c) for c in registry.conversations_for(label)]


@router.post("/conversations/{conversation_id}/fork", response_model=ConversationResponse)
async def fork(
    request: Request,
    conversation_id: str,
    body: ForkRequest,
) -> ConversationResponse:
    """Fork a conversation at a topic and store the new conversation."""
    store = get_store(request)
    conversation = store.get(conversation_id)
    if conversation is None:
        raise HTTPException(status_code=404, detail="Conversation not found")

    forked = fork_conversation(conversation, body.topic_id)
    if forked is None:
        raise HTTPException(status_code=404, detail="Topic not found or has no messages")

    store.save(forked)
    return ConversationResponse(**forked.to_dict())
