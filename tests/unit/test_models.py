"""Unit tests for data models."""

import pytest

from topicmap.models import Cluster, Conversation, Edge, Node, Role, Topic, TopicGraph


class TestConversation:
    """Tests for Conversation model."""

    def test_message_index(self, sample_conversation: Conversation) -> None:
        """Test locating messages by id."""
        assert sample_conversation.message_index("chat-m0") == 0
        assert sample_conversation.message_index("chat-m9") == 9
        assert sample_conversation.message_index("missing") is None

    def test_topic_index(self, sample_conversation: Conversation) -> None:
        """Test locating topics by id."""
        assert sample_conversation.topic_index("topic-2") == 1
        assert sample_conversation.topic_index("missing") is None

    def test_to_dict(self, sample_conversation: Conversation) -> None:
        """Test converting conversation to dictionary."""
        data = sample_conversation.to_dict()
        assert data["id"] == "chat"
        assert len(data["messages"]) == 12
        assert data["topics"][1] == {
            "id": "topic-2",
            "title": "Packaging wheels",
            "message_id": "chat-m5",
        }
        assert data["messages"][1]["role"] == "model"
        assert data["is_favorite"] is False

    def test_from_dict_camel_case(self) -> None:
        """Test reading the chat client's camelCase export."""
        data = {
            "id": 1712345678901,
            "title": "Docker help",
            "timestamp": 1712345678901,
            "userId": "u1",
            "isFavorite": True,
            "messages": [
                {"id": "m1", "role": "user", "content": "How do volumes work?"},
                {"id": "m2", "role": "model", "content": "Volumes persist data."},
            ],
            "topics": [{"id": "t1", "title": "Docker volumes", "messageId": "m1"}],
        }
        conversation = Conversation.from_dict(data)
        assert conversation.id == "1712345678901"
        assert conversation.user_id == "u1"
        assert conversation.is_favorite is True
        assert conversation.messages[1].role == Role.MODEL
        assert conversation.topics[0].message_id == "m1"

    def test_from_dict_requires_id(self) -> None:
        """Test that a record without id is rejected."""
        with pytest.raises(ValueError):
            Conversation.from_dict({"title": "No id"})

    def test_topic_is_immutable(self) -> None:
        """Test that topics are frozen."""
        topic = Topic(id="t1", title="Docker", message_id="m1")
        with pytest.raises(AttributeError):
            topic.title = "Podman"  # type: ignore[misc]


class TestCluster:
    """Tests for Cluster model."""

    def test_variations_are_distinct(self) -> None:
        """Test adding the same variation twice."""
        cluster = Cluster(label="Docker")
        cluster.add_variation("Docker")
        cluster.add_variation("Docker volumes")
        cluster.add_variation("Docker")
        assert cluster.variations == ["Docker", "Docker volumes"]

    def test_owners_deduplicated_by_id(self) -> None:
        """Test that owners with the same id count once."""
        cluster = Cluster(label="Docker")
        cluster.add_owner(Conversation(id="c1", title="a"))
        cluster.add_owner(Conversation(id="c1", title="a (copy)"))
        cluster.add_owner("c2")
        assert len(cluster.owners) == 2
        assert cluster.to_dict()["owners"] == ["c1", "c2"]


class TestTopicGraph:
    """Tests for TopicGraph model."""

    def test_empty_graph(self) -> None:
        """Test an empty graph."""
        graph = TopicGraph()
        assert graph.is_empty
        assert graph.to_dict() == {"nodes": [], "edges": []}

    def test_node_lookup(self) -> None:
        """Test finding nodes by id."""
        graph = TopicGraph(nodes=[Node(id="a", label="A", radius=20.0, weight=1, color="#fff")])
        assert graph.node("a") is not None
        assert graph.node("b") is None

    def test_node_to_dict_members(self) -> None:
        """Test that conversation payloads render as ids."""
        node = Node(
            id="cluster-0",
            label="Docker",
            radius=55.0,
            weight=1,
            color="#93c5fd",
            payload=[Conversation(id="c1", title="a")],
        )
        assert node.to_dict()["members"] == ["c1"]

    def test_to_networkx_drops_dangling_edges(self) -> None:
        """Test networkx export ignores edges to unknown nodes."""
        graph = TopicGraph(
            nodes=[
                Node(id="a", label="A", radius=20.0, weight=1, color="#fff"),
                Node(id="b", label="B", radius=20.0, weight=2, color="#fff"),
            ],
            edges=[Edge("a", "b", 0.2), Edge("a", "ghost")],
        )
        G = graph.to_networkx()
        assert G.number_of_nodes() == 2
        assert G.number_of_edges() == 1
        assert G.edges["a", "b"]["strength"] == 0.2
        assert G.nodes["b"]["weight"] == 2
