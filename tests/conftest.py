"""Pytest configuration and fixtures."""

import pytest

from topicmap.config import Settings, get_test_settings
from topicmap.models import Conversation, Message, Role, Topic
from topicmap.storage import ConversationStore


def make_messages(prefix: str, count: int) -> list[Message]:
    """Alternating user/model messages with ids <prefix>-m0, <prefix>-m1, ..."""
    return [
        Message(
            id=f"{prefix}-m{i}",
            role=Role.USER if i % 2 == 0 else Role.MODEL,
            content=f"message {i}",
            timestamp=1_700_000_000_000 + i,
        )
        for i in range(count)
    ]


def make_conversation(
    conversation_id: str,
    title: str,
    topic_titles: list[str],
    timestamp: int = 1_700_000_000_000,
    messages_per_topic: int = 2,
) -> Conversation:
    """Conversation whose topics each start a fixed-size block of messages."""
    messages = make_messages(conversation_id, len(topic_titles) * messages_per_topic)
    topics = [
        Topic(
            id=f"{conversation_id}-t{i}",
            title=title_,
            message_id=messages[i * messages_per_topic].id,
        )
        for i, title_ in enumerate(topic_titles)
    ]
    return Conversation(
        id=conversation_id,
        title=title,
        timestamp=timestamp,
        messages=messages,
        topics=topics,
    )


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with defaults."""
    return get_test_settings()


@pytest.fixture
def conversation_factory():
    """Build conversations from a list of topic titles."""
    return make_conversation


@pytest.fixture
def sample_conversation() -> Conversation:
    """12 messages, topics starting at messages 0, 5 and 9."""
    messages = make_messages("chat", 12)
    return Conversation(
        id="chat",
        title="Python help",
        timestamp=1_700_000_000_000,
        messages=messages,
        topics=[
            Topic(id="topic-1", title="Python debugging", message_id="chat-m0"),
            Topic(id="topic-2", title="Packaging wheels", message_id="chat-m5"),
            Topic(id="topic-3", title="Deploying to servers", message_id="chat-m9"),
        ],
        user_id="user-1",
    )


@pytest.fixture
def sample_conversations() -> list[Conversation]:
    """Recent conversations, newest first."""
    return [
        make_conversation("c1", "Debug session", ["Python debugging", "Docker volumes"], timestamp=1_700_000_000_500),
        make_conversation("c2", "Errors", ["Debugging Python errors"], timestamp=1_700_000_000_400),
        make_conversation("c3", "Campaign", ["Marketing ideas"], timestamp=1_700_000_000_300),
        make_conversation("c4", "Containers", ["Docker volumes", "Python packaging"], timestamp=1_700_000_000_200),
        make_conversation("c5", "Quarterly planning", [], timestamp=1_700_000_000_100),
    ]


@pytest.fixture
def store(sample_conversation: Conversation, sample_conversations: list[Conversation]) -> ConversationStore:
    """Store holding every sample conversation."""
    return ConversationStore([sample_conversation, *sample_conversations])
