"""Conversation models - the chat sessions whose topics feed the graphs."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Role(str, Enum):
    """Author of a message."""

    USER = "user"
    MODEL = "model"


def _pick(data: dict, snake: str, camel: str, default: Any = None) -> Any:
    """Read a key stored either in snake_case or in the chat client's camelCase."""
    if snake in data:
        return data[snake]
    return data.get(camel, default)


@dataclass
class Message:
    """A single chat message."""

    id: str
    role: Role
    content: str
    timestamp: int = 0  # Milliseconds since epoch

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "role": self.role.value,
            "content": self.content,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Message":
        """Create from dictionary."""
        return cls(
            id=str(data["id"]),
            role=Role(data.get("role", Role.USER.value)),
            content=data.get("content", ""),
            timestamp=int(data.get("timestamp") or 0),
        )


@dataclass(frozen=True)
class Topic:
    """
    A labeled point in a conversation where a new subject began.

    Titles come from an external classifier and are treated as opaque strings.
    """

    id: str
    title: str
    message_id: str  # Message that opened this topic

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"id": self.id, "title": self.title, "message_id": self.message_id}

    @classmethod
    def from_dict(cls, data: dict) -> "Topic":
        """Create from dictionary."""
        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            message_id=str(_pick(data, "message_id", "messageId", "")),
        )


@dataclass
class Conversation:
    """
    A chat session with its ordered messages and topics.

    Example: "Docker help" with topics "Docker volumes" -> "Disk cleanup"
    """

    id: str
    title: str
    timestamp: int = 0  # Milliseconds since epoch
    messages: list[Message] = field(default_factory=list)
    topics: list[Topic] = field(default_factory=list)

    user_id: str | None = None
    is_favorite: bool = False

    def message_index(self, message_id: str) -> int | None:
        """Position of a message in the conversation, or None if absent."""
        for index, message in enumerate(self.messages):
            if message.id == message_id:
                return index
        return None

    def topic_index(self, topic_id: str) -> int | None:
        """Position of a topic in emission order, or None if absent."""
        for index, topic in enumerate(self.topics):
            if topic.id == topic_id:
                return index
        return None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "title": self.title,
            "timestamp": self.timestamp,
            "messages": [m.to_dict() for m in self.messages],
            "topics": [t.to_dict() for t in self.topics],
            "user_id": self.user_id,
            "is_favorite": self.is_favorite,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Conversation":
        """Create from dictionary (snake_case or the chat client's camelCase)."""
        if "id" not in data:
            raise ValueError("Conversation record has no id")
        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            timestamp=int(data.get("timestamp") or 0),
            messages=[Message.from_dict(m) for m in data.get("messages") or []],
            topics=[Topic.from_dict(t) for t in data.get("topics") or []],
            user_id=_pick(data, "user_id", "userId"),
            is_favorite=bool(_pick(data, "is_favorite", "isFavorite", False)),
        )
