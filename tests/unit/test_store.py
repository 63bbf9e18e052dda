"""Unit tests for the conversation store."""

import json
from pathlib import Path

import pytest

from topicmap.models import Conversation
from topicmap.storage import ConversationStore


class TestConversationStore:
    """Tests for ConversationStore."""

    def test_save_and_get(self) -> None:
        """Test saving and retrieving a conversation."""
        store = ConversationStore()
        store.save(Conversation(id="c1", title="First"))
        assert len(store) == 1
        assert store.get("c1").title == "First"
        assert store.get("missing") is None

    def test_delete(self, store: ConversationStore) -> None:
        """Test deleting conversations."""
        assert store.delete("c1")
        assert store.get("c1") is None
        assert not store.delete("c1")

    def test_save_keeps_favorite(self) -> None:
        """Test replacing a conversation keeps its favorite flag."""
        store = ConversationStore([Conversation(id="c1", title="First", is_favorite=True)])
        store.save(Conversation(id="c1", title="Renamed"))
        assert store.get("c1").title == "Renamed"
        assert store.get("c1").is_favorite is True

    def test_save_leaves_caller_object_alone(self) -> None:
        """Test keeping the favorite flag does not modify the saved argument."""
        store = ConversationStore([Conversation(id="c1", title="First", is_favorite=True)])
        incoming = Conversation(id="c1", title="Renamed")
        store.save(incoming)
        assert incoming.is_favorite is False
        assert store.get("c1") is not incoming
        assert store.get("c1").is_favorite is True

    def test_list_recent_order(self) -> None:
        """Test favorites first, then newest first."""
        store = ConversationStore([
            Conversation(id="old", title="Old", timestamp=100),
            Conversation(id="new", title="New", timestamp=300),
            Conversation(id="fav", title="Fav", timestamp=50, is_favorite=True),
            Conversation(id="mid", title="Mid", timestamp=200),
        ])
        assert [c.id for c in store.list_recent()] == ["fav", "new", "mid", "old"]
        assert [c.id for c in store.list_recent(limit=2)] == ["fav", "new"]

    def test_list_recent_by_user(self, store: ConversationStore) -> None:
        """Test filtering by owner."""
        assert [c.id for c in store.list_recent(user_id="user-1")] == ["chat"]
        assert store.list_recent(user_id="nobody") == []

    def test_load_json_list(self, tmp_path: Path) -> None:
        """Test loading a list of camelCase records."""
        path = tmp_path / "chats.json"
        path.write_text(json.dumps([
            {
                "id": "c1",
                "title": "Docker help",
                "timestamp": 1712345678901,
                "isFavorite": True,
                "messages": [{"id": "m1", "role": "user", "content": "Volumes?", "timestamp": 1712345678901}],
                "topics": [{"id": "t1", "title": "Docker volumes", "messageId": "m1"}],
            }
        ]), encoding="utf-8")

        store = ConversationStore.load_json(path)
        conversation = store.get("c1")
        assert conversation.is_favorite is True
        assert conversation.topics[0].message_id == "m1"

    def test_load_json_object(self, tmp_path: Path) -> None:
        """Test loading an object with a conversations list."""
        path = tmp_path / "chats.json"
        path.write_text(json.dumps({"conversations": [{"id": "c1", "title": "a"}, {"id": "c2", "title": "b"}]}))
        assert len(ConversationStore.load_json(path)) == 2

    def test_load_json_invalid(self, tmp_path: Path) -> None:
        """Test rejecting exports of the wrong shape."""
        path = tmp_path / "chats.json"
        path.write_text(json.dumps("not a list"))
        with pytest.raises(ValueError):
            ConversationStore.load_json(path)
