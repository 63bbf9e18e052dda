"""In-memory conversation store standing in for the chat client's persistence."""

import json
import logging
from dataclasses import replace
from pathlib import Path

from topicmap.models import Conversation

logger = logging.getLogger(__name__)


class ConversationStore:
    """
    Conversations keyed by id.

    Listing puts favorites first, then newest first, like the chat client's
    sidebar.
    """

    def __init__(self, conversations: list[Conversation] | None = None) -> None:
        self._conversations: dict[str, Conversation] = {}
        for conversation in conversations or []:
            self.save(conversation)

    def __len__(self) -> int:
        return len(self._conversations)

    def save(self, conversation: Conversation) -> None:
        """Insert or replace; replacing keeps the stored favorite flag."""
        existing = self._conversations.get(conversation.id)
        if existing is not None:
            conversation = replace(conversation, is_favorite=existing.is_favorite)
        self._conversations[conversation.id] = conversation

    def get(self, conversation_id: str) -> Conversation | None:
        return self._conversations.get(conversation_id)

    def delete(self, conversation_id: str) -> bool:
        return self._conversations.pop(conversation_id, None) is not None

    def list_recent(
        self,
        limit: int | None = None,
        user_id: str | None = None,
    ) -> list[Conversation]:
        """Favorites first, then newest first; optionally one user's only."""
        conversations = [
            c for c in self._conversations.values()
            if user_id is None or c.user_id == user_id
        ]
        conversations.sort(key=lambda c: (not c.is_favorite, -c.timestamp))
        return conversations[:limit] if limit is not None else conversations

    @classmethod
    def load_json(cls, path: str | Path) -> "ConversationStore":
        """
        Load a JSON export of conversations.

        Accepts a list of conversation records or an object with a
        "conversations" list. Keys may be snake_case or camelCase.

        Args:
            path: JSON file path

        Returns:
            Populated store
        """
        path = Path(path)
        data = json.loads(path.read_text(encoding="utf-8"))

        if isinstance(data, dict):
            data = data.get("conversations", [])
        if not isinstance(data, list):
            raise ValueError(f"{path}: expected a list of conversations")

        store = cls([Conversation.from_dict(record) for record in data])
        logger.info(f"Loaded {len(store)} conversations from {path}")
        return store
