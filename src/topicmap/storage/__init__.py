"""Conversation storage."""

from topicmap.storage.conversation_store import ConversationStore

__all__ = ["ConversationStore"]
