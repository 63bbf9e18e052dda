"""Operations on conversations handed back to the host."""

from topicmap.conversations.fork import fork_conversation, fork_range

__all__ = ["fork_conversation", "fork_range"]
