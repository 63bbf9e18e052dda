"""Fork a conversation at one topic into a new conversation."""

import logging
import time
import uuid
from dataclasses import replace

from topicmap.models import Conversation

logger = logging.getLogger(__name__)

FORK_SUFFIX = " (Fork)"


def fork_range(conversation: Conversation, topic_id: str) -> tuple[int, int] | None:
    """
    Message slice [start, end) belonging to a topic.

    The slice runs from the topic's start message to the next topic's start
    message, or to the end of the conversation for the last topic.

    Args:
        conversation: Conversation to fork
        topic_id: Topic to fork at

    Returns:
        (start, end) indices, or None for an unknown topic or missing start
    """
    index = conversation.topic_index(topic_id)
    if index is None:
        return None

    start = conversation.message_index(conversation.topics[index].message_id)
    if start is None:
        return None

    if index + 1 < len(conversation.topics):
        end = conversation.message_index(conversation.topics[index + 1].message_id)
        if end is None:
            end = len(conversation.messages)
    else:
        end = len(conversation.messages)

    return start, end


def fork_conversation(
    conversation: Conversation,
    topic_id: str,
    new_id: str | None = None,
    now: int | None = None,
) -> Conversation | None:
    """
    Create a conversation holding only one topic's messages.

    The forked topic is the new conversation's single topic, re-anchored to
    the first message of the slice.

    Args:
        conversation: Source conversation (not modified)
        topic_id: Topic to fork at
        new_id: Id for the new conversation (generated if omitted)
        now: Creation timestamp in milliseconds (current time if omitted)

    Returns:
        The new conversation, or None when there is nothing to fork
    """
    bounds = fork_range(conversation, topic_id)
    if bounds is None:
        logger.warning(f"Cannot fork {conversation.id}: topic {topic_id} has no start message")
        return None

    start, end = bounds
    messages = list(conversation.messages[start:end])
    if not messages:
        logger.warning(f"Cannot fork {conversation.id}: topic {topic_id} has no messages")
        return None

    topic = conversation.topics[conversation.topic_index(topic_id)]
    forked = Conversation(
        id=new_id or str(uuid.uuid4()),
        title=f"{topic.title}{FORK_SUFFIX}",
        timestamp=now if now is not None else int(time.time() * 1000),
        messages=messages,
        topics=[replace(topic, message_id=messages[0].id)],
        user_id=conversation.user_id,
        is_favorite=False,
    )

    logger.info(
        f"Forked {conversation.id} at topic '{topic.title}': "
        f"messages [{start}, {end}) -> {forked.id}"
    )
    return forked
