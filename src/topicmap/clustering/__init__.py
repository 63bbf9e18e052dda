"""Topic label clustering.

Provides:
- Tokenization of topic labels into significant words
- Intersection and LCS label matchers
- Greedy first-match cluster builder
- Cross-conversation topic registry
"""

from topicmap.clustering.builder import build_clusters, title_case
from topicmap.clustering.matcher import MatcherVariant, match
from topicmap.clustering.registry import TopicRegistry
from topicmap.clustering.tokenizer import STOP_WORDS, significant_tokens, tokenize

__all__ = [
    "STOP_WORDS",
    "tokenize",
    "significant_tokens",
    "MatcherVariant",
    "match",
    "build_clusters",
    "title_case",
    "TopicRegistry",
]
