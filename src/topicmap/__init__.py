"""topicmap - topic clustering and force-directed topic graphs for chat conversations."""

__version__ = "0.1.0"
