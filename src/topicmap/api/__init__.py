"""HTTP API for topicmap."""

from topicmap.api.main import create_app

__all__ = ["create_app"]
