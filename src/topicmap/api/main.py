"""FastAPI application for topicmap.

Serves topic graphs, the topic registry and conversation forking over a
conversation store.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from topicmap.api.routes import router
from topicmap.config import settings
from topicmap.storage import ConversationStore

logger = logging.getLogger(__name__)


def load_store() -> ConversationStore:
    """Conversation store from the configured JSON export, or an empty one."""
    if settings.data_path:
        return ConversationStore.load_json(settings.data_path)
    logger.info("No data_path configured, starting with an empty conversation store")
    return ConversationStore()


def create_app(store: ConversationStore | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        store: Conversation store to serve (loaded from settings if omitted)
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Manage application lifespan - startup and shutdown."""
        logger.info("Starting topicmap API...")
        app.state.store = store if store is not None else load_store()
        logger.info(f"Serving {len(app.state.store)} conversations")

        yield

        logger.info("Shutting down topicmap API...")
        app.state.store = None

    app = FastAPI(
        title="topicmap",
        description="Topic clustering and force-directed topic graphs for chat conversations",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    return app


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    uvicorn.run(
        "topicmap.api.main:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
    )
