"""Configuration management using Pydantic Settings."""

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environment presets."""

    DEV = "dev"
    PROD = "prod"
    TEST = "test"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    environment: Environment = Environment.DEV

    # Topic map scope
    recent_conversation_limit: int = Field(
        default=10,
        description="How many of the newest conversations the topic map clusters"
    )

    # Simulation loop
    frame_interval: float = Field(
        default=1 / 60,
        description="Seconds between simulation ticks (one per display refresh)"
    )
    layout_seed: int | None = Field(
        default=None,
        description="Seed for initial node jitter; None gives a fresh layout each open"
    )
    settle_ticks: int = Field(
        default=300,
        description="Ticks run by headless layout (API snapshots, compute_layout script)"
    )

    # Conversation data (JSON export of the chat client's storage)
    data_path: str | None = None

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False

    log_level: str = "INFO"


def get_dev_settings() -> Settings:
    """Get development environment settings."""
    return Settings(
        environment=Environment.DEV,
        api_debug=True,
        log_level="DEBUG",
    )


def get_test_settings() -> Settings:
    """Get test environment settings."""
    return Settings(
        environment=Environment.TEST,
        layout_seed=42,
        settle_ticks=50,
        data_path=None,
    )


# Global settings instance
settings = Settings()
