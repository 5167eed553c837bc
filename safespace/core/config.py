"""
Configuration management for SafeSpace.

Handles environment-based configuration for development and production.
"""
import os
from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Environment
    environment: str = os.getenv("ENVIRONMENT", "development")

    # Debug - handle non-boolean values gracefully
    debug: bool = False

    @field_validator("debug", mode="before")
    @classmethod
    def parse_debug(cls, v):
        """Parse debug from environment, handling non-boolean values."""
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            return v.lower() in ("true", "1", "yes")
        debug_env = os.getenv("DEBUG", "false").lower()
        return debug_env in ("true", "1", "yes")

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))

    # CORS: comma-separated origins
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    # Record store: "memory" (dict per entity) or "sql" (SQLAlchemy)
    storage_backend: str = os.getenv("STORAGE_BACKEND", "memory")
    database_url: str = os.getenv("DATABASE_URL", "sqlite://")
    database_echo: bool = os.getenv("DATABASE_ECHO", "false").lower() == "true"
    seed_sample_data: bool = os.getenv("SEED_SAMPLE_DATA", "true").lower() in ("1", "true", "yes")

    # Chat relay
    recent_messages_limit: int = int(os.getenv("RECENT_MESSAGES_LIMIT", "20"))
    max_frame_size: int = int(os.getenv("MAX_FRAME_SIZE", str(64 * 1024)))

    # Client socket manager
    client_ws_url: str = os.getenv("CLIENT_WS_URL", "ws://localhost:8000/ws")
    client_max_reconnect_attempts: int = int(os.getenv("CLIENT_MAX_RECONNECT_ATTEMPTS", "5"))
    client_reconnect_interval: float = float(os.getenv("CLIENT_RECONNECT_INTERVAL", "1.0"))

    @field_validator("storage_backend")
    @classmethod
    def check_storage_backend(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in ("memory", "sql"):
            raise ValueError(f"STORAGE_BACKEND must be 'memory' or 'sql', got {v!r}")
        return v

    class Config:
        # Load .env from project root (safespace/core/config.py -> parent.parent.parent)
        env_file = str(Path(__file__).resolve().parent.parent.parent / ".env")
        case_sensitive = False
        extra = "ignore"


# Global settings instance
settings = Settings()
