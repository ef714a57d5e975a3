"""Configuration management for Skygrip."""

import os
from dataclasses import dataclass, field

from .instrumentation import TracingConfig


@dataclass
class RedisConfig:
    """Redis Stack connection configuration."""

    host: str = "localhost"
    port: int = 6379
    password: str | None = None
    db: int = 0
    # Seconds; None leaves the socket blocking
    socket_timeout: float | None = None


@dataclass
class SearchConfig:
    """Paginated search configuration."""

    page_size: int = 100


@dataclass
class Config:
    """Main application configuration."""

    server_name: str = "Skygrip"
    version: str = "1.0.0"
    redis: RedisConfig = field(default_factory=RedisConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    tracing: TracingConfig = field(default_factory=TracingConfig)

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        config = cls()

        # Redis connection
        if host := os.environ.get("REDIS_HOST"):
            config.redis.host = host
        if port := os.environ.get("REDIS_PORT"):
            config.redis.port = int(port)
        if password := os.environ.get("REDIS_PASSWORD"):
            config.redis.password = password
        if db := os.environ.get("REDIS_DB"):
            config.redis.db = int(db)
        if timeout := os.environ.get("REDIS_SOCKET_TIMEOUT"):
            config.redis.socket_timeout = float(timeout)

        if page_size := os.environ.get("SKYGRIP_PAGE_SIZE"):
            config.search.page_size = int(page_size)

        # Tracing
        if enabled := os.environ.get("SKYGRIP_TRACING"):
            config.tracing.enabled = enabled.lower() in ("1", "true", "yes", "on")
        if endpoint := os.environ.get("SKYGRIP_OTLP_ENDPOINT"):
            config.tracing.endpoint = endpoint

        return config
