"""Configuration management for Feed4j."""

import os

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USER_AGENT = "Feed4j/1.0"
MIN_THREADS = 1
MIN_TIMEOUT_MS = 1000


class Feed4jConfig(BaseSettings):
    """Settings for fetching, parsing and caching feeds.

    Values are clamped to their floors on construction, when loaded from
    ``FEED4J_*`` environment variables, and on assignment. The ``set_*``
    methods assign and return the same instance so calls can be chained::

        config = Feed4jConfig().set_max_threads(4).set_user_agent("MyApp/2.0")
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="FEED4J_",
        extra="ignore",
        validate_assignment=True,
    )

    # Item parsing
    max_threads: int = Field(default_factory=lambda: os.cpu_count() or 1)

    # HTTP
    connect_timeout_ms: int = 10000  # 10 seconds
    read_timeout_ms: int = 30000  # 30 seconds
    user_agent: str = DEFAULT_USER_AGENT

    # XML
    validate_xml: bool = False

    # Cache
    cache_duration_ms: int = 300000  # 5 minutes

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="text", pattern="^(text|json)$")

    @field_validator("max_threads")
    @classmethod
    def _clamp_max_threads(cls, value: int) -> int:
        return max(MIN_THREADS, value)

    @field_validator("connect_timeout_ms", "read_timeout_ms")
    @classmethod
    def _clamp_timeout(cls, value: int) -> int:
        return max(MIN_TIMEOUT_MS, value)

    @field_validator("cache_duration_ms")
    @classmethod
    def _clamp_cache_duration(cls, value: int) -> int:
        return max(0, value)

    @field_validator("user_agent", mode="before")
    @classmethod
    def _default_user_agent(cls, value: str | None) -> str:
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_USER_AGENT
        return value

    def set_max_threads(self, max_threads: int) -> "Feed4jConfig":
        self.max_threads = max_threads
        return self

    def set_connect_timeout_ms(self, timeout_ms: int) -> "Feed4jConfig":
        self.connect_timeout_ms = timeout_ms
        return self

    def set_read_timeout_ms(self, timeout_ms: int) -> "Feed4jConfig":
        self.read_timeout_ms = timeout_ms
        return self

    def set_user_agent(self, user_agent: str | None) -> "Feed4jConfig":
        self.user_agent = user_agent  # type: ignore[assignment]
        return self

    def set_validate_xml(self, validate_xml: bool) -> "Feed4jConfig":
        self.validate_xml = validate_xml
        return self

    def set_cache_duration_ms(self, duration_ms: int) -> "Feed4jConfig":
        self.cache_duration_ms = duration_ms
        return self


_config: Feed4jConfig | None = None


def get_default_config() -> Feed4jConfig:
    """Get cached default config instance (singleton pattern)."""
    global _config
    if _config is None:
        _config = Feed4jConfig()
    return _config
