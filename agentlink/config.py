"""Configuration management for AgentLink"""

import os
from dataclasses import dataclass, asdict
from typing import Optional


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


@dataclass
class Config:
    """Base configuration."""
    # Webhooks
    GITHUB_WEBHOOK_SECRET: Optional[str] = None
    WEBHOOK_RATE_LIMIT: str = "100/minute"

    # Rate limiter storage (Flask-Limiter reads RATELIMIT_*)
    RATELIMIT_STORAGE_URI: str = "memory://"
    RATELIMIT_ENABLED: bool = True

    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False
    TESTING: bool = False

    @classmethod
    def from_env(cls) -> "Config":
        """Build a configuration from environment variables"""
        return cls(
            GITHUB_WEBHOOK_SECRET=os.getenv("GITHUB_WEBHOOK_SECRET"),
            WEBHOOK_RATE_LIMIT=os.getenv("WEBHOOK_RATE_LIMIT", cls.WEBHOOK_RATE_LIMIT),
            RATELIMIT_STORAGE_URI=os.getenv("RATELIMIT_STORAGE_URI", cls.RATELIMIT_STORAGE_URI),
            RATELIMIT_ENABLED=_env_flag("RATELIMIT_ENABLED", "true"),
            LOG_LEVEL=os.getenv("LOG_LEVEL", cls.LOG_LEVEL).upper(),
        )

    def to_mapping(self) -> dict:
        """Flask-compatible mapping of settings"""
        return asdict(self)

    def __repr__(self) -> str:
        # Keep the webhook secret out of logs and tracebacks
        secret = "***" if self.GITHUB_WEBHOOK_SECRET else None
        return (
            f"{type(self).__name__}(GITHUB_WEBHOOK_SECRET={secret!r}, "
            f"WEBHOOK_RATE_LIMIT={self.WEBHOOK_RATE_LIMIT!r}, "
            f"RATELIMIT_STORAGE_URI={self.RATELIMIT_STORAGE_URI!r}, "
            f"LOG_LEVEL={self.LOG_LEVEL!r})"
        )

@dataclass(repr=False)
class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG: bool = True
    LOG_LEVEL: str = "DEBUG"

@dataclass(repr=False)
class ProductionConfig(Config):
    """Production configuration."""
    DEBUG: bool = False

@dataclass(repr=False)
class TestingConfig(Config):
    """Testing configuration."""
    TESTING: bool = True
    GITHUB_WEBHOOK_SECRET: Optional[str] = "test-webhook-secret"
    RATELIMIT_ENABLED: bool = False


CONFIGS = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}


def get_config(name: Optional[str] = None) -> Config:
    """Return the configuration for an environment name.

    Development and production settings are read from the environment;
    testing settings are fixed.
    """
    name = (name or os.getenv("AGENTLINK_ENV", "production")).lower()
    if name not in CONFIGS:
        raise ValueError(f"Unknown configuration: {name}")
    config_class = CONFIGS[name]
    if config_class is TestingConfig:
        return TestingConfig()
    return config_class.from_env()
