"""Environment-level configuration.

Deployment concerns (bind address, CORS, log level, game lifetime) live here, apart from
the game constants in engine_core.state.
"""

from __future__ import annotations
import os
from dataclasses import dataclass, field


@dataclass
class Settings:
    """Environment / deployment settings."""

    env: str = "development"
    log_level: str = "INFO"
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])
    host: str = "0.0.0.0"
    port: int = 3000
    # Games older than this are ended when a new game is created; None disables
    game_ttl_seconds: int | None = 3600

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables."""
        return cls(
            env=os.getenv("MTGSIM_ENV", "development"),
            log_level=os.getenv("MTGSIM_LOG_LEVEL", "INFO").upper(),
            allowed_origins=[
                origin.strip()
                for origin in os.getenv("ALLOWED_ORIGINS", "*").split(",")
                if origin.strip()
            ],
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3000")),
            game_ttl_seconds=_ttl(os.getenv("MTGSIM_GAME_TTL", "3600")),
        )


def _ttl(value: str) -> int | None:
    seconds = int(value)
    return seconds if seconds > 0 else None


def get_settings() -> Settings:
    """Convenience accessor for environment settings."""
    return Settings.from_env()
