"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - step_delay_ms is the one pacing knob of the traversal engine

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for every setting: works out-of-the-box
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from graphwalk.core.domain_types import Locale


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Traversal pacing: pause after every node marked visiting
    step_delay_ms: int = 500

    # UI
    default_locale: Locale = Locale.FR

    @field_validator("step_delay_ms")
    @classmethod
    def non_negative_delay(cls, v: int) -> int:
        if v < 0:
            raise ValueError("step_delay_ms must be >= 0")
        return v

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
