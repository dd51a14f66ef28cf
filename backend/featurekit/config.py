"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Settings come from FEATUREKIT_* environment variables or a .env file
    - get_settings() is cached (lru_cache), one instance per process
    - The pure core never reads settings; only api/ does

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - translate_validation_errors defaults to False: unwrapped validation failures
      surface as 500s until the host opts in to client-error semantics
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """featurekit settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="FEATUREKIT_", case_sensitive=False,
    )

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    # Response adapter
    translate_validation_errors: bool = False
    validation_error_status: int = 400

    @field_validator("validation_error_status")
    @classmethod
    def check_client_error_status(cls, v: int) -> int:
        """Translated validation failures must be 4xx."""
        if not 400 <= v <= 499:
            raise ValueError(f"validation_error_status must be 4xx, got {v}")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
